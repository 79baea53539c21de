"""Test suite for request marshalling helpers."""

import json

import pytest

from apiwire.client.utils import (
    ClassifiedParams,
    build_headers,
    build_path,
    build_query,
    build_url,
    encode_cookies,
    get_http_method,
    params_by_location,
    percent_encode,
)
from apiwire.constants import ContentType
from apiwire.core.params import OperationDef, ParamLocation, ParamSpec
from apiwire.exceptions import DefinitionError, PathVariableMissing, ValueEncodingError


class TestBuildPath:
    """Test path template substitution."""

    def test_no_template_vars(self):
        """Test that a template without placeholders is returned unchanged."""
        assert build_path("/users", {"foo": "bar"}) == "/users"

    def test_expected_input(self):
        """Test substituting several placeholders."""
        result = build_path(
            "/users/{userId}/accounts/{accountId}",
            {"userId": "uid", "accountId": "aid"},
        )
        assert result == "/users/uid/accounts/aid"

    def test_additional_path_variables(self):
        """Test that unreferenced values are ignored."""
        assert build_path("/users/{userId}", {"userId": "uid", "foo": "bar"}) == (
            "/users/uid"
        )

    def test_missing_path_variable(self):
        """Test that a missing placeholder value raises."""
        with pytest.raises(PathVariableMissing) as exc_info:
            build_path("/users/{userId}/accounts/{accountId}", {"userId": "uid"})

        assert exc_info.value.variable == "accountId"
        assert exc_info.value.template == "/users/{userId}/accounts/{accountId}"
        assert "accountId" in str(exc_info.value)

    def test_empty_path_variable(self):
        """Test that an empty placeholder value raises."""
        with pytest.raises(PathVariableMissing):
            build_path("/users/{userId}", {"userId": ""})

    def test_encodes_uri(self):
        """Test that substituted values are percent-encoded."""
        assert build_path("/users/{userId}", {"userId": " { / } "}) == (
            "/users/%20%7B%20%2F%20%7D%20"
        )


class TestPercentEncode:
    """Test URI component encoding."""

    def test_unreserved_characters_kept(self):
        """Test that unreserved characters pass through."""
        assert percent_encode("aZ09-_.!~*'()") == "aZ09-_.!~*'()"

    def test_reserved_characters_encoded(self):
        """Test that reserved characters are encoded."""
        assert percent_encode("a&b=c?d/e") == "a%26b%3Dc%3Fd%2Fe"

    def test_non_ascii_encoded_as_utf8(self):
        """Test that non-ASCII text is UTF-8 percent-encoded."""
        assert percent_encode("é") == "%C3%A9"


class TestBuildQuery:
    """Test query string serialization."""

    def test_empty_params(self):
        """Test that no values produce an empty string."""
        assert build_query({}) == ""

    def test_many_params(self):
        """Test that values are joined in insertion order."""
        assert build_query({"k1": "v1", "k2": "v2", "k3": "v3"}) == (
            "?k1=v1&k2=v2&k3=v3"
        )

    def test_encodes_keys_and_values(self):
        """Test that keys and values are percent-encoded."""
        assert build_query({" /// ": " { / } "}) == "?%20%2F%2F%2F%20=%20%7B%20%2F%20%7D%20"


class TestBuildUrl:
    """Test URL assembly."""

    def test_empty_input(self):
        """Test endpoint plus a static path."""
        assert build_url("http://localhost:8080", "/hello", {}, {}) == (
            "http://localhost:8080/hello"
        )

    def test_path_and_query(self):
        """Test that placeholders and query string are both resolved."""
        result = build_url(
            "http://localhost:8080",
            "/users/{userId}",
            {"userId": "u 1"},
            {"q": "a&b", "page": "2"},
        )
        assert result == "http://localhost:8080/users/u%201?q=a%26b&page=2"


class TestEncodeCookies:
    """Test cookie header encoding."""

    def test_empty_cookies(self):
        """Test that no cookies encode to None."""
        assert encode_cookies({}) is None

    def test_many_cookies(self):
        """Test that cookies are joined with semicolons."""
        assert encode_cookies({"k1": "v1", "k2": "v2"}) == "k1=v1;k2=v2"

    def test_cookies_not_encoded(self):
        """Test that cookie values are not percent-encoded."""
        assert encode_cookies({"k": "a b"}) == "k=a b"


class TestBuildHeaders:
    """Test header assembly."""

    def test_empty(self):
        """Test that nothing is added without cookies or body."""
        assert build_headers({}, {}, None) == {}

    def test_cookie_header(self):
        """Test that cookies produce a Cookie header."""
        assert build_headers({}, {"k1": "v1", "k2": "v2"}, None) == {
            "Cookie": "k1=v1;k2=v2"
        }

    def test_content_type_header(self):
        """Test that a body type produces a Content-Type header."""
        headers = build_headers({"X-Trace": "abc"}, {}, ContentType.JSON)
        assert headers == {"X-Trace": "abc", "Content-Type": "application/json"}

    def test_content_type_from_string(self):
        """Test that a plain content-type string is accepted."""
        headers = build_headers({}, {}, "text/plain")
        assert headers == {"Content-Type": "text/plain"}

    def test_mutates_given_headers(self):
        """Test that the supplied dict is filled in and returned."""
        headers = {"Accept": "application/json"}
        result = build_headers(headers, {"session": "s1"}, ContentType.TEXT)

        assert result is headers
        assert headers["Cookie"] == "session=s1"
        assert headers["Content-Type"] == "text/plain"


class TestGetHttpMethod:
    """Test method normalization."""

    @pytest.mark.parametrize(
        "method,expected",
        [
            ("delete", "DELETE"),
            ("get", "GET"),
            ("patch", "PATCH"),
            ("post", "POST"),
            ("put", "PUT"),
        ],
    )
    def test_operation_method(self, method, expected):
        """Test upper-casing an operation's method."""
        operation = OperationDef(method=method, path="/")
        assert get_http_method(operation) == expected

    def test_plain_string(self):
        """Test that mixed-case strings are normalized."""
        assert get_http_method("Get") == "GET"


class TestParamsByLocation:
    """Test routing of input values into request locations."""

    def test_empty_input(self):
        """Test that an empty definition yields empty buckets."""
        result = params_by_location({}, {})

        assert result.cookie == {}
        assert result.header == {}
        assert result.path == {}
        assert result.query == {}
        assert result.body is None
        assert result.body_type is None

    def test_simple(self):
        """Test a single query value."""
        result = params_by_location(
            {"paramName": ParamSpec.query("paramName")}, {"paramName": "value"}
        )
        assert result.query == {"paramName": "value"}

    def test_extracts_string_value(self):
        """Test that non-string values are stringified."""
        result = params_by_location({"paramName": ParamSpec.path()}, {"paramName": 6})
        assert result.path == {"paramName": "6"}

    def test_filters_out_none_values(self):
        """Test that None and missing values are skipped."""
        definition = {
            "p1": ParamSpec.header(),
            "p2": ParamSpec.header(),
            "p3": ParamSpec.header(),
        }
        result = params_by_location(definition, {"p1": None, "p2": "v2"})
        assert result.header == {"p2": "v2"}

    def test_none_body_is_skipped(self):
        """Test that a None body leaves body and content type unset."""
        result = params_by_location({"data": ParamSpec.body()}, {"data": None})

        assert result.body is None
        assert result.body_type is None

    def test_ignores_undefined_values(self):
        """Test that values without a definition entry are ignored."""
        result = params_by_location(
            {"p1": ParamSpec.query()}, {"p1": "v1", "extra": "ignored"}
        )
        assert result.query == {"p1": "v1"}

    def test_wire_name_override(self):
        """Test that a name override becomes the wire key."""
        definition = {"p1": ParamSpec.query("p1"), "p2": ParamSpec.query("newP2")}
        result = params_by_location(definition, {"p1": "v1", "p2": "v2"})
        assert result.query == {"p1": "v1", "newP2": "v2"}

    def test_query_order_follows_definition(self):
        """Test that query values keep definition order."""
        definition = {"b": ParamSpec.query(), "a": ParamSpec.query()}
        result = params_by_location(definition, {"a": "1", "b": "2"})
        assert list(result.query) == ["b", "a"]

    def test_all_locations(self):
        """Test routing to every location at once."""
        definition = {
            "user_id": ParamSpec.path("userId"),
            "verbose": ParamSpec.query(),
            "trace": ParamSpec.header("X-Trace-Id"),
            "session": ParamSpec.cookie(),
        }
        values = {"user_id": 42, "verbose": True, "trace": "t-1", "session": "s"}
        result = params_by_location(definition, values)

        assert result.path == {"userId": "42"}
        assert result.query == {"verbose": "true"}
        assert result.header == {"X-Trace-Id": "t-1"}
        assert result.cookie == {"session": "s"}

    def test_body_text(self):
        """Test a plain-text body."""
        result = params_by_location({"data": ParamSpec.body_text()}, {"data": "value"})

        assert result.body == "value"
        assert result.body_type is ContentType.TEXT

    def test_body_binary(self):
        """Test that a binary body passes through unchanged."""
        payload = b"\x00\x01value"
        result = params_by_location({"data": ParamSpec.body_binary()}, {"data": payload})

        assert result.body is payload
        assert result.body_type is ContentType.OCTET_STREAM

    def test_body_json(self):
        """Test a JSON body."""
        result = params_by_location({"data": ParamSpec.body()}, {"data": {"msg": "value"}})

        assert json.loads(result.body) == {"msg": "value"}
        assert result.body_type is ContentType.JSON

    def test_body_json_string_passes_through(self):
        """Test that pre-serialized JSON text is sent unchanged."""
        result = params_by_location({"data": ParamSpec.body()}, {"data": '{"a":1}'})

        assert result.body == '{"a":1}'
        assert result.body_type is ContentType.JSON

    def test_body_json_large_integer(self):
        """Test that a top-level large integer body is decimal text."""
        result = params_by_location({"data": ParamSpec.body()}, {"data": 2**60})
        assert result.body == "1152921504606846976"

    def test_body_json_non_finite_float(self):
        """Test that NaN inside a JSON body becomes null."""
        result = params_by_location(
            {"data": ParamSpec.body()}, {"data": {"x": float("nan")}}
        )
        assert result.body == '{"x":null}'

    def test_binary_header_value_decoded(self):
        """Test that bytes in a header are decoded, not repr'd."""
        result = params_by_location({"h": ParamSpec.header()}, {"h": b"abc"})
        assert result.header == {"h": "abc"}

    def test_binary_body_text_decoded(self):
        """Test that bytes in a text body are decoded as UTF-8."""
        result = params_by_location(
            {"data": ParamSpec.body_text()}, {"data": "héllo".encode("utf-8")}
        )

        assert result.body == "héllo"
        assert result.body_type is ContentType.TEXT

    def test_invalid_utf8_query_value(self):
        """Test that undecodable bytes in a query value raise."""
        with pytest.raises(ValueEncodingError):
            params_by_location({"q": ParamSpec.query()}, {"q": b"\xff\xfe"})

    def test_plain_dict_definition_with_two_bodies(self):
        """Test that two body parameters are rejected."""
        definition = {"a": ParamSpec.body(), "b": ParamSpec.body_text()}
        with pytest.raises(DefinitionError):
            params_by_location(definition, {"a": {}, "b": "x"})

    def test_bucket_rejects_body(self):
        """Test that the body location has no string bucket."""
        with pytest.raises(ValueError):
            ClassifiedParams().bucket(ParamLocation.BODY)
