"""Parameter and operation definition models.

An operation is described by its HTTP method, a path template and an input
definition mapping each logical property name to a ``ParamSpec`` that says
where the value travels on the wire.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from apiwire.constants import ContentType
from apiwire.exceptions import DefinitionError, OperationNotFound


class ParamLocation(str, Enum):
    """Where a parameter is placed in an HTTP request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"


class BodyKind(str, Enum):
    """Serialization policy for the body parameter."""

    JSON = "json"
    TEXT = "text"
    BINARY = "binary"

    @property
    def content_type(self) -> ContentType:
        return _BODY_CONTENT_TYPES[self]


_BODY_CONTENT_TYPES = {
    BodyKind.JSON: ContentType.JSON,
    BodyKind.TEXT: ContentType.TEXT,
    BodyKind.BINARY: ContentType.OCTET_STREAM,
}

# Location tags that select a body kind
_BODY_TAGS = {
    "body": BodyKind.JSON,
    "body-text": BodyKind.TEXT,
    "body-binary": BodyKind.BINARY,
}


class ParamSpec(BaseModel):
    """Declares the location and wire name of one input property.

    Attributes:
        location: Request location of the value
        name: Wire-level name; defaults to the property name
        body_kind: Body serialization policy, only set for body parameters
        description: Optional human-readable description
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    location: ParamLocation
    name: Optional[str] = None
    body_kind: Optional[BodyKind] = None
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _expand_body_tag(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        location = data.get("location")
        tag = getattr(location, "value", location)
        if tag not in _BODY_TAGS:
            return data
        kind = _BODY_TAGS[tag]
        if tag == "body" and data.get("body_kind") is not None:
            kind = data["body_kind"]
        elif data.get("body_kind") not in (None, kind, kind.value):
            raise ValueError(
                f"Location '{tag}' conflicts with body_kind '{data['body_kind']}'"
            )
        return {**data, "location": ParamLocation.BODY, "body_kind": kind}

    @model_validator(mode="after")
    def _check_body_kind(self) -> "ParamSpec":
        if self.location is not ParamLocation.BODY and self.body_kind is not None:
            raise ValueError(
                f"body_kind is only valid for body parameters, not '{self.location.value}'"
            )
        return self

    @property
    def is_body(self) -> bool:
        return self.location is ParamLocation.BODY

    def wire_name(self, property_name: str) -> str:
        """Return the name transmitted for this parameter."""
        return self.name or property_name

    @classmethod
    def path(cls, name: Optional[str] = None, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.PATH, name=name, **kwargs)

    @classmethod
    def query(cls, name: Optional[str] = None, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.QUERY, name=name, **kwargs)

    @classmethod
    def header(cls, name: Optional[str] = None, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.HEADER, name=name, **kwargs)

    @classmethod
    def cookie(cls, name: Optional[str] = None, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.COOKIE, name=name, **kwargs)

    @classmethod
    def body(cls, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.BODY, body_kind=BodyKind.JSON, **kwargs)

    @classmethod
    def body_text(cls, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.BODY, body_kind=BodyKind.TEXT, **kwargs)

    @classmethod
    def body_binary(cls, **kwargs: Any) -> "ParamSpec":
        return cls(location=ParamLocation.BODY, body_kind=BodyKind.BINARY, **kwargs)


InputDefinition = Dict[str, ParamSpec]


def body_properties(definition: Mapping[str, ParamSpec]) -> List[str]:
    """Return the property names declared with a body location."""
    return [name for name, spec in definition.items() if spec.is_body]


def validate_input_definition(definition: Mapping[str, ParamSpec]) -> None:
    """Reject definitions declaring more than one body parameter.

    Raises:
        DefinitionError: If two or more properties are body parameters
    """
    bodies = body_properties(definition)
    if len(bodies) > 1:
        raise DefinitionError(
            f"At most one body parameter is allowed, found {len(bodies)}: "
            + ", ".join(bodies),
            details={"properties": bodies},
        )


class OperationDef(BaseModel):
    """Definition of one HTTP operation.

    Attributes:
        method: HTTP method, any case
        path: Path template with ``{name}`` placeholders, starting with ``/``
        input_def: Input definition, in query-output order
        description: Optional human-readable description
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    input_def: InputDefinition = Field(default_factory=dict)
    description: Optional[str] = None

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise DefinitionError(
                f"Path template must start with '/': '{value}'",
                details={"path": value},
            )
        return value

    @model_validator(mode="after")
    def _check_single_body(self) -> "OperationDef":
        validate_input_definition(self.input_def)
        return self

    @classmethod
    def get(
        cls,
        path: str,
        input_def: Optional[InputDefinition] = None,
        **kwargs: Any,
    ) -> "OperationDef":
        return cls(method="get", path=path, input_def=input_def or {}, **kwargs)

    @classmethod
    def post(
        cls,
        path: str,
        input_def: Optional[InputDefinition] = None,
        **kwargs: Any,
    ) -> "OperationDef":
        return cls(method="post", path=path, input_def=input_def or {}, **kwargs)

    @classmethod
    def put(
        cls,
        path: str,
        input_def: Optional[InputDefinition] = None,
        **kwargs: Any,
    ) -> "OperationDef":
        return cls(method="put", path=path, input_def=input_def or {}, **kwargs)

    @classmethod
    def patch(
        cls,
        path: str,
        input_def: Optional[InputDefinition] = None,
        **kwargs: Any,
    ) -> "OperationDef":
        return cls(method="patch", path=path, input_def=input_def or {}, **kwargs)

    @classmethod
    def delete(
        cls,
        path: str,
        input_def: Optional[InputDefinition] = None,
        **kwargs: Any,
    ) -> "OperationDef":
        return cls(method="delete", path=path, input_def=input_def or {}, **kwargs)


class ControllerDef(BaseModel):
    """A named group of operations."""

    name: Optional[str] = None
    operations: Dict[str, OperationDef] = Field(default_factory=dict)

    def operation(self, name: str) -> OperationDef:
        """Look up an operation by name.

        Raises:
            OperationNotFound: If no operation has that name
        """
        try:
            return self.operations[name]
        except KeyError:
            raise OperationNotFound(name) from None


__all__ = [
    "ParamLocation",
    "BodyKind",
    "ParamSpec",
    "InputDefinition",
    "OperationDef",
    "ControllerDef",
    "body_properties",
    "validate_input_definition",
]
