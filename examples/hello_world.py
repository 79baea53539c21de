"""
Demonstrates defining a small controller and preparing requests for it.
Shows query, path, header and body parameters and the resulting wire pieces.
"""

from apiwire import ClientConfig, ControllerDef, OperationDef, ParamSpec, RequestMarshaller
from apiwire.exceptions import PathVariableMissing

hello_controller = ControllerDef(
    name="hello",
    operations={
        "hello": OperationDef.get("/hello", {"message": ParamSpec.query()}),
        "rename": OperationDef.put(
            "/greetings/{greetingId}",
            {
                "greeting_id": ParamSpec.path("greetingId"),
                "request_id": ParamSpec.header("X-Request-Id"),
                "text": ParamSpec.body_text(),
            },
        ),
    },
)


def main():
    """Prepare a few requests and print them"""
    marshaller = RequestMarshaller(
        hello_controller, ClientConfig(endpoint="http://localhost:8080")
    )

    print("\n🌐 Simple query:")
    request = marshaller.prepare("hello", {"message": "hi there"})
    print(f"{request.method} {request.url}")

    print("\n📝 Path, header and text body:")
    request = marshaller.prepare(
        "rename", {"greeting_id": "g/1", "request_id": "r-42", "text": "Howdy"}
    )
    print(f"{request.method} {request.url}")
    for name, value in request.headers.items():
        print(f"  {name}: {value}")
    print(f"  body: {request.body!r}")

    print("\n❌ Missing path variable:")
    try:
        marshaller.prepare("rename", {"text": "Howdy"})
    except PathVariableMissing as exc:
        print(f"{exc.error_code}: {exc.message}")


if __name__ == "__main__":
    main()
