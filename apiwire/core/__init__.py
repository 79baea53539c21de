"""Core definition models and value serialization.

Backend-agnostic building blocks, safe to import from any layer.
"""

from .params import (
    BodyKind,
    ControllerDef,
    InputDefinition,
    OperationDef,
    ParamLocation,
    ParamSpec,
    body_properties,
    validate_input_definition,
)
from .serialization import is_binary, json_dumps, param_string_value

__all__ = [
    "BodyKind",
    "ControllerDef",
    "InputDefinition",
    "OperationDef",
    "ParamLocation",
    "ParamSpec",
    "body_properties",
    "validate_input_definition",
    "is_binary",
    "json_dumps",
    "param_string_value",
]
