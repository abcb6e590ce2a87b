"""Core JSON:API deserialization and error helpers."""

from .deserializer import JSONAPIDeserializer, deserialize
from .errors import (
    ConflictError,
    DeserializationError,
    DocumentParseError,
    ErrorsWithDataError,
    InvalidInputError,
    InvalidResourceError,
    JSONAPIErrorBuilder,
    MalformedErrorsError,
    MissingDataError,
    MissingIdError,
    MissingTypeError,
    TypeMismatchError,
    UnknownTypeError,
    UpstreamErrorsError,
)

__all__ = [
    "JSONAPIDeserializer",
    "JSONAPIErrorBuilder",
    "deserialize",
    "ConflictError",
    "DeserializationError",
    "DocumentParseError",
    "ErrorsWithDataError",
    "InvalidInputError",
    "InvalidResourceError",
    "MalformedErrorsError",
    "MissingDataError",
    "MissingIdError",
    "MissingTypeError",
    "TypeMismatchError",
    "UnknownTypeError",
    "UpstreamErrorsError",
]
