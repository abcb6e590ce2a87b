"""Validating JSON:API v1.1 document deserializer."""

from .core.deserializer import JSONAPIDeserializer, deserialize
from .core.errors import ConflictError, DeserializationError, JSONAPIErrorBuilder
from .registry.base import ModelDefinition, ModelRegistry

__all__ = [
    "ConflictError",
    "DeserializationError",
    "JSONAPIDeserializer",
    "JSONAPIErrorBuilder",
    "ModelDefinition",
    "ModelRegistry",
    "deserialize",
]
