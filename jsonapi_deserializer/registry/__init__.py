"""Model registry for JSON:API deserialization."""

from .base import ModelDefinition, ModelRegistry

__all__ = ["ModelDefinition", "ModelRegistry"]
