"""Shared test fixtures for jsonapi-deserializer.

The registry mirrors a small blog-like schema: a ``test`` model with a
to-one ``child`` and to-many ``children``, a ``child`` model with a ``deep``
relationship, and a leaf ``child2`` model.
"""
from __future__ import annotations

import pytest

from jsonapi_deserializer import JSONAPIDeserializer, ModelDefinition, ModelRegistry


class Model:
    pass


class Child:
    pass


class Child2:
    pass


@pytest.fixture()
def registry() -> ModelRegistry:
    return ModelRegistry(
        [
            ModelDefinition("test", Model),
            ModelDefinition("child", Child, plural="children"),
            ModelDefinition("child2", Child2),
        ]
    )


@pytest.fixture()
def deserializer(registry: ModelRegistry) -> JSONAPIDeserializer:
    return JSONAPIDeserializer(registry)
