"""Tests for jsonapi_deserializer.registry."""
from __future__ import annotations

import pytest

from jsonapi_deserializer import ModelDefinition, ModelRegistry


class Article:
    pass


class Person:
    def __init__(self) -> None:
        self.name = "anonymous"


def test_plural_defaults_to_singular_plus_s() -> None:
    definition = ModelDefinition("article", Article)
    assert definition.plural == "articles"
    assert definition.matches("article")
    assert definition.matches("articles")
    assert not definition.matches("person")


def test_singular_is_required() -> None:
    with pytest.raises(ValueError):
        ModelDefinition("", Article)


def test_construct_copies_all_attributes_without_fields() -> None:
    instance = ModelDefinition("article", Article).construct({"title": "JSON:API", "body": "..."})
    assert isinstance(instance, Article)
    assert instance.title == "JSON:API"
    assert instance.body == "..."


def test_construct_copies_only_declared_fields() -> None:
    definition = ModelDefinition("person", Person, plural="people", fields=["name"])
    instance = definition.construct({"name": "Jane", "admin": True})
    assert instance.name == "Jane"
    assert not hasattr(instance, "admin")


def test_construct_keeps_defaults_for_missing_attributes() -> None:
    instance = ModelDefinition("person", Person).construct({})
    assert instance.name == "anonymous"


def test_registry_looks_up_by_singular_and_plural() -> None:
    definition = ModelDefinition("person", Person, plural="people")
    registry = ModelRegistry([definition])
    assert registry.get("person") is definition
    assert registry.get("people") is definition
    assert registry.get("persons") is None
    assert "people" in registry


def test_registry_iterates_each_definition_once() -> None:
    registry = ModelRegistry()
    article = registry.register(ModelDefinition("article", Article))
    person = registry.register(ModelDefinition("person", Person, plural="people"))
    assert list(registry) == [article, person]
    assert len(registry) == 2


def test_registry_rejects_conflicting_names() -> None:
    registry = ModelRegistry([ModelDefinition("article", Article)])
    with pytest.raises(ValueError, match="already registered"):
        registry.register(ModelDefinition("post", Person, plural="articles"))


def test_registering_same_definition_twice_is_allowed() -> None:
    definition = ModelDefinition("article", Article)
    registry = ModelRegistry([definition])
    registry.register(definition)
    assert len(registry) == 1
