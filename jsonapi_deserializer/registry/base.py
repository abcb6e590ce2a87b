"""Model definitions and the registry the deserializer dispatches on."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

RESERVED_FIELDS = frozenset({"type", "id"})


class ModelDefinition:
    """Factory for one domain model, looked up by JSON:API type name.

    The default implementation works with any class whose constructor takes
    no arguments: attributes are copied onto a fresh instance one by one.
    Only names listed in ``fields`` are copied; an empty ``fields`` allows
    every attribute except the reserved ``type`` and ``id``.
    """

    def __init__(
        self,
        singular: str,
        model: Any,
        *,
        plural: str | None = None,
        fields: tuple[str, ...] | list[str] = (),
    ) -> None:
        if not singular:
            raise ValueError("singular must be set.")
        self.singular = singular
        self.plural = plural or f"{singular}s"
        self.model = model
        self.fields = tuple(fields)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.singular!r}, {self.model!r})"

    def matches(self, type_name: str) -> bool:
        """Return True if ``type_name`` names this model."""
        return type_name in (self.singular, self.plural)

    def allowed_attributes(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        allowed = set(self.fields) if self.fields else None
        return {
            key: value
            for key, value in attributes.items()
            if key not in RESERVED_FIELDS and (allowed is None or key in allowed)
        }

    def construct(self, attributes: Mapping[str, Any]) -> Any:
        """Return a new model instance populated from ``attributes``."""
        instance = self.model()
        for key, value in self.allowed_attributes(attributes).items():
            setattr(instance, key, value)
        return instance

    def set_relationship(self, instance: Any, name: str, value: Any) -> None:
        """Attach a related instance, list of instances, or raw id(s)."""
        setattr(instance, name, value)

    def assign_identity(self, instance: Any, type_: str, id_: Any) -> None:
        instance.type = type_
        instance.id = id_


class ModelRegistry:
    """Map JSON:API type names to model definitions.

    Each definition is reachable by both its singular and plural name.
    """

    def __init__(self, definitions: list[ModelDefinition] | None = None) -> None:
        self._definitions: dict[str, ModelDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: ModelDefinition) -> ModelDefinition:
        """Add a definition; returns it so the call can be used inline."""
        for name in (definition.singular, definition.plural):
            existing = self._definitions.get(name)
            if existing is not None and existing is not definition:
                raise ValueError(f'Type name "{name}" is already registered.')
        self._definitions[definition.singular] = definition
        self._definitions[definition.plural] = definition
        return definition

    def get(self, type_name: str) -> ModelDefinition | None:
        """Return the definition for ``type_name``, or None."""
        return self._definitions.get(type_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._definitions

    def __iter__(self) -> Iterator[ModelDefinition]:
        seen: set[int] = set()
        for definition in self._definitions.values():
            if id(definition) not in seen:
                seen.add(id(definition))
                yield definition

    def __len__(self) -> int:
        return sum(1 for _ in self)
