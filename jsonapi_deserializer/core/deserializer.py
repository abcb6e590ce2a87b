"""Deserialize JSON:API documents into registered model instances."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from jsonapi_deserializer.core.errors import (
    DocumentParseError,
    ErrorsWithDataError,
    InvalidInputError,
    InvalidResourceError,
    MalformedErrorsError,
    MissingDataError,
    MissingIdError,
    MissingTypeError,
    TypeMismatchError,
    UnknownTypeError,
    UpstreamErrorsError,
)
from jsonapi_deserializer.registry.base import ModelRegistry
from jsonapi_deserializer.schemas.resource import (
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

logger = logging.getLogger(__name__)

ResourceKey = tuple[str, Any]


class JSONAPIDeserializer:
    """Turn JSON:API documents into model instances.

    ``registry`` resolves resource types to model definitions. When
    ``require_id`` is False, resources may omit ``id`` (client-generated
    resources awaiting a server-assigned id).
    """

    registry: ModelRegistry | None = None
    require_id: bool = True

    def __init__(
        self,
        registry: ModelRegistry | None = None,
        *,
        require_id: bool | None = None,
    ) -> None:
        if registry is not None:
            self.registry = registry
        if require_id is not None:
            self.require_id = require_id

    def get_registry(self) -> ModelRegistry:
        if self.registry is None:
            raise ValueError("registry must be set.")
        return self.registry

    def load(self, document: Any) -> Any:
        """Decode JSON text or UTF-8 bytes; other values are returned unchanged."""
        if not isinstance(document, (str, bytes, bytearray)):
            return document
        try:
            if isinstance(document, (bytes, bytearray)):
                document = document.decode("utf-8")
            return json.loads(document)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DocumentParseError(f"Could not parse document: {exc}") from exc

    def deserialize(self, document: Any, type_: str | None = None) -> Any:
        """Return the instance (or list of instances) held in ``document``.

        ``type_`` is the expected model type, matched against the singular
        and plural names of each resource's model. None accepts any type.
        """
        obj = self.load(document)
        if not isinstance(obj, Mapping):
            raise InvalidInputError("Expected an object.")

        # A document holds at least one of "data", "errors" or "meta". Errors
        # are checked first; "meta" is ignored.
        if "errors" in obj:
            errors = obj["errors"]
            if (
                not isinstance(errors, list)
                or not errors
                or not all(isinstance(error, Mapping) for error in errors)
            ):
                raise MalformedErrorsError(
                    'The "errors" member must be an array of error objects.'
                )
            if "data" in obj:
                raise ErrorsWithDataError(
                    'The "errors" member must not be present alongside the "data" member.'
                )
            raise UpstreamErrorsError(
                "Expected an instance to deserialize but got errors instead. "
                'Inspect the "errors" property for details.',
                errors=errors,
            )

        if "data" not in obj:
            raise MissingDataError('Expected "data" property.')

        included = obj.get("included")
        if included is None:
            included = []
        elif not isinstance(included, list):
            raise InvalidInputError('The "included" member must be an array.')
        included = tuple(included)

        data = obj["data"]
        if isinstance(data, list):
            return [self.resolve(item, type_, included) for item in data]
        return self.resolve(data, type_, included)

    def resolve(
        self,
        resource: Any,
        expected_type: str | None,
        included: Sequence[Any] = (),
        path: tuple[ResourceKey, ...] = (),
    ) -> Any:
        """Build one model instance and attach its related resources.

        ``path`` holds the ``(type, id)`` keys of the resources being resolved
        above this one; a relationship pointing back into it is left as a raw id.
        """
        if not isinstance(resource, Mapping):
            raise InvalidResourceError("Expected a resource object.")

        type_ = resource.get("type")
        if not isinstance(type_, str):
            raise MissingTypeError('Expected "type" property to be a string.')

        id_ = resource.get("id")
        if self.require_id and not isinstance(id_, str):
            raise MissingIdError('Expected "id" property to be a string.')

        definition = self.get_registry().get(type_)
        if definition is None:
            raise UnknownTypeError(type_)
        if expected_type is not None and not definition.matches(expected_type):
            raise TypeMismatchError(expected_type, definition.singular)

        try:
            parsed = JSONAPIResource.model_validate(dict(resource))
        except ValidationError as exc:
            raise InvalidResourceError(
                f'Invalid resource object of type "{type_}": {exc}'
            ) from exc

        logger.debug("Resolving %s resource %r", type_, id_)
        instance = definition.construct(parsed.attributes or {})

        if parsed.relationships:
            child_path = (*path, (type_, id_))
            for name, relationship in parsed.relationships.items():
                value = self._resolve_relationship(name, relationship, included, child_path)
                if value is None:
                    continue
                definition.set_relationship(instance, name, value)

        # JSON:API forbids "type" and "id" in attributes, so these never clash.
        definition.assign_identity(instance, type_, id_)
        return instance

    def _resolve_relationship(
        self,
        name: str,
        relationship: JSONAPIRelationship,
        included: Sequence[Any],
        path: tuple[ResourceKey, ...],
    ) -> Any:
        """Return the value for one relationship, or None when it has no linkage."""
        # Linkage to a client-local resource ("lid" only) has nothing to match.
        identifiers = [item for item in relationship.identifiers() if item.id is not None]
        if relationship.is_to_many:
            keys = {(identifier.type, identifier.id) for identifier in identifiers}
            matches = [item for item in included if _resource_key(item) in keys]
            if not matches:
                logger.debug("No included resources for to-many relationship %r", name)
                return [identifier.id for identifier in identifiers]
            return [self._resolve_included(item, included, path) for item in matches]

        if not identifiers:
            return None
        identifier = identifiers[0]
        match = _find_included(identifier, included)
        if match is None:
            logger.debug("No included resource for relationship %r", name)
            return identifier.id
        return self._resolve_included(match, included, path)

    def _resolve_included(
        self,
        item: Mapping[str, Any],
        included: Sequence[Any],
        path: tuple[ResourceKey, ...],
    ) -> Any:
        key = _resource_key(item)
        if key in path:
            logger.debug("Relationship cycle at %s resource %r; keeping id", *key)
            return key[1]
        return self.resolve(item, item["type"], included, path)


def _resource_key(item: Any) -> ResourceKey | None:
    if not isinstance(item, Mapping):
        return None
    return item.get("type"), item.get("id")


def _find_included(
    identifier: JSONAPIResourceIdentifier, included: Sequence[Any]
) -> Mapping[str, Any] | None:
    key = (identifier.type, identifier.id)
    for item in included:
        if _resource_key(item) == key:
            return item
    return None


def deserialize(
    registry: ModelRegistry,
    document: Any,
    type_: str | None = None,
    *,
    require_id: bool = True,
) -> Any:
    """Deserialize ``document`` against ``registry``.

    Shortcut for ``JSONAPIDeserializer(registry, require_id=...).deserialize``.
    """
    return JSONAPIDeserializer(registry, require_id=require_id).deserialize(document, type_)
