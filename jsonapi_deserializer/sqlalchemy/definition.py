"""Model definition for SQLAlchemy declarative models."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.inspection import inspect

from jsonapi_deserializer.registry.base import RESERVED_FIELDS, ModelDefinition

logger = logging.getLogger(__name__)


def _coerce(column: Any, value: Any) -> Any:
    """Convert a JSON:API string id to the column's Python type if possible."""
    if not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if python_type is str:
        return value
    try:
        return python_type(value)
    except (TypeError, ValueError):
        return value


class SQLAlchemyModelDefinition(ModelDefinition):
    """Build SQLAlchemy model instances from JSON:API resource objects.

    The type names default to the lower-cased class name (singular) and the
    table name (plural), matching the identifiers the JSON:API serializer
    emits. Allowed attributes default to the mapped columns, minus the
    primary key.
    """

    def __init__(
        self,
        model: Any,
        *,
        singular: str | None = None,
        plural: str | None = None,
        fields: tuple[str, ...] | list[str] = (),
    ) -> None:
        self._mapper = inspect(model)
        primary_keys = {column.key for column in self._mapper.primary_key}
        if not fields:
            fields = [
                attr.key
                for attr in self._mapper.column_attrs
                if attr.columns[0].key not in primary_keys and attr.key not in RESERVED_FIELDS
            ]
        super().__init__(
            singular or model.__name__.lower(),
            model,
            plural=plural or getattr(model, "__tablename__", None),
            fields=fields,
        )

    def construct(self, attributes: Mapping[str, Any]) -> Any:
        return self.model(**self.allowed_attributes(attributes))

    def set_relationship(self, instance: Any, name: str, value: Any) -> None:
        relationship = self._mapper.relationships.get(name)
        if relationship is None:
            setattr(instance, name, value)
            return

        if relationship.uselist:
            related = [item for item in value if not isinstance(item, str)]
            if related:
                setattr(instance, name, related)
            else:
                logger.debug("Skipping unresolved to-many relationship %r", name)
            return

        if not isinstance(value, str):
            setattr(instance, name, value)
            return

        # Unresolved to-one linkage: fall back to the "<name>_id" foreign key.
        attr_name = f"{name}_id"
        column_attr = self._mapper.column_attrs.get(attr_name)
        if column_attr is None:
            logger.debug("No %r column for unresolved relationship %r", attr_name, name)
            return
        setattr(instance, attr_name, _coerce(column_attr.columns[0], value))

    def assign_identity(self, instance: Any, type_: str, id_: Any) -> None:
        instance.type = type_
        if id_ is None:
            return
        primary_key = self._mapper.primary_key[0]
        attr = self._mapper.get_property_by_column(primary_key)
        setattr(instance, attr.key, _coerce(primary_key, id_))
