"""SQLAlchemy helpers for JSON:API."""

from .definition import SQLAlchemyModelDefinition

__all__ = ["SQLAlchemyModelDefinition"]
