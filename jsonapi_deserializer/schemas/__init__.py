"""Pydantic schemas for JSON:API."""

from .resource import (
    JSONAPIErrorDocument,
    JSONAPIErrorObject,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

__all__ = [
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "JSONAPIRelationship",
    "JSONAPIErrorDocument",
    "JSONAPIErrorObject",
]
