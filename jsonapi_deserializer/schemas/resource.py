"""Pydantic schema templates for incoming JSON:API v1.1 documents."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id, or type + lid for client-local resources."""

    type: str
    id: Optional[str] = None
    lid: Optional[str] = None


class JSONAPIRelationship(BaseModel):
    """Relationship object; ``data`` holds the resource linkage."""

    data: Optional[Union[List[JSONAPIResourceIdentifier], JSONAPIResourceIdentifier]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def is_to_many(self) -> bool:
        return isinstance(self.data, list)

    def identifiers(self) -> List[JSONAPIResourceIdentifier]:
        """Return the linkage as a list, whatever its shape."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None


class JSONAPIErrorObject(BaseModel):
    """A single JSON:API error object. Every member is optional."""

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    errors: List[JSONAPIErrorObject]
