"""Deserialization errors and their JSON:API error documents."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from jsonapi_deserializer.schemas.resource import JSONAPIErrorDocument, JSONAPIErrorObject


class DeserializationError(Exception):
    """Base class for every failure raised while deserializing a document."""

    status: str = "400"
    code: str = "invalid_document"
    title: str = "Invalid JSON:API document"

    @property
    def detail(self) -> str:
        return str(self)


class InvalidInputError(DeserializationError):
    """The input is not a JSON object."""

    code = "invalid_input"


class DocumentParseError(InvalidInputError):
    """The input text could not be parsed as JSON."""

    code = "parse_error"
    title = "Malformed JSON"


class MalformedErrorsError(DeserializationError):
    """The "errors" member is not a non-empty array."""

    code = "malformed_errors"


class ErrorsWithDataError(DeserializationError):
    """The "errors" member appears alongside "data"."""

    code = "errors_with_data"


class UpstreamErrorsError(DeserializationError):
    """The document is a valid errors document.

    The original error objects are kept on ``errors``.
    """

    code = "upstream_errors"
    title = "Document contains errors"

    def __init__(self, message: str, *, errors: list[Any]) -> None:
        super().__init__(message)
        self.errors = errors

    @property
    def error_objects(self) -> list[JSONAPIErrorObject]:
        """The carried errors parsed into models.

        Raises ``pydantic.ValidationError`` if an error object is malformed.
        """
        return JSONAPIErrorDocument.model_validate({"errors": self.errors}).errors


class MissingDataError(DeserializationError):
    """The document has no "data" member."""

    code = "missing_data"


class InvalidResourceError(DeserializationError):
    """A resource object has the wrong shape."""

    code = "invalid_resource"
    title = "Invalid resource object"


class MissingTypeError(InvalidResourceError):
    """A resource object has no string "type"."""

    code = "missing_type"


class MissingIdError(InvalidResourceError):
    """A resource object has no string "id" where one is required."""

    code = "missing_id"


class ConflictError(DeserializationError):
    """Base class for errors an HTTP layer should answer with 409 Conflict."""

    status = "409"
    code = "conflict"
    title = "Conflict"


class UnknownTypeError(ConflictError):
    """No model is registered for the resource type."""

    code = "unknown_type"

    def __init__(self, type_: str) -> None:
        super().__init__(f'No model for type "{type_}".')
        self.type = type_


class TypeMismatchError(ConflictError):
    """The resource type does not match the expected model."""

    code = "type_mismatch"

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected {expected} model but got {actual}.")
        self.expected = expected
        self.actual = actual


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents.

    HTTP-facing callers use :meth:`document_from_exception` to answer a
    failed deserialization; the response status is ``exc.status``.
    """

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object holding the members that were given."""
        members = {
            "status": status,
            "code": code,
            "title": title,
            "detail": detail,
            "source": source,
            "meta": meta,
        }
        error = {key: value for key, value in members.items() if value is not None}
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def from_exception(self, exc: DeserializationError) -> list[dict[str, Any]]:
        """Return the JSON:API error objects describing a deserialization failure.

        An :class:`UpstreamErrorsError` yields the error objects the document
        carried. Any other failure yields a single error object.
        """
        if isinstance(exc, UpstreamErrorsError):
            return [dict(error) for error in exc.errors]
        return [
            self.error_object(
                status=exc.status,
                code=exc.code,
                title=exc.title,
                detail=exc.detail,
            )
        ]

    def error_document(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": [dict(error) for error in errors]}

    def document_from_exception(self, exc: DeserializationError) -> dict[str, Any]:
        return self.error_document(self.from_exception(exc))
