"""Errors raised by the credit simulation core.

They say nothing about HTTP. entrypoints/http/exception_handlers.py turns
`error_code` into a status code and `to_dict()` into the response body.
"""

from typing import Any

FieldError = dict[str, str]  # {"field", "message", "code"?}


class DomainError(Exception):
    """Root of every simulation error.

    `context` holds whatever helps diagnose the failure (offending values,
    identifiers); it is flattened into `to_dict()`.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """Input or rate-table selection that cannot be priced (REST: 422).

    Either a single message (e.g. "vehicle_price must be > 0") or a list of
    field errors, or both. Without a message the default depends on whether
    field errors were given.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[FieldError] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundError(DomainError):
    """A saved simulation (or other resource) does not exist (REST: 404)."""

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)
