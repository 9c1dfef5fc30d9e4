"""Errors raised by domain objects when handed data that breaks their rules."""


class DomainError(Exception):
    """Base exception for the domain layer."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({extra})"


class ValidationError(DomainError):
    """A field value is out of range, e.g. a negative review counter."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value
