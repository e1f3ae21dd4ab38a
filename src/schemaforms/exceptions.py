"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


class StructuralError(PackageError):
    """Base class for defects found in a schema document at load time."""


@dataclass(frozen=True)
class MalformedDocumentError(StructuralError):
    """Raised when the schema document cannot be parsed at all."""

    reason: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Malformed schema document: {self.reason}"


@dataclass(frozen=True)
class MissingFieldError(StructuralError):
    """Raised when a top-level schema key is missing or has the wrong type."""

    name: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing or invalid top-level key '{self.name}'"


@dataclass(frozen=True)
class InvalidFieldError(StructuralError):
    """Raised when one field entry violates the schema shape."""

    field_id: str
    reason: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid field '{self.field_id}': {self.reason}"


@dataclass(frozen=True)
class InvalidPatternError(StructuralError):
    """Raised when a validation pattern does not compile."""

    field_id: str
    reason: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid validation pattern on field '{self.field_id}': {self.reason}"


@dataclass(frozen=True)
class UnknownFieldError(PackageError):
    """Raised when an edit targets a field id the active schema does not define."""

    field_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Unknown field id '{self.field_id}'"


@dataclass(frozen=True)
class SubmitFailedError(PackageError):
    """Raised when the submit effect signals failure."""

    cause: BaseException
    message: str = "Form submission failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.cause}"


@dataclass(frozen=True)
class SubmitTransportError(PackageError):
    """Raised when a submit effect cannot deliver the values."""

    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
