"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldKind(_EnumMixin):
    """Supported form field kinds."""

    TEXT = "text"
    EMAIL = "email"
    SELECT = "select"
    RADIO = "radio"
    TEXTAREA = "textarea"

    @property
    def requires_options(self) -> bool:
        """Return whether fields of this kind must declare options."""
        return self in {FieldKind.SELECT, FieldKind.RADIO}


class SubmissionPhase(_EnumMixin):
    """Lifecycle stage of a form submit attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"


class SubmitOutcome(_EnumMixin):
    """Result of one `on_submit` call that did not fail."""

    IGNORED = "ignored"
    INVALID = "invalid"
    SUBMITTED = "submitted"
    ABANDONED = "abandoned"
