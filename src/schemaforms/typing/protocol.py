"""Interfaces of the collaborators the form core talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from schemaforms.typing.models import FieldDescriptor, FormSnapshot


class SubmitEffect(Protocol):
    """Asynchronous action performed with validated form values."""

    async def __call__(self, values: dict[str, str]) -> None:
        """Deliver values.

        Args:
            values: Snapshot of the validated form values.

        Raises:
            Exception: Any exception signals a failed submission.
        """


class FieldRenderer(Protocol):
    """Turns one field descriptor and its state into displayable lines."""

    def render(self, descriptor: FieldDescriptor, value: str, error: str) -> list[str]:
        """Render a field.

        Args:
            descriptor: Field definition.
            value: Current value, empty when untouched.
            error: Current error message, empty when none.

        Returns:
            list[str]: Rendered lines.
        """


class SnapshotListener(Protocol):
    """Callback notified after every controller state change."""

    def __call__(self, snapshot: FormSnapshot) -> None:
        """Receive the new state."""
