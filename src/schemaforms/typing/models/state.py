"""Read-only views of form controller state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from schemaforms.typing.enums import SubmissionPhase
from schemaforms.typing.models.schema import SchemaModel


class FormSnapshot(BaseModel):
    """Copy of the controller state handed to the view layer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_model: SchemaModel
    values: dict[str, str] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    phase: SubmissionPhase = SubmissionPhase.IDLE
    load_error: str | None = None

    @property
    def is_valid(self) -> bool:
        """Return whether no field currently shows an error."""
        return not any(self.errors.values())

    @property
    def is_busy(self) -> bool:
        """Return whether a submission is in flight."""
        return self.phase == SubmissionPhase.SUBMITTING

    def value_of(self, field_id: str) -> str:
        """Return the current value of `field_id`, empty when untouched."""
        return self.values.get(field_id, "")

    def error_of(self, field_id: str) -> str:
        """Return the current error of `field_id`, empty when none."""
        return self.errors.get(field_id, "")
