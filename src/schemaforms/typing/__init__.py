"""Typing-centric domain modules."""

from schemaforms.typing.enums import FieldKind, SubmissionPhase, SubmitOutcome
from schemaforms.typing.models import (
    FieldDescriptor,
    FieldErrors,
    FieldOption,
    FormSnapshot,
    FormValues,
    SchemaModel,
    ValidationRule,
)
from schemaforms.typing.protocol import FieldRenderer, SnapshotListener, SubmitEffect

__all__ = [
    "FieldDescriptor",
    "FieldErrors",
    "FieldKind",
    "FieldOption",
    "FieldRenderer",
    "FormSnapshot",
    "FormValues",
    "SchemaModel",
    "SnapshotListener",
    "SubmissionPhase",
    "SubmitEffect",
    "SubmitOutcome",
    "ValidationRule",
]
