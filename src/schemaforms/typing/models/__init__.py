"""Core domain model exports."""

from schemaforms.typing.models.schema import FieldDescriptor, FieldOption, SchemaModel, ValidationRule
from schemaforms.typing.models.state import FormSnapshot

FormValues = dict[str, str]
FieldErrors = dict[str, str]

__all__ = [
    "FieldDescriptor",
    "FieldErrors",
    "FieldOption",
    "FormSnapshot",
    "FormValues",
    "SchemaModel",
    "ValidationRule",
]
