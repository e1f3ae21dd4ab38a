"""Per-field and whole-form validation.

Author patterns use Python `re` syntax and are applied with `search`, so they
are unanchored unless the author anchors them. In that dialect `$` also matches
just before a trailing newline: `^\d+$` accepts `"123\n"`. Authors who need a
strict end of input write `\Z`. The built-in email shape is always matched
against the whole value.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from schemaforms.typing.enums import FieldKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from schemaforms.typing.models import FieldDescriptor, FieldErrors, SchemaModel

REQUIRED_MESSAGE = "This field is required"
INVALID_FORMAT_MESSAGE = "Invalid format"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"

_EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_field(descriptor: FieldDescriptor, value: str) -> str | None:
    """Validate one value against its field descriptor.

    Checks run in a fixed order and the first failure wins: required-ness,
    then the author pattern, then the built-in email shape. Whitespace is not
    trimmed, so a blank-but-nonempty value satisfies `required`.

    Args:
        descriptor (FieldDescriptor): Field definition.
        value (str): Candidate value.

    Returns:
        str | None: Error message, or None when the value is acceptable.
    """
    if not value:
        return REQUIRED_MESSAGE if descriptor.required else None

    rule = descriptor.validation
    if rule is not None and rule.compiled is not None and rule.compiled.search(value) is None:
        return rule.message or INVALID_FORMAT_MESSAGE

    if descriptor.kind == FieldKind.EMAIL and _EMAIL_SHAPE.fullmatch(value) is None:
        return INVALID_EMAIL_MESSAGE

    return None


def validate_form(schema: SchemaModel, values: Mapping[str, str]) -> FieldErrors:
    """Validate every schema field against the current values.

    Args:
        schema (SchemaModel): Active schema.
        values (Mapping[str, str]): Current values; absent ids count as empty.

    Returns:
        FieldErrors: Exactly one entry per schema field, "" meaning no error.
    """
    return {
        descriptor.id: validate_field(descriptor, values.get(descriptor.id, "")) or ""
        for descriptor in schema.fields
    }


def is_form_valid(errors: Mapping[str, str]) -> bool:
    """Return whether an error map holds no error message."""
    return all(not message for message in errors.values())


def first_error(schema: SchemaModel, errors: Mapping[str, str]) -> tuple[str, str] | None:
    """Return the first failing `(field_id, message)` in render order."""
    for field_id in schema.field_ids:
        message = errors.get(field_id, "")
        if message:
            return field_id, message
    return None
