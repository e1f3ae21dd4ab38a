"""Turn raw schema documents into `SchemaModel` instances.

The loader checks the *shape* of a document, never the values a user may
enter. Every defect is reported as a `StructuralError` value: `load_schema`
returns it instead of raising, so a host can keep displaying the last good
schema next to the error.

Accepted document shape::

    {
      "formTitle": "...",
      "formDescription": "...",
      "fields": [
        {
          "id": "email",
          "type": "email",
          "label": "Email",
          "required": true,
          "placeholder": "you@example.com",
          "validation": {"pattern": "...", "message": "..."},
          "options": [{"value": "a", "label": "A"}]
        }
      ]
    }
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from schemaforms import logger
from schemaforms.exceptions import (
    InvalidFieldError,
    InvalidPatternError,
    MalformedDocumentError,
    MissingFieldError,
    StructuralError,
)
from schemaforms.typing.enums import FieldKind
from schemaforms.typing.models import FieldDescriptor, FieldOption, SchemaModel, ValidationRule

if TYPE_CHECKING:
    from pathlib import Path

_TOP_LEVEL_KEYS: tuple[tuple[str, type], ...] = (
    ("formTitle", str),
    ("formDescription", str),
    ("fields", list),
)


def load_schema(raw_text: str) -> SchemaModel | StructuralError:
    """Parse and check a schema document.

    Args:
        raw_text (str): JSON text of the schema document.

    Returns:
        SchemaModel | StructuralError: The schema, or the first structural defect found.
    """
    try:
        result = _build_schema(raw_text)
    except StructuralError as error:
        logger.info("Schema rejected", extra={"error": str(error), "error_type": type(error).__name__})
        return error
    logger.info("Schema loaded", extra={"title": result.title, "field_count": len(result.fields)})
    return result


def load_schema_or_raise(raw_text: str) -> SchemaModel:
    """Parse and check a schema document, raising on defects.

    Args:
        raw_text (str): JSON text of the schema document.

    Raises:
        StructuralError: If the document is not a well-formed schema.

    Returns:
        SchemaModel: Loaded schema.
    """
    result = load_schema(raw_text)
    if isinstance(result, StructuralError):
        raise result
    return result


def load_schema_file(path: Path) -> SchemaModel | StructuralError:
    """Read a UTF-8 schema file and load it with `load_schema`.

    Args:
        path (Path): Schema file path.

    Returns:
        SchemaModel | StructuralError: The schema, or the structural defect found.
    """
    return load_schema(path.read_text(encoding="utf-8"))


def _build_schema(raw_text: str) -> SchemaModel:
    try:
        document = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(reason=str(exc)) from exc
    except RecursionError as exc:
        raise MalformedDocumentError(reason="document is nested too deeply") from exc
    if not isinstance(document, dict):
        raise MalformedDocumentError(reason=f"expected a JSON object, got {type(document).__name__}")

    for key, expected in _TOP_LEVEL_KEYS:
        if not isinstance(document.get(key), expected):
            raise MissingFieldError(name=key)

    descriptors: list[FieldDescriptor] = []
    seen_ids: set[str] = set()
    for position, entry in enumerate(document["fields"]):
        descriptor = _build_field(entry, position)
        if descriptor.id in seen_ids:
            raise InvalidFieldError(field_id=descriptor.id, reason="duplicate field id")
        seen_ids.add(descriptor.id)
        descriptors.append(descriptor)

    return SchemaModel(
        title=document["formTitle"],
        description=document["formDescription"],
        fields=tuple(descriptors),
    )


def _build_field(entry: Any, position: int) -> FieldDescriptor:  # noqa: ANN401
    """Check one raw field entry and build its descriptor.

    Args:
        entry (Any): Raw field entry.
        position (int): Index of the entry in `fields`, used when it has no usable id.

    Raises:
        InvalidFieldError: If the entry violates the field shape.
        InvalidPatternError: If its validation pattern does not compile.

    Returns:
        FieldDescriptor: Built descriptor.
    """
    fallback_id = f"fields[{position}]"
    if not isinstance(entry, dict):
        raise InvalidFieldError(field_id=fallback_id, reason="field entry must be an object")

    field_id = entry.get("id")
    if not isinstance(field_id, str) or not field_id:
        raise InvalidFieldError(field_id=fallback_id, reason="'id' must be a non-empty string")

    raw_kind = entry.get("type")
    try:
        kind = FieldKind.from_str(raw_kind) if isinstance(raw_kind, str) else None
    except ValueError as exc:
        raise InvalidFieldError(field_id=field_id, reason=str(exc)) from exc
    if kind is None:
        raise InvalidFieldError(field_id=field_id, reason="'type' must be a string")

    label = entry.get("label")
    if not isinstance(label, str):
        raise InvalidFieldError(field_id=field_id, reason="'label' must be a string")
    required = entry.get("required")
    if not isinstance(required, bool):
        raise InvalidFieldError(field_id=field_id, reason="'required' must be a boolean")
    placeholder = entry.get("placeholder")
    if placeholder is not None and not isinstance(placeholder, str):
        raise InvalidFieldError(field_id=field_id, reason="'placeholder' must be a string")

    validation = _build_rule(field_id, entry.get("validation"))
    # Options on kinds that do not use them are tolerated and dropped.
    options = _build_options(field_id, kind, entry.get("options")) if kind.requires_options else ()

    try:
        return FieldDescriptor(
            id=field_id,
            kind=kind,
            label=label,
            required=required,
            placeholder=placeholder,
            validation=validation,
            options=options,
        )
    except ValidationError as exc:
        raise InvalidFieldError(field_id=field_id, reason=str(exc)) from exc


def _build_rule(field_id: str, raw: Any) -> ValidationRule | None:  # noqa: ANN401
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise InvalidFieldError(field_id=field_id, reason="'validation' must be an object")

    pattern = raw.get("pattern")
    message = raw.get("message")
    if pattern is not None and not isinstance(pattern, str):
        raise InvalidFieldError(field_id=field_id, reason="'validation.pattern' must be a string")
    if message is not None and not isinstance(message, str):
        raise InvalidFieldError(field_id=field_id, reason="'validation.message' must be a string")

    if pattern is not None:
        try:
            re.compile(pattern)
        except (re.error, OverflowError, RecursionError) as exc:
            raise InvalidPatternError(field_id=field_id, reason=str(exc)) from exc
    return ValidationRule(pattern=pattern, message=message)


def _build_options(field_id: str, kind: FieldKind, raw: Any) -> tuple[FieldOption, ...]:  # noqa: ANN401
    if not isinstance(raw, list) or not raw:
        raise InvalidFieldError(field_id=field_id, reason=f"'{kind}' fields require a non-empty 'options' list")

    options: list[FieldOption] = []
    seen_values: set[str] = set()
    for option in raw:
        if not isinstance(option, dict):
            raise InvalidFieldError(field_id=field_id, reason="each option must be an object")
        value = option.get("value")
        label = option.get("label")
        if not isinstance(value, str) or not isinstance(label, str):
            raise InvalidFieldError(field_id=field_id, reason="option 'value' and 'label' must be strings")
        if value in seen_values:
            raise InvalidFieldError(field_id=field_id, reason=f"duplicate option value '{value}'")
        seen_values.add(value)
        options.append(FieldOption(value=value, label=label))
    return tuple(options)
