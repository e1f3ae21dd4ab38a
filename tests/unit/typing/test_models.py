from __future__ import annotations

import pytest
from pydantic import ValidationError

from schemaforms.typing.enums import FieldKind, SubmissionPhase
from schemaforms.typing.models import FieldDescriptor, FieldOption, FormSnapshot, SchemaModel, ValidationRule


def _text(field_id: str) -> FieldDescriptor:
    return FieldDescriptor(id=field_id, kind=FieldKind.TEXT, label=field_id.title())


def test_schema_rejects_duplicate_field_ids() -> None:
    with pytest.raises(ValidationError, match="duplicate field id 'a'"):
        SchemaModel(title="T", description="D", fields=(_text("a"), _text("a")))


def test_schema_looks_up_fields_in_render_order() -> None:
    schema = SchemaModel(title="T", description="D", fields=(_text("b"), _text("a")))

    assert schema.field_ids == ["b", "a"]
    assert schema.field("a") == _text("a")
    assert schema.field("missing") is None


def test_schema_is_immutable() -> None:
    schema = SchemaModel(title="T", description="D", fields=(_text("a"),))

    with pytest.raises(ValidationError):
        schema.title = "Other"


def test_select_requires_options() -> None:
    with pytest.raises(ValidationError, match="requires a non-empty options list"):
        FieldDescriptor(id="s", kind=FieldKind.SELECT, label="S")


def test_radio_rejects_duplicate_option_values() -> None:
    options = (FieldOption(value="x", label="X"), FieldOption(value="x", label="Again"))

    with pytest.raises(ValidationError, match="duplicate option values"):
        FieldDescriptor(id="r", kind=FieldKind.RADIO, label="R", options=options)


def test_option_labels_may_repeat() -> None:
    options = (FieldOption(value="x", label="Same"), FieldOption(value="y", label="Same"))

    descriptor = FieldDescriptor(id="r", kind=FieldKind.RADIO, label="R", options=options)

    assert len(descriptor.options) == 2


def test_validation_rule_rejects_bad_pattern() -> None:
    with pytest.raises(ValidationError, match="pattern does not compile"):
        ValidationRule(pattern="(")


def test_validation_rule_rejects_oversized_repetition() -> None:
    with pytest.raises(ValidationError, match="pattern does not compile"):
        ValidationRule(pattern="a{99999999999}")


def test_validation_rule_caches_compiled_pattern() -> None:
    rule = ValidationRule(pattern=r"^\d+$", message="Digits only")

    assert rule.compiled is not None
    assert rule.compiled.search("123")
    assert ValidationRule().compiled is None


def test_snapshot_helpers() -> None:
    schema = SchemaModel(title="T", description="D", fields=(_text("a"),))
    snapshot = FormSnapshot(
        schema_model=schema,
        values={"a": "x"},
        errors={"a": ""},
        phase=SubmissionPhase.SUBMITTING,
    )

    assert snapshot.is_valid
    assert snapshot.is_busy
    assert snapshot.value_of("a") == "x"
    assert snapshot.value_of("b") == ""
    assert snapshot.error_of("a") == ""
