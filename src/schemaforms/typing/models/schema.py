"""Schema-centric domain models."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from schemaforms.typing.enums import FieldKind


class ValidationRule(BaseModel):
    """Author-supplied pattern/message pair constraining a field value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: str | None = None
    message: str | None = None
    _compiled: re.Pattern[str] | None = PrivateAttr(default=None)

    @field_validator("pattern")
    @classmethod
    def pattern_must_compile(cls, value: str | None) -> str | None:
        """Reject patterns that do not compile."""
        if value is not None:
            try:
                re.compile(value)
            except (re.error, OverflowError, RecursionError) as exc:
                raise ValueError(f"pattern does not compile: {exc}") from exc
        return value

    def model_post_init(self, __context: object, /) -> None:
        """Cache the compiled pattern."""
        if self.pattern is not None:
            self._compiled = re.compile(self.pattern)

    @property
    def compiled(self) -> re.Pattern[str] | None:
        """Return the compiled pattern, if any."""
        return self._compiled


class FieldOption(BaseModel):
    """One selectable choice of a `select` or `radio` field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: str
    label: str


class FieldDescriptor(BaseModel):
    """Single form field definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    kind: FieldKind
    label: str
    required: bool = False
    placeholder: str | None = None
    validation: ValidationRule | None = None
    options: tuple[FieldOption, ...] = ()

    @model_validator(mode="after")
    def check_options(self) -> FieldDescriptor:
        """Require unique options on choice kinds."""
        if not self.kind.requires_options:
            return self
        if not self.options:
            raise ValueError(f"'{self.kind}' field '{self.id}' requires a non-empty options list")
        values = [option.value for option in self.options]
        if len(set(values)) != len(values):
            raise ValueError(f"field '{self.id}' has duplicate option values")
        return self


class SchemaModel(BaseModel):
    """Typed representation of a form: copy plus ordered fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    description: str
    fields: tuple[FieldDescriptor, ...] = Field(default_factory=tuple)
    _index: dict[str, FieldDescriptor] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_unique_ids(self) -> SchemaModel:
        """Reject schemas reusing a field id."""
        seen: set[str] = set()
        for descriptor in self.fields:
            if descriptor.id in seen:
                raise ValueError(f"duplicate field id '{descriptor.id}'")
            seen.add(descriptor.id)
        return self

    def model_post_init(self, __context: object, /) -> None:
        """Index descriptors by id."""
        self._index = {descriptor.id: descriptor for descriptor in self.fields}

    @property
    def field_ids(self) -> list[str]:
        """Return field ids in render order."""
        return [descriptor.id for descriptor in self.fields]

    def field(self, field_id: str) -> FieldDescriptor | None:
        """Return the descriptor for `field_id`, if the schema defines it."""
        return self._index.get(field_id)
