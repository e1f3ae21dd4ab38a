"""Plain-text rendering of form snapshots.

This is a view-layer helper: each `FieldKind` maps to one renderer from a
small closed set, and the form core never imports this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemaforms.typing.enums import FieldKind, SubmissionPhase

if TYPE_CHECKING:
    from schemaforms.typing.models import FieldDescriptor, FormSnapshot
    from schemaforms.typing.protocol import FieldRenderer

SELECT_PROMPT = "Select an option"


class InputRenderer:
    """Single-line input, used by `text` and `email` fields."""

    def render(self, descriptor: FieldDescriptor, value: str, error: str) -> list[str]:  # noqa: ARG002
        """Render the current value or the placeholder."""
        if value:
            return [f"  [{value}]"]
        return [f"  [{descriptor.placeholder or ''}]"]


class TextAreaRenderer:
    """Multi-line input."""

    def render(self, descriptor: FieldDescriptor, value: str, error: str) -> list[str]:  # noqa: ARG002
        """Render each line of the value inside a box margin."""
        lines = value.splitlines() or [descriptor.placeholder or ""]
        return [f"  | {line}" for line in lines]


class SelectRenderer:
    """Drop-down with an empty leading choice."""

    def render(self, descriptor: FieldDescriptor, value: str, error: str) -> list[str]:  # noqa: ARG002
        """Render the selected option label, or the prompt when nothing is chosen."""
        labels = {option.value: option.label for option in descriptor.options}
        return [f"  <{labels.get(value, SELECT_PROMPT)}>"]


class RadioRenderer:
    """One line per option, the chosen one marked."""

    def render(self, descriptor: FieldDescriptor, value: str, error: str) -> list[str]:  # noqa: ARG002
        """Render every option with its checked state."""
        return [
            f"  ({'x' if option.value == value else ' '}) {option.label}" for option in descriptor.options
        ]


RENDERERS: dict[FieldKind, FieldRenderer] = {
    FieldKind.TEXT: InputRenderer(),
    FieldKind.EMAIL: InputRenderer(),
    FieldKind.TEXTAREA: TextAreaRenderer(),
    FieldKind.SELECT: SelectRenderer(),
    FieldKind.RADIO: RadioRenderer(),
}


def render_field(descriptor: FieldDescriptor, value: str, error: str) -> list[str]:
    """Render one field with its label line and error line.

    Args:
        descriptor (FieldDescriptor): Field definition.
        value (str): Current value.
        error (str): Current error message, empty when none.

    Returns:
        list[str]: Rendered lines.
    """
    marker = " *" if descriptor.required else ""
    lines = [f"{descriptor.label}{marker}"]
    lines.extend(RENDERERS[descriptor.kind].render(descriptor, value, error))
    if error:
        lines.append(f"  ! {error}")
    return lines


def render_form(snapshot: FormSnapshot) -> str:
    """Render a whole form snapshot as text.

    Args:
        snapshot (FormSnapshot): State to render.

    Returns:
        str: Rendered form.
    """
    schema = snapshot.schema_model
    lines = [schema.title, "=" * len(schema.title), schema.description, ""]
    if snapshot.load_error:
        lines.extend([f"! {snapshot.load_error}", ""])
    for descriptor in schema.fields:
        lines.extend(render_field(descriptor, snapshot.value_of(descriptor.id), snapshot.error_of(descriptor.id)))
        lines.append("")
    button = "Submitting..." if snapshot.phase == SubmissionPhase.SUBMITTING else "Submit"
    lines.append(f"[ {button} ]")
    return "\n".join(lines)
