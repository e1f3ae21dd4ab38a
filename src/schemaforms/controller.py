"""Form state machine driving edits, validation and submission."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemaforms import logger
from schemaforms.exceptions import StructuralError, SubmitFailedError, UnknownFieldError
from schemaforms.schema_loader import load_schema
from schemaforms.typing.enums import SubmissionPhase, SubmitOutcome
from schemaforms.typing.models import FormSnapshot
from schemaforms.validation import is_form_valid, validate_field, validate_form

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from schemaforms.typing.models import FieldDescriptor, FieldErrors, FormValues, SchemaModel
    from schemaforms.typing.protocol import SnapshotListener, SubmitEffect


class FormController:
    """Owns the values, errors and submission phase of one rendered form.

    All operations are expected to be called from a single event loop. The
    awaited submit effect is the only suspension point: while it runs, edits
    keep being accepted and further submits are ignored.
    """

    def __init__(
        self,
        schema: SchemaModel,
        submit_effect: SubmitEffect,
        *,
        initial_values: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            schema (SchemaModel): Schema to serve.
            submit_effect (SubmitEffect): Effect awaited with validated values.
            initial_values (Mapping[str, str] | None): Explicitly initialized values.

        Raises:
            UnknownFieldError: If an initial value targets an id the schema does not define.
        """
        self._schema = schema
        self._submit_effect = submit_effect
        self._values: FormValues = {}
        self._errors: FieldErrors = {}
        self._phase = SubmissionPhase.IDLE
        self._load_error: StructuralError | None = None
        self._generation = 0
        self._listeners: list[SnapshotListener] = []

        for field_id, value in (initial_values or {}).items():
            self._descriptor(field_id)
            self._values[field_id] = value

    @property
    def schema(self) -> SchemaModel:
        """Return the active schema."""
        return self._schema

    @property
    def phase(self) -> SubmissionPhase:
        """Return the current submission phase."""
        return self._phase

    @property
    def values(self) -> FormValues:
        """Return a copy of the current values."""
        return dict(self._values)

    @property
    def errors(self) -> FieldErrors:
        """Return a copy of the current field errors."""
        return dict(self._errors)

    @property
    def load_error(self) -> StructuralError | None:
        """Return the defect of the last rejected schema load, if any."""
        return self._load_error

    def value_of(self, field_id: str) -> str:
        """Return the value of `field_id`, empty when untouched."""
        return self._values.get(field_id, "")

    def snapshot(self) -> FormSnapshot:
        """Return a read-only copy of the state for the view layer."""
        return FormSnapshot(
            schema_model=self._schema,
            values=dict(self._values),
            errors=dict(self._errors),
            phase=self._phase,
            load_error=str(self._load_error) if self._load_error else None,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every state change.

        Args:
            listener (SnapshotListener): Callback to register.

        Returns:
            Callable[[], None]: Function removing the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_value_change(self, field_id: str, new_value: str) -> None:
        """Store a new value and revalidate that field only.

        Args:
            field_id (str): Edited field.
            new_value (str): New raw value.

        Raises:
            UnknownFieldError: If the active schema does not define `field_id`.
        """
        descriptor = self._descriptor(field_id)
        self._values[field_id] = new_value
        self._errors[field_id] = validate_field(descriptor, new_value) or ""
        self._notify()

    async def on_submit(self) -> SubmitOutcome:
        """Validate the whole form and run the submit effect when it passes.

        Raises:
            SubmitFailedError: If the submit effect fails; values are kept.

        Returns:
            SubmitOutcome: How the attempt ended.
        """
        if self._phase == SubmissionPhase.SUBMITTING:
            logger.info("Submit ignored while another submission is in flight")
            return SubmitOutcome.IGNORED

        errors = validate_form(self._schema, self._values)
        if not is_form_valid(errors):
            self._errors = errors
            self._notify()
            failing = [field_id for field_id, message in errors.items() if message]
            logger.info("Submit blocked by validation errors", extra={"field_ids": failing})
            return SubmitOutcome.INVALID

        generation = self._generation
        payload = dict(self._values)
        self._set_phase(SubmissionPhase.SUBMITTING)
        logger.info("Submit started", extra={"field_count": len(payload)})

        try:
            await self._submit_effect(payload)
        except Exception as exc:
            if generation != self._generation:
                logger.warning("Abandoned submission failed", extra={"error": str(exc)})
                return SubmitOutcome.ABANDONED
            self._set_phase(SubmissionPhase.IDLE)
            logger.warning("Submit failed", extra={"error": str(exc)})
            raise SubmitFailedError(cause=exc) from exc
        except BaseException:
            if generation == self._generation:
                self._set_phase(SubmissionPhase.IDLE)
            logger.info("Submit cancelled")
            raise

        if generation != self._generation:
            logger.info("Submission completed after schema reset; result ignored")
            return SubmitOutcome.ABANDONED

        self._set_phase(SubmissionPhase.SUCCEEDED)
        self._values = {}
        self._errors = {}
        self._set_phase(SubmissionPhase.IDLE)
        logger.info("Submit succeeded")
        return SubmitOutcome.SUBMITTED

    def reset(self, new_schema: SchemaModel) -> None:
        """Serve a new schema and drop all derived state.

        An in-flight submission is not cancelled, its completion is ignored.

        Args:
            new_schema (SchemaModel): Schema replacing the active one.
        """
        self._schema = new_schema
        self._values = {}
        self._errors = {}
        self._phase = SubmissionPhase.IDLE
        self._load_error = None
        self._generation += 1
        logger.info("Form reset", extra={"title": new_schema.title, "field_count": len(new_schema.fields)})
        self._notify()

    def load_text(self, raw_text: str) -> StructuralError | None:
        """Load a schema document and serve it when it is well formed.

        On failure the active schema stays in place and the defect is kept in
        `load_error` for display.

        Args:
            raw_text (str): JSON text of the schema document.

        Returns:
            StructuralError | None: The defect, or None when the schema was applied.
        """
        result = load_schema(raw_text)
        if isinstance(result, StructuralError):
            self._load_error = result
            self._notify()
            return result
        self.reset(result)
        return None

    def _descriptor(self, field_id: str) -> FieldDescriptor:
        descriptor = self._schema.field(field_id)
        if descriptor is None:
            raise UnknownFieldError(field_id=field_id)
        return descriptor

    def _set_phase(self, phase: SubmissionPhase) -> None:
        self._phase = phase
        self._notify()

    def _notify(self) -> None:
        """Hand a snapshot to every listener; a failing listener never aborts a transition."""
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed", extra={"phase": snapshot.phase.to_str()})
