from __future__ import annotations

import asyncio
import json

import httpx

from schemaforms.controller import FormController
from schemaforms.effects import HttpSubmitEffect
from schemaforms.rendering import render_form
from schemaforms.schema_loader import load_schema_or_raise
from schemaforms.settings import Settings
from schemaforms.typing.enums import SubmissionPhase, SubmitOutcome

_URL = "https://forms.example.test/submit"


def test_survey_is_edited_rejected_fixed_and_posted(survey_text: str) -> None:
    received: list[dict] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        received.append(json.loads(request.content))
        return httpx.Response(200)

    async def _scenario() -> list[SubmitOutcome]:
        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            effect = HttpSubmitEffect(_URL, settings=Settings(), client=client)
            controller = FormController(load_schema_or_raise(survey_text), effect)
            outcomes = []

            controller.on_value_change("email", "ada@")
            outcomes.append(await controller.on_submit())
            assert controller.errors["name"] == "This field is required"
            assert controller.errors["email"] == "Please enter a valid email address"
            assert "! This field is required" in render_form(controller.snapshot())

            controller.on_value_change("name", "Ada Lovelace")
            controller.on_value_change("email", "ada@example.com")
            controller.on_value_change("timeline", "q2")
            controller.on_value_change("code", "ENG-042")
            outcomes.append(await controller.on_submit())

            assert controller.phase == SubmissionPhase.IDLE
            assert controller.values == {}
            return outcomes

    outcomes = asyncio.run(_scenario())

    assert outcomes == [SubmitOutcome.INVALID, SubmitOutcome.SUBMITTED]
    assert received == [
        {"name": "Ada Lovelace", "email": "ada@example.com", "timeline": "q2", "code": "ENG-042"},
    ]


def test_editor_reload_keeps_last_good_schema(survey_text: str) -> None:
    controller = FormController(load_schema_or_raise(survey_text), HttpSubmitEffect(_URL, settings=Settings()))
    controller.on_value_change("name", "Ada")

    select_without_options = json.dumps(
        {
            "formTitle": "Broken",
            "formDescription": "Missing options",
            "fields": [{"id": "pick", "type": "select", "label": "Pick", "required": True, "options": []}],
        },
    )
    error = controller.load_text(select_without_options)

    assert error is not None
    assert controller.schema.title == "Project Requirements Survey"
    assert controller.values == {"name": "Ada"}
    snapshot = controller.snapshot()
    assert snapshot.load_error == str(error)
    assert f"! {error}" in render_form(snapshot)
