"""Pytest marker auto-assignment by folder and shared schema fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from schemaforms import logger
from schemaforms.settings import get_settings
from schemaforms.typing.enums import FieldKind
from schemaforms.typing.models import FieldDescriptor, FieldOption, SchemaModel, ValidationRule

SURVEY_DOCUMENT = {
    "formTitle": "Project Requirements Survey",
    "formDescription": "Please fill out this survey about your project needs",
    "fields": [
        {"id": "name", "type": "text", "label": "Full name", "required": True, "placeholder": "Jane Doe"},
        {"id": "email", "type": "email", "label": "Email", "required": True},
        {
            "id": "budget",
            "type": "select",
            "label": "Budget",
            "required": False,
            "options": [
                {"value": "small", "label": "< 10k"},
                {"value": "large", "label": ">= 10k"},
            ],
        },
        {
            "id": "timeline",
            "type": "radio",
            "label": "Timeline",
            "required": True,
            "options": [
                {"value": "q1", "label": "Q1"},
                {"value": "q2", "label": "Q2"},
            ],
        },
        {
            "id": "code",
            "type": "text",
            "label": "Project code",
            "required": False,
            "validation": {"pattern": "^[A-Z]{3}-\\d{3}$", "message": "Use the format ABC-123"},
        },
        {"id": "notes", "type": "textarea", "label": "Notes", "required": False},
    ],
}


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


_ENV_KEYS = ("SUBMIT_URL", "SUBMIT_TIMEOUT", "SUBMIT_DELAY", "HTTPS_PROXY", "CERT_PATH", "LOG_FILE")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
        monkeypatch.delenv(key.lower(), raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def survey_text() -> str:
    return json.dumps(SURVEY_DOCUMENT)


@pytest.fixture
def survey_document() -> dict:
    return json.loads(json.dumps(SURVEY_DOCUMENT))


@pytest.fixture
def contact_schema() -> SchemaModel:
    return SchemaModel(
        title="Contact",
        description="Get in touch",
        fields=(
            FieldDescriptor(id="name", kind=FieldKind.TEXT, label="Name", required=True),
            FieldDescriptor(id="email", kind=FieldKind.EMAIL, label="Email", required=False),
            FieldDescriptor(
                id="topic",
                kind=FieldKind.SELECT,
                label="Topic",
                required=False,
                options=(FieldOption(value="sales", label="Sales"), FieldOption(value="support", label="Support")),
            ),
            FieldDescriptor(
                id="zip",
                kind=FieldKind.TEXT,
                label="ZIP",
                required=False,
                validation=ValidationRule(pattern=r"^\d{5}$"),
            ),
        ),
    )
