"""CLI entry point for schemaforms."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from schemaforms import __version__, logger
from schemaforms.async_runner import run_async
from schemaforms.controller import FormController
from schemaforms.effects import DelayedSubmitEffect, HttpSubmitEffect
from schemaforms.exceptions import PackageError, StructuralError, SubmitFailedError
from schemaforms.logging import configure_logging
from schemaforms.rendering import render_form
from schemaforms.schema_loader import load_schema_file
from schemaforms.settings import Settings, get_settings
from schemaforms.typing.enums import SubmitOutcome
from schemaforms.typing.models import FormSnapshot, SchemaModel
from schemaforms.typing.protocol import SubmitEffect
from schemaforms.validation import first_error, is_form_valid, validate_form


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="schemaforms")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Check that a schema document is well formed")
    check_parser.add_argument("schema_path", type=Path)

    preview_parser = subparsers.add_parser("preview", help="Render a schema as a text form")
    preview_parser.add_argument("schema_path", type=Path)
    preview_parser.add_argument("--values", type=Path, default=None, dest="values_path")

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON values file against a schema")
    validate_parser.add_argument("schema_path", type=Path)
    validate_parser.add_argument("values_path", type=Path)

    submit_parser = subparsers.add_parser("submit", help="Validate and submit a JSON values file")
    submit_parser.add_argument("schema_path", type=Path)
    submit_parser.add_argument("values_path", type=Path)
    submit_parser.add_argument("--url", default=None, help="Endpoint receiving the values (defaults to SUBMIT_URL)")

    return parser


def _load_schema_or_report(path: Path) -> SchemaModel | None:
    """Load a schema file, printing the structural error on failure.

    Args:
        path (Path): Schema file path.

    Returns:
        SchemaModel | None: Loaded schema, or None when it was rejected.
    """
    result = load_schema_file(path)
    if isinstance(result, StructuralError):
        print(f"error: {result}", file=sys.stderr)  # noqa: T201
        return None
    return result


def _read_values(path: Path) -> dict[str, str]:
    """Read a JSON object of string values.

    Args:
        path (Path): Values file path.

    Raises:
        ValueError: If the file is not a JSON object of strings.

    Returns:
        dict[str, str]: Values keyed by field id.
    """
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict) or not all(isinstance(value, str) for value in payload.values()):
        raise ValueError(f"{path} must contain a JSON object of string values")  # noqa: TRY004
    return payload


def _report_first_error(schema: SchemaModel, errors: dict[str, str]) -> None:
    failing = first_error(schema, errors)
    if failing is not None:
        field_id, message = failing
        print(f"error: {field_id}: {message}", file=sys.stderr)  # noqa: T201


def _build_effect(args: argparse.Namespace, settings: Settings) -> SubmitEffect:
    if args.url or settings.submit_url:
        return HttpSubmitEffect(args.url, settings=settings)
    return DelayedSubmitEffect(delay=settings.submit_delay)


def _run_check(args: argparse.Namespace) -> int:
    schema = _load_schema_or_report(args.schema_path)
    if schema is None:
        return 1
    print(f"{schema.title}: {len(schema.fields)} field(s)")  # noqa: T201
    for descriptor in schema.fields:
        marker = " (required)" if descriptor.required else ""
        print(f"  - {descriptor.id} [{descriptor.kind}]{marker}")  # noqa: T201
    return 0


def _run_preview(args: argparse.Namespace) -> int:
    schema = _load_schema_or_report(args.schema_path)
    if schema is None:
        return 1
    values = _read_values(args.values_path) if args.values_path else {}
    known = {field_id: value for field_id, value in values.items() if schema.field(field_id)}
    errors = validate_form(schema, known) if args.values_path else {}
    print(render_form(FormSnapshot(schema_model=schema, values=known, errors=errors)))  # noqa: T201
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    schema = _load_schema_or_report(args.schema_path)
    if schema is None:
        return 1
    errors = validate_form(schema, _read_values(args.values_path))
    print(json.dumps(errors, indent=2))  # noqa: T201
    _report_first_error(schema, errors)
    return 0 if is_form_valid(errors) else 1


def _run_submit(args: argparse.Namespace, settings: Settings) -> int:
    schema = _load_schema_or_report(args.schema_path)
    if schema is None:
        return 1
    values = _read_values(args.values_path)

    controller = FormController(schema, _build_effect(args, settings))
    for field_id, value in values.items():
        if schema.field(field_id) is None:
            logger.warning("Ignoring value for unknown field", extra={"field_id": field_id})
            continue
        controller.on_value_change(field_id, value)

    try:
        outcome = run_async(controller.on_submit())
    except SubmitFailedError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    if outcome == SubmitOutcome.INVALID:
        print(json.dumps(controller.errors, indent=2))  # noqa: T201
        _report_first_error(schema, controller.errors)
        return 1
    print("Form submitted successfully!")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "check": _run_check,
        "preview": _run_preview,
        "validate": _run_validate,
    }
    try:
        if args.command == "submit":
            return _run_submit(args, settings)
        handler = handlers.get(args.command)
        if handler is None:
            parser.print_help()
            return 0
        return handler(args)
    except (OSError, ValueError) as exc:
        logger.error("Cannot read input file", extra={"error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 1
    except PackageError:
        logger.exception("Command failed")
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
