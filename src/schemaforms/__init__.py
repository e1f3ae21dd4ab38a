"""Schema-driven form validation and state engine."""

from schemaforms.async_runner import run_async
from schemaforms.exceptions import (
    AsyncExecutionError,
    InvalidFieldError,
    InvalidPatternError,
    MalformedDocumentError,
    MissingFieldError,
    PackageError,
    SettingsError,
    StructuralError,
    SubmitFailedError,
    SubmitTransportError,
    UnknownFieldError,
)
from schemaforms.logging import configure_logging, get_logger
from schemaforms.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("schemaforms")

__all__ = [
    "AsyncExecutionError",
    "InvalidFieldError",
    "InvalidPatternError",
    "MalformedDocumentError",
    "MissingFieldError",
    "PackageError",
    "Settings",
    "SettingsError",
    "StructuralError",
    "SubmitFailedError",
    "SubmitTransportError",
    "UnknownFieldError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
