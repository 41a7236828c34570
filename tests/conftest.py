"""Pytest configuration and fixtures for dialcheck tests."""

import os

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

DIALCHECK_ENV_VARS = (
    "DIALCHECK_ENCODING",
    "DIALCHECK_MAX_LINE_LENGTH",
    "DIALCHECK_STRICT_ESCAPES",
    "DIALCHECK_PARALLEL",
)


@pytest.fixture(autouse=True)
def clean_dialcheck_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DIALCHECK_* variables from the outer environment out of tests."""
    for name in DIALCHECK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
