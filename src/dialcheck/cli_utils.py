"""CLI utility functions for dialcheck.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Error formatting: Consistent user-friendly messages with exit codes
- Option factories: Shared Typer options for validation settings
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import typer

from dialcheck.config import DialcheckConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_FAILURE = 1  # Syntax errors, unreadable files, bad configuration


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_FAILURE) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_FAILURE=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    encoding: str | None = None,
    max_line_length: int | None = None,
    strict_escapes: bool | None = None,
    parallel: bool | None = None,
    start_dir: Path | None = None,
) -> DialcheckConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Options left at None fall through to the environment, config files and
    defaults.

    Args:
        encoding: Override for the file encoding.
        max_line_length: Override for the line length limit.
        strict_escapes: Override for the quote escape rule.
        parallel: Override for parallel checking.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved DialcheckConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {
        "encoding": encoding,
        "max_line_length": max_line_length,
        "strict_escapes": strict_escapes,
        "parallel": parallel,
    }

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_FAILURE)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# needs a fresh instance.


def encoding_option() -> Any:
    """Create a Typer Option for --encoding."""
    return typer.Option(
        None,
        "--encoding",
        help="Text encoding of the input files (default: utf-8).",
    )


def max_line_length_option() -> Any:
    """Create a Typer Option for --max-line-length."""
    return typer.Option(
        None,
        "--max-line-length",
        min=0,
        help="Report lines longer than this as errors (default: 0, no limit).",
    )


def strict_escapes_option() -> Any:
    """Create a Typer Option for --strict-escapes/--simple-escapes."""
    return typer.Option(
        None,
        "--strict-escapes/--simple-escapes",
        help="Only an odd number of backslashes escapes a quote (default: simple).",
    )


def parallel_option() -> Any:
    """Create a Typer Option for --parallel/--no-parallel."""
    return typer.Option(
        None,
        "--parallel/--no-parallel",
        help="Check multiple files in parallel (default: parallel).",
    )
