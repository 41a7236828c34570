"""dialcheck CLI Tool - Main entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from dialcheck import __version__
from dialcheck.cli_utils import (
    EXIT_FAILURE,
    encoding_option,
    max_line_length_option,
    parallel_option,
    strict_escapes_option,
    wire_config,
)
from dialcheck.logging_utils import configure_logging
from dialcheck.validators.runner import AggregatedResult, FileResult, ValidationRunner

app = typer.Typer(
    name="dialcheck",
    help="dialcheck - Syntax validator for Asterisk dialplan files.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _output_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


def _output_diagnostic(text: str) -> None:
    """Print one diagnostic line to stderr."""
    err_console.print(escape(text), highlight=False, soft_wrap=True)


def _output_info(message: str, quiet: bool = False) -> None:
    """Print an info message."""
    if not quiet:
        console.print(escape(message), highlight=False, soft_wrap=True)


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dialcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """dialcheck - Syntax validator for Asterisk dialplan files."""
    pass


# -----------------------------------------------------------------------------
# Check Command
# -----------------------------------------------------------------------------


def _file_to_dict(file_result: FileResult) -> dict[str, Any]:
    """Serialize one file result for --json output."""
    data: dict[str, Any] = {"path": str(file_result.path), "io_error": file_result.io_error}
    result = file_result.result
    if result is None:
        data.update(status="fail", errors=0, warnings=0, lines_checked=0, diagnostics=[])
        return data

    data.update(
        status=result.status,
        errors=result.errors,
        warnings=result.warnings,
        lines_checked=result.lines_checked,
        diagnostics=[
            {"line": d.line, "severity": d.severity, "message": d.message}
            for d in result.diagnostics
        ],
    )
    return data


def _print_results(aggregated: AggregatedResult, quiet: bool) -> None:
    """Print diagnostics to stderr and per-file summaries to stdout."""
    show_paths = aggregated.files_checked > 1

    for file_result in aggregated.results:
        if file_result.io_error is not None:
            _output_error(file_result.io_error)
            continue

        result = file_result.result
        assert result is not None
        prefix = f"{file_result.path}: " if show_paths else ""

        for diagnostic in result.diagnostics:
            if quiet and diagnostic.severity == "warning":
                continue
            _output_diagnostic(f"{prefix}{diagnostic}")

        if result.clean:
            _output_info(f"✓ Syntax valid: {file_result.path}", quiet)
        else:
            summary = (
                f"Validation complete: {result.errors} error(s), "
                f"{result.warnings} warning(s)"
            )
            _output_info(f"{prefix}{summary}", quiet and result.errors == 0)


@app.command()
def check(
    files: list[Path] = typer.Argument(
        ...,
        help="Dialplan files to check (e.g. /etc/asterisk/extensions.conf).",
    ),
    encoding: str | None = encoding_option(),
    max_line_length: int | None = max_line_length_option(),
    strict_escapes: bool | None = strict_escapes_option(),
    parallel: bool | None = parallel_option(),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print errors.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log debug information to stderr.",
    ),
) -> None:
    """Check dialplan files for syntax errors.

    Reports unbalanced delimiters, malformed contexts, extensions, includes
    and switches, invalid priorities and unclosed ${...}/$[...] references.
    Applications, variables and included contexts are not checked for
    existence.

    Exits with code 1 if any file has errors or cannot be read.
    Warnings do not cause failure.
    """
    if verbose:
        configure_logging("DEBUG")

    config = wire_config(
        encoding=encoding,
        max_line_length=max_line_length,
        strict_escapes=strict_escapes,
        parallel=parallel,
    )

    aggregated = ValidationRunner(config).run(files)

    if json_output:
        result: dict[str, Any] = {
            "status": aggregated.status,
            "files_checked": aggregated.files_checked,
            "errors": aggregated.errors,
            "warnings": aggregated.warnings,
            "io_errors": aggregated.io_errors,
            "files": [_file_to_dict(fr) for fr in aggregated.results],
        }
        console.print_json(json.dumps(result))
    else:
        _print_results(aggregated, quiet)

    if aggregated.status == "fail":
        raise typer.Exit(code=EXIT_FAILURE)


if __name__ == "__main__":
    app()
