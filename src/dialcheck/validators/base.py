"""Core models for dialplan validation.

Provides the diagnostic record, the per-file validation state shared by the
driver and the directive parsers, and the result returned to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class Diagnostic:
    """A single problem found on one line of a dialplan.

    Attributes:
        line: 1-based line number the problem was found on.
        message: Human-readable description of the problem.
        severity: "error" for syntax errors, "warning" for advisories.
    """

    line: int
    message: str
    severity: Severity = "error"

    def __str__(self) -> str:
        if self.severity == "warning":
            return f"Line {self.line}: Warning: {self.message}"
        return f"Line {self.line}: {self.message}"


class DriverPhase(Enum):
    """Where the driver is within a file."""

    NOT_STARTED = "not_started"
    HEADER_SECTION = "header_section"
    IN_CONTEXT = "in_context"


@dataclass
class ValidationState:
    """Mutable state for validating one file.

    Created fresh for every file. Only the driver and the parsers it calls
    touch it.

    Attributes:
        error_count: Number of error diagnostics recorded so far.
        warning_count: Number of warning diagnostics recorded so far.
        line_number: 1-based number of the line being validated.
        context_name: Name of the most recently opened context, if any.
        phase: Driver phase; becomes IN_CONTEXT at the first context header.
        diagnostics: Diagnostics in the order they were recorded.
        strict_escapes: Treat only an odd run of backslashes as escaping a quote.
    """

    error_count: int = 0
    warning_count: int = 0
    line_number: int = 0
    context_name: str | None = None
    phase: DriverPhase = DriverPhase.NOT_STARTED
    diagnostics: list[Diagnostic] = field(default_factory=list)
    strict_escapes: bool = False

    @property
    def in_context(self) -> bool:
        """True once any context header has been seen."""
        return self.phase is DriverPhase.IN_CONTEXT

    def error(self, message: str) -> None:
        """Record an error on the current line."""
        self.diagnostics.append(Diagnostic(self.line_number, message, "error"))
        self.error_count += 1

    def warning(self, message: str) -> None:
        """Record a warning on the current line."""
        self.diagnostics.append(Diagnostic(self.line_number, message, "warning"))
        self.warning_count += 1


@dataclass
class ValidationResult:
    """Outcome of validating one dialplan source.

    Attributes:
        source: Name of the validated source (usually a file path).
        status: "fail" if any error was found, "pass" otherwise. Warnings
            never fail a run.
        errors: Number of error diagnostics.
        warnings: Number of warning diagnostics.
        lines_checked: Number of physical lines read.
        diagnostics: All diagnostics in line order.
    """

    source: str
    status: Literal["pass", "fail"]
    errors: int
    warnings: int
    lines_checked: int
    diagnostics: list[Diagnostic]

    @property
    def clean(self) -> bool:
        """True when neither errors nor warnings were found."""
        return self.errors == 0 and self.warnings == 0

    @classmethod
    def from_state(cls, source: str, state: ValidationState) -> ValidationResult:
        """Build a result from a finished validation state."""
        return cls(
            source=source,
            status="fail" if state.error_count > 0 else "pass",
            errors=state.error_count,
            warnings=state.warning_count,
            lines_checked=state.line_number,
            diagnostics=list(state.diagnostics),
        )
