"""Validation driver for dialplan sources.

Walks the lines of one source top to bottom, classifies each line and hands
it to the matching directive parser. The driver holds the only cross-line
state: the current line number, the current context and the error/warning
counts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from dialcheck.validators.base import DriverPhase, ValidationResult, ValidationState
from dialcheck.validators.directives import DirectiveKind, classify, is_comment_or_blank
from dialcheck.validators.parsers import (
    parse_context,
    parse_extension,
    parse_include,
    parse_switch,
)

logger = logging.getLogger(__name__)


class DialplanValidator:
    """Line-by-line syntax validator for dialplan files.

    Each call to validate() uses a fresh ValidationState, so one instance can
    check any number of sources.

    Attributes:
        strict_escapes: Treat only an odd run of backslashes as escaping a quote.
        max_line_length: Reject lines longer than this; 0 means no limit.
    """

    def __init__(self, strict_escapes: bool = False, max_line_length: int = 0) -> None:
        self.strict_escapes = strict_escapes
        self.max_line_length = max_line_length

    def validate(self, lines: Iterable[str], source: str = "<input>") -> ValidationResult:
        """Validate a sequence of dialplan lines.

        Lines are consumed lazily and may or may not carry their newline.

        Args:
            lines: Lines of the dialplan in order.
            source: Name used in the result (usually a file path).

        Returns:
            ValidationResult with all diagnostics and counts.
        """
        state = ValidationState(strict_escapes=self.strict_escapes)
        state.phase = DriverPhase.HEADER_SECTION

        for raw_line in lines:
            state.line_number += 1
            self._validate_line(raw_line.rstrip("\n"), state)

        logger.debug(
            "%s: %d line(s), %d error(s), %d warning(s)",
            source,
            state.line_number,
            state.error_count,
            state.warning_count,
        )
        return ValidationResult.from_state(source, state)

    def validate_file(self, path: Path, encoding: str = "utf-8") -> ValidationResult:
        """Validate a dialplan file, streaming it line by line.

        Args:
            path: File to validate.
            encoding: Text encoding of the file. Undecodable bytes are replaced.

        Returns:
            ValidationResult for the file.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        logger.debug("Validating %s", path)
        with open(path, encoding=encoding, errors="replace") as f:
            return self.validate(f, source=str(path))

    def _validate_line(self, line: str, state: ValidationState) -> None:
        if is_comment_or_blank(line):
            return

        if self.max_line_length and len(line) > self.max_line_length:
            state.error(f"Line exceeds maximum length ({len(line)} > {self.max_line_length})")
            return

        trimmed = line.strip()
        kind = classify(trimmed, state.in_context)

        if kind is DirectiveKind.CONTEXT_HEADER:
            parse_context(trimmed, state)
            # A malformed header still opens a context
            state.phase = DriverPhase.IN_CONTEXT
        elif kind is DirectiveKind.EXTENSION:
            parse_extension(trimmed, state)
        elif kind is DirectiveKind.CONTINUATION:
            parse_extension(trimmed, state, continuation=True)
        elif kind is DirectiveKind.INCLUDE:
            parse_include(trimmed, state)
        elif kind is DirectiveKind.SWITCH:
            parse_switch(trimmed, state)
        elif kind is DirectiveKind.UNKNOWN:
            state.warning(f"Unknown directive '{trimmed}'")


def validate(
    lines: Iterable[str],
    source: str = "<input>",
    strict_escapes: bool = False,
    max_line_length: int = 0,
) -> ValidationResult:
    """Validate dialplan lines with a one-off DialplanValidator.

    Args:
        lines: Lines of the dialplan in order.
        source: Name used in the result.
        strict_escapes: Treat only an odd run of backslashes as escaping a quote.
        max_line_length: Reject lines longer than this; 0 means no limit.

    Returns:
        ValidationResult with all diagnostics and counts.
    """
    validator = DialplanValidator(
        strict_escapes=strict_escapes, max_line_length=max_line_length
    )
    return validator.validate(lines, source=source)
