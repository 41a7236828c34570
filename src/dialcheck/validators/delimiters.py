"""Delimiter balance and variable reference checks.

Both checks work on a single string and record at most the diagnostics
described on each function into the supplied ValidationState.
"""

from __future__ import annotations

from dataclasses import dataclass

from dialcheck.validators.base import ValidationState

QUOTE_CHARS = frozenset("'\"")

_OPENERS = {"(": "parens", "[": "brackets", "{": "braces"}
_CLOSERS = {")": "parens", "]": "brackets", "}": "braces"}


@dataclass
class DelimiterScan:
    """Counters left after scanning a string for delimiters.

    Attributes:
        parens: Net count of "(" minus ")".
        brackets: Net count of "[" minus "]".
        braces: Net count of "{" minus "}".
        in_quote: True if the string ended inside a quoted span.
        overflow: True if a closer appeared with no opener; the scan stopped there.
    """

    parens: int = 0
    brackets: int = 0
    braces: int = 0
    in_quote: bool = False
    overflow: bool = False

    @property
    def balanced(self) -> bool:
        """True if every counter is zero and no quote is left open."""
        return (
            not self.overflow
            and not self.in_quote
            and self.parens == 0
            and self.brackets == 0
            and self.braces == 0
        )


def _is_escaped(text: str, index: int, strict: bool) -> bool:
    """Check whether the character at index is escaped by a backslash.

    The default rule only looks at the one preceding character. In strict
    mode an escape needs an odd run of backslashes, so a quote after an
    escaped backslash still terminates the span.
    """
    if not strict:
        return index > 0 and text[index - 1] == "\\"

    run = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        run += 1
        i -= 1
    return run % 2 == 1


def scan_delimiters(text: str, strict_escapes: bool = False) -> DelimiterScan:
    """Count parens, brackets and braces in text, skipping quoted spans.

    The three kinds are counted independently, so "(]" is seen as two
    drifting counters rather than a mismatched pair.

    Args:
        text: String to scan.
        strict_escapes: Use the odd-backslash escape rule inside quotes.

    Returns:
        DelimiterScan with the final (or overflow-time) counters.
    """
    scan = DelimiterScan()
    quote_char = ""

    for i, char in enumerate(text):
        if scan.in_quote:
            if char == quote_char and not _is_escaped(text, i, strict_escapes):
                scan.in_quote = False
            continue

        if char in QUOTE_CHARS:
            quote_char = char
            scan.in_quote = True
        elif char in _OPENERS:
            name = _OPENERS[char]
            setattr(scan, name, getattr(scan, name) + 1)
        elif char in _CLOSERS:
            name = _CLOSERS[char]
            setattr(scan, name, getattr(scan, name) - 1)

        if scan.parens < 0 or scan.brackets < 0 or scan.braces < 0:
            scan.overflow = True
            break

    return scan


def check_balanced(text: str, state: ValidationState) -> bool:
    """Verify that delimiters in text open and close in matching numbers.

    Records one error when the check fails:
    - a closer with no opener stops the scan immediately,
    - an unterminated quote,
    - any counter left above zero.

    Args:
        text: String to check.
        state: Validation state receiving the diagnostic.

    Returns:
        True if text is balanced.
    """
    scan = scan_delimiters(text, state.strict_escapes)

    if scan.overflow:
        state.error("Unbalanced delimiters (too many closing)")
        return False

    if scan.in_quote:
        state.error("Unclosed quote")
        return False

    if not scan.balanced:
        state.error(
            f"Unbalanced delimiters (parens={scan.parens}, "
            f"brackets={scan.brackets}, braces={scan.braces})"
        )
        return False

    return True


def _find_reference_end(text: str, start: int, opener: str, closer: str) -> int | None:
    """Return the index just past the closer matching an opener before start.

    Depth starts at 1 because the opener has already been consumed.
    Returns None if the text ends first.
    """
    depth = 1
    i = start
    while i < len(text):
        if text[i] == opener:
            depth += 1
        elif text[i] == closer:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def check_variable_syntax(text: str, state: ValidationState) -> bool:
    """Verify that every ${...} and $[...] reference in text is closed.

    Nested references are only tracked by raw brace/bracket depth. Each
    unclosed reference records its own error and scanning continues.

    Args:
        text: String to check.
        state: Validation state receiving diagnostics.

    Returns:
        True if no unclosed reference was found.
    """
    valid = True
    pos = text.find("$")

    while pos != -1:
        follower = text[pos + 1 : pos + 2]

        if follower == "{":
            end = _find_reference_end(text, pos + 2, "{", "}")
            if end is None:
                state.error("Unclosed ${...} variable reference")
                valid = False
                break
            pos = text.find("$", end)
        elif follower == "[":
            end = _find_reference_end(text, pos + 2, "[", "]")
            if end is None:
                state.error("Unclosed $[...] expression")
                valid = False
                break
            pos = text.find("$", end)
        else:
            pos = text.find("$", pos + 1)

    return valid
