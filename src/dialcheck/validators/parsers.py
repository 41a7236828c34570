"""Parsers for the individual dialplan directives.

Each parser receives the trimmed line and the validation state, records any
diagnostics, and returns the parsed value (or None/False on a structural
error). Parsers never raise for bad input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from dialcheck.validators.base import ValidationState
from dialcheck.validators.delimiters import check_balanced, check_variable_syntax

ARROW = "=>"
PRIORITY_KEYWORDS = frozenset({"n", "hint"})

_PRIORITY_NUMBER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ExtensionRecord:
    """Fields of one exten/same line.

    Attributes:
        pattern: Extension pattern; empty for "same" lines.
        priority: Priority text as written.
        application: Application name with its argument list.
    """

    pattern: str
    priority: str
    application: str


def parse_context(line: str, state: ValidationState) -> str | None:
    """Parse a "[name]" context header.

    Anything after the closing bracket (template markers such as "(+)") is
    not inspected.

    Args:
        line: Trimmed line starting with "[".
        state: Validation state.

    Returns:
        The context name, or None if the header is malformed.
    """
    end = line.find("]")
    if end == -1:
        state.error("Malformed context (missing ']')")
        return None

    name = line[1:end].strip()
    if not name:
        state.error("Empty context name")
        return None

    state.context_name = name
    return name


def split_fields(data: str, count: int) -> list[str] | None:
    """Split data into count fields on top-level commas.

    Commas nested inside parentheses or brackets do not separate fields.
    The last field keeps the remainder of the text, commas included.

    Args:
        data: Text after the "=>" arrow.
        count: Number of fields wanted.

    Returns:
        The trimmed fields, or None if there are not enough top-level commas.
    """
    fields: list[str] = []
    parens = 0
    brackets = 0
    start = 0

    for i, char in enumerate(data):
        if char == "(":
            parens += 1
        elif char == ")":
            parens -= 1
        elif char == "[":
            brackets += 1
        elif char == "]":
            brackets -= 1
        elif char == "," and parens == 0 and brackets == 0:
            fields.append(data[start:i].strip())
            start = i + 1
            if len(fields) == count - 1:
                break

    if len(fields) < count - 1:
        return None

    fields.append(data[start:].strip())
    return fields


def check_priority(priority: str, state: ValidationState) -> bool:
    """Validate an extension priority.

    Accepts "n", "hint", or an integer >= 1 optionally followed by a
    "(label)". The label itself is not checked.

    Args:
        priority: Trimmed priority text.
        state: Validation state.

    Returns:
        True if the priority is valid.
    """
    if priority in PRIORITY_KEYWORDS:
        return True

    match = _PRIORITY_NUMBER.match(priority)
    if match:
        value = int(match.group(0))
        rest = priority[match.end() :]
    else:
        value = 0
        rest = priority

    if rest and not rest.startswith("("):
        state.error(f"Invalid priority '{priority}' (must be number, 'n', or 'hint')")
        return False

    if value < 1:
        state.error("Priority must be >= 1")
        return False

    return True


def parse_extension(
    line: str,
    state: ValidationState,
    continuation: bool = False,
) -> ExtensionRecord | None:
    """Parse an "exten =>" or "same =>" line.

    "exten" lines carry pattern,priority,app(args). "same" lines inherit the
    pattern of the previous extension and carry priority,app(args); their
    priority is not validated.

    Missing "=>" or too few fields abort the line. Otherwise the priority,
    the application's delimiter balance and the variable references in the
    whole data span are each checked, so one line can report several errors.

    Args:
        line: Trimmed line.
        state: Validation state.
        continuation: True for "same" lines.

    Returns:
        The parsed record, or None on a structural error.
    """
    arrow = line.find(ARROW)
    if arrow == -1:
        state.error("Missing '=>' in extension definition")
        return None

    data = line[arrow + len(ARROW) :].strip()

    if continuation:
        fields = split_fields(data, 2)
        if fields is None:
            state.error("Extension must have format: same => priority,app(args)")
            return None
        record = ExtensionRecord(pattern="", priority=fields[0], application=fields[1])
    else:
        fields = split_fields(data, 3)
        if fields is None:
            state.error("Extension must have format: exten => pattern,priority,app(args)")
            return None
        record = ExtensionRecord(
            pattern=fields[0], priority=fields[1], application=fields[2]
        )
        check_priority(record.priority, state)

    if "(" in record.application:
        check_balanced(record.application, state)

    check_variable_syntax(data, state)
    return record


def parse_include(line: str, state: ValidationState) -> str | None:
    """Parse an "include => context" line.

    Returns:
        The included context name, or None if malformed.
    """
    arrow = line.find(ARROW)
    if arrow == -1:
        state.error("Missing '=>' in include statement")
        return None

    target = line[arrow + len(ARROW) :].strip()
    if not target:
        state.error("Empty context in include statement")
        return None

    return target


def parse_switch(line: str, state: ValidationState) -> bool:
    """Check a switch/eswitch/lswitch line for its "=>" arrow."""
    if ARROW not in line:
        state.error("Missing '=>' in switch statement")
        return False
    return True
