"""Line classification for dialplan directives."""

from __future__ import annotations

import re
from enum import Enum


class DirectiveKind(Enum):
    """The kinds of line a dialplan can contain."""

    CONTEXT_HEADER = "context_header"
    EXTENSION = "extension"
    CONTINUATION = "continuation"
    INCLUDE = "include"
    SWITCH = "switch"
    GLOBAL_ASSIGNMENT = "global_assignment"
    COMMENT_OR_BLANK = "comment_or_blank"
    UNKNOWN = "unknown"


COMMENT_CHARS = (";", "#")
SWITCH_KEYWORDS = frozenset({"switch", "eswitch", "lswitch"})

# Keywords may be written flush against their arrow, e.g. "exten=>s,1,NoOp()"
_KEYWORD_PATTERN = re.compile(r"[^\s=(,]+")
_ASSIGNMENT_PATTERN = re.compile(r"=(?!>)")


def is_comment_or_blank(line: str) -> bool:
    """Check if a line is blank or starts with a comment character.

    Args:
        line: Raw line, leading whitespace allowed.

    Returns:
        True for blank lines and ";" or "#" comments.
    """
    stripped = line.lstrip()
    return not stripped or stripped.startswith(COMMENT_CHARS)


def leading_keyword(line: str) -> str:
    """Return the first token of a trimmed line, lower-cased.

    The token ends at whitespace, "=", "(" or ",".
    """
    match = _KEYWORD_PATTERN.match(line)
    return match.group(0).lower() if match else ""


def classify(line: str, in_context: bool) -> DirectiveKind | None:
    """Decide which directive a trimmed, non-comment line holds.

    Rules are applied in order and the first match wins.

    Args:
        line: Trimmed line text.
        in_context: Whether a context header has been seen yet.

    Returns:
        The directive kind, or None when the line should be ignored
        (unrecognised text before any context).
    """
    if is_comment_or_blank(line):
        return DirectiveKind.COMMENT_OR_BLANK

    if line.startswith("["):
        return DirectiveKind.CONTEXT_HEADER

    keyword = leading_keyword(line)
    if keyword == "exten":
        return DirectiveKind.EXTENSION
    if keyword == "same":
        return DirectiveKind.CONTINUATION
    if keyword == "include":
        return DirectiveKind.INCLUDE
    if keyword in SWITCH_KEYWORDS:
        return DirectiveKind.SWITCH

    if not in_context and _ASSIGNMENT_PATTERN.search(line):
        return DirectiveKind.GLOBAL_ASSIGNMENT

    if in_context:
        return DirectiveKind.UNKNOWN

    return None
