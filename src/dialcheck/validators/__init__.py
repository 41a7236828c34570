"""Syntax validation for dialplan files.

Provides the line classifier, the directive parsers, the delimiter and
reference checkers, and the driver and runner that tie them together.
"""

from __future__ import annotations

from dialcheck.validators.base import (
    Diagnostic,
    DriverPhase,
    Severity,
    ValidationResult,
    ValidationState,
)
from dialcheck.validators.delimiters import (
    DelimiterScan,
    check_balanced,
    check_variable_syntax,
    scan_delimiters,
)
from dialcheck.validators.dialplan import DialplanValidator, validate
from dialcheck.validators.directives import DirectiveKind, classify
from dialcheck.validators.runner import AggregatedResult, FileResult, ValidationRunner

__all__ = [
    # Base types
    "Diagnostic",
    "DriverPhase",
    "Severity",
    "ValidationResult",
    "ValidationState",
    # Checkers
    "DelimiterScan",
    "check_balanced",
    "check_variable_syntax",
    "scan_delimiters",
    # Classification
    "DirectiveKind",
    "classify",
    # Driver
    "DialplanValidator",
    "validate",
    # Runner
    "AggregatedResult",
    "FileResult",
    "ValidationRunner",
]
