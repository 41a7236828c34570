"""Tests for the dialplan validation driver."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialcheck.validators import DialplanValidator, ValidationResult, validate


def _lines(text: str) -> list[str]:
    return text.splitlines(keepends=True)


def _errors(result: ValidationResult) -> list[tuple[int, str]]:
    return [(d.line, d.message) for d in result.diagnostics if d.severity == "error"]


SAMPLE_DIALPLAN = """\
; sample extensions.conf
static=yes
writeprotect=no

[globals]

[from-internal]
include => outbound
exten => 100,hint,SIP/100
exten => 100,1,Dial(SIP/100,30)
 same => n,VoiceMail(100@default,u)
 same => n,Hangup()
exten => _9NXXXXXX,1(dial),Set(CALLERID(num)=${CALLERID(num)})
 same => n,GotoIf($[${DIALSTATUS} = BUSY]?busy:end)
 same => n(busy),Playback(vm-busy)
 same => n(end),Hangup()

[outbound]
switch => IAX2/user:secret@box/ctx
exten => _X.,1,NoOp("quoted ( paren")
"""


class TestScenarios:
    """End-to-end scenarios over short inputs."""

    def test_valid_minimal(self) -> None:
        """Test a single context with one extension."""
        result = validate(_lines("[default]\nexten => s,1,NoOp()\n"))
        assert result.errors == 0
        assert result.warnings == 0
        assert result.status == "pass"
        assert result.clean

    def test_unbalanced_dial(self) -> None:
        """Test an unclosed Dial() followed by a continuation."""
        result = validate(
            _lines("[default]\nexten => s,1,Dial(SIP/peer,30\nsame => n,Hangup()\n")
        )
        assert _errors(result) == [
            (2, "Unbalanced delimiters (parens=1, brackets=0, braces=0)")
        ]
        assert result.status == "fail"

    def test_priority_zero(self) -> None:
        """Test a priority below 1."""
        result = validate(_lines("[default]\nexten => s,0,NoOp()\n"))
        assert _errors(result) == [(2, "Priority must be >= 1")]

    def test_missing_arrow(self) -> None:
        """Test an extension written with '='."""
        result = validate(_lines("[default]\nexten = s,1,NoOp()\n"))
        assert _errors(result) == [(2, "Missing '=>' in extension definition")]

    def test_unclosed_reference_and_parens(self) -> None:
        """Test two errors on one line."""
        result = validate(_lines("[default]\nexten => s,1,Set(VAR=${CALLERID(num)\n"))
        errors = _errors(result)
        assert len(errors) == 2
        assert all(line == 2 for line, _ in errors)
        messages = [message for _, message in errors]
        assert "Unclosed ${...} variable reference" in messages
        assert any("parens=1" in message for message in messages)

    def test_malformed_context(self) -> None:
        """Test a context header without ']'."""
        result = validate(_lines("[test\nexten => s,1,Hangup()\n"))
        assert _errors(result) == [(1, "Malformed context (missing ']')")]


class TestDriver:
    """Tests for DialplanValidator behaviour."""

    def test_sample_dialplan_is_clean(self) -> None:
        """Test a realistic dialplan."""
        result = validate(_lines(SAMPLE_DIALPLAN))
        assert result.diagnostics == []
        assert result.lines_checked == SAMPLE_DIALPLAN.count("\n")

    def test_unknown_directive_is_warning(self) -> None:
        """Test that unknown lines inside a context only warn."""
        result = validate(_lines("[default]\nfoo bar\n"))
        assert result.errors == 0
        assert result.warnings == 1
        assert result.status == "pass"
        assert not result.clean
        diagnostic = result.diagnostics[0]
        assert diagnostic.severity == "warning"
        assert diagnostic.line == 2
        assert diagnostic.message == "Unknown directive 'foo bar'"
        assert str(diagnostic) == "Line 2: Warning: Unknown directive 'foo bar'"

    def test_assignments_before_context_accepted(self) -> None:
        """Test settings before the first context."""
        result = validate(["static=yes\n", "writeprotect=no\n", "[default]\n"])
        assert result.clean

    def test_assignment_inside_context_warns(self) -> None:
        """Test that settings after a context header are unknown directives."""
        result = validate(["[general]\n", "static=yes\n"])
        assert result.warnings == 1

    def test_unknown_before_context_ignored(self) -> None:
        """Test that unrecognised text before any context is ignored."""
        result = validate(["random text\n", "[default]\n"])
        assert result.clean

    def test_malformed_header_opens_context(self) -> None:
        """Test that a broken header still switches to context mode."""
        result = validate(["[broken\n", "static=yes\n"])
        assert result.errors == 1
        assert result.warnings == 1

    def test_extension_before_context_is_checked(self) -> None:
        """Test that extensions are parsed even before any context."""
        result = validate(["exten => s,0,NoOp()\n"])
        assert _errors(result) == [(1, "Priority must be >= 1")]

    def test_comments_and_blanks_count_lines(self) -> None:
        """Test that skipped lines still advance the line number."""
        result = validate(_lines("; header\n\n   # note\n[default]\nexten => s,0,NoOp()\n"))
        assert _errors(result) == [(5, "Priority must be >= 1")]

    def test_lines_without_newlines(self) -> None:
        """Test input lines that carry no terminator."""
        result = validate(["[default]", "exten => s,1,NoOp()"])
        assert result.clean
        assert result.lines_checked == 2

    def test_crlf_lines(self) -> None:
        """Test Windows line endings."""
        result = validate(["[default]\r\n", "exten => s,1,NoOp()\r\n"])
        assert result.clean

    def test_error_does_not_stop_later_lines(self) -> None:
        """Test that every bad line is reported."""
        result = validate(
            _lines(
                "[default]\n"
                "exten => s,0,NoOp()\n"
                "include outbound\n"
                "switch IAX2/box\n"
                "[]\n"
            )
        )
        assert [line for line, _ in _errors(result)] == [2, 3, 4, 5]

    def test_counts_match_diagnostics(self) -> None:
        """Test that counters equal the number of diagnostics per severity."""
        result = validate(
            _lines("[a]\nexten => s,x,Dial(${A\nwhat is this\nsame => NoOp()\nnope\n")
        )
        assert result.errors == sum(1 for d in result.diagnostics if d.severity == "error")
        assert result.warnings == sum(1 for d in result.diagnostics if d.severity == "warning")
        assert result.warnings == 2

    def test_idempotent(self) -> None:
        """Test that validating the same input twice gives the same result."""
        lines = _lines("[a]\nexten => s,0,Dial(\nfoo\n")
        validator = DialplanValidator()
        assert validator.validate(lines) == validator.validate(lines)

    def test_accepts_generator(self) -> None:
        """Test that any iterable of lines is accepted."""
        result = validate(line for line in ["[default]\n", "exten => s,1,NoOp()\n"])
        assert result.clean

    def test_source_name(self) -> None:
        """Test that the source name is carried into the result."""
        result = validate(["[default]\n"], source="extensions.conf")
        assert result.source == "extensions.conf"


class TestOptions:
    """Tests for validator options."""

    def test_long_lines_accepted_by_default(self) -> None:
        """Test that there is no line length limit by default."""
        app = "NoOp(" + "x" * 10000 + ")"
        result = validate(["[default]\n", f"exten => s,1,{app}\n"])
        assert result.clean

    def test_max_line_length(self) -> None:
        """Test that over-long lines are reported and skipped."""
        result = validate(
            ["[default]\n", "exten => s,0,NoOp(aaaaaaaaaa)\n"], max_line_length=20
        )
        assert _errors(result) == [(2, "Line exceeds maximum length (29 > 20)")]

    def test_max_line_length_ignores_comments(self) -> None:
        """Test that comments are not subject to the limit."""
        result = validate(["; " + "x" * 50 + "\n"], max_line_length=10)
        assert result.clean

    def test_strict_escapes(self) -> None:
        """Test the strict quote escape rule."""
        lines = ["[default]\n", 'exten => s,1,NoOp("a\\\\")\n']
        assert validate(lines).errors == 1
        assert validate(lines, strict_escapes=True).errors == 0


class TestValidateFile:
    """Tests for DialplanValidator.validate_file."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Test validating a file on disk."""
        path = tmp_path / "extensions.conf"
        path.write_text(SAMPLE_DIALPLAN)
        result = DialplanValidator().validate_file(path)
        assert result.clean
        assert result.source == str(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that I/O failures propagate as OSError."""
        with pytest.raises(OSError):
            DialplanValidator().validate_file(tmp_path / "missing.conf")

    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        """Test that invalid bytes do not abort validation."""
        path = tmp_path / "extensions.conf"
        path.write_bytes(b"[default]\nexten => s,1,NoOp(\xff)\n")
        result = DialplanValidator().validate_file(path)
        assert result.clean
