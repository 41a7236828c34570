"""Validation runner for checking several dialplan files.

Provides a single entry point that validates each file with its own state,
turns I/O failures into results, and aggregates the outcome. Files share no
state, so they can be checked in parallel.
"""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from dialcheck.config import DialcheckConfig
from dialcheck.validators.base import ValidationResult
from dialcheck.validators.dialplan import DialplanValidator

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of checking one file.

    Attributes:
        path: The file that was checked.
        result: Validation result, or None if the file could not be read.
        io_error: Message describing the I/O failure, if any.
    """

    path: Path
    result: ValidationResult | None = None
    io_error: str | None = None

    @property
    def passed(self) -> bool:
        """True if the file was read and has no errors."""
        return self.result is not None and self.result.status == "pass"


@dataclass
class AggregatedResult:
    """Aggregated results from checking multiple files.

    Attributes:
        status: "pass" if every file was read and has no errors, "fail" otherwise.
        files_checked: Number of files attempted.
        errors: Total error diagnostics across all files.
        warnings: Total warning diagnostics across all files.
        io_errors: Number of files that could not be read.
        results: Per-file results, in the order the paths were given.
    """

    status: Literal["pass", "fail"]
    files_checked: int
    errors: int
    warnings: int
    io_errors: int
    results: list[FileResult]


class ValidationRunner:
    """Runs the dialplan validator over a list of files."""

    def __init__(self, config: DialcheckConfig | None = None) -> None:
        """Initialize validation runner.

        Args:
            config: Settings for encoding, limits and parallelism.
        """
        self.config = config or DialcheckConfig()
        self.validator = DialplanValidator(
            strict_escapes=self.config.strict_escapes,
            max_line_length=self.config.max_line_length,
        )

    def run(self, paths: list[Path]) -> AggregatedResult:
        """Validate every path.

        Args:
            paths: Files to validate.

        Returns:
            AggregatedResult with per-file outcomes in input order.
        """
        if self.config.parallel and len(paths) > 1:
            results = self._run_parallel(paths)
        else:
            results = [self.run_single(path) for path in paths]

        return self._aggregate_results(results)

    def run_single(self, path: Path) -> FileResult:
        """Validate one file, converting I/O failures into a FileResult.

        Args:
            path: File to validate.

        Returns:
            FileResult for the file.
        """
        try:
            result = self.validator.validate_file(path, encoding=self.config.encoding)
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return FileResult(path=path, io_error=f"Cannot open file '{path}'")
        return FileResult(path=path, result=result)

    def _run_parallel(self, paths: list[Path]) -> list[FileResult]:
        """Validate files in a thread pool, keeping input order.

        Args:
            paths: Files to validate.

        Returns:
            List of file results.
        """
        results: list[FileResult | None] = [None] * len(paths)

        with concurrent.futures.ThreadPoolExecutor(max_workers=min(len(paths), 8)) as executor:
            future_to_index: dict[concurrent.futures.Future[FileResult], int] = {
                executor.submit(self.run_single, path): i for i, path in enumerate(paths)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                results[future_to_index[future]] = future.result()

        return [result for result in results if result is not None]

    def _aggregate_results(self, results: list[FileResult]) -> AggregatedResult:
        """Aggregate per-file results into a single summary.

        Args:
            results: List of file results.

        Returns:
            AggregatedResult combining all results.
        """
        errors = 0
        warnings = 0
        io_errors = 0

        for file_result in results:
            if file_result.result is None:
                io_errors += 1
                continue
            errors += file_result.result.errors
            warnings += file_result.result.warnings

        status: Literal["pass", "fail"] = "fail" if errors or io_errors else "pass"

        return AggregatedResult(
            status=status,
            files_checked=len(results),
            errors=errors,
            warnings=warnings,
            io_errors=io_errors,
            results=results,
        )
