"""Result models for table execution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ExecutionResult(str, Enum):
    """Outcome of a single assertion or of a whole table."""
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    IGNORE = "ignore"

    @classmethod
    def from_summary(cls, summary: "TestSummary") -> "ExecutionResult":
        """Reduce a tally to one verdict.

        Precedence is error, fail, ignore, pass. An empty tally passes.
        """
        if summary.exceptions > 0:
            return cls.ERROR
        if summary.wrong > 0:
            return cls.FAIL
        if summary.ignores > 0:
            return cls.IGNORE
        return cls.PASS


@dataclass
class TestSummary:
    """Counts of assertion outcomes."""
    right: int = 0
    wrong: int = 0
    ignores: int = 0
    exceptions: int = 0

    __test__ = False

    def add(self, result: ExecutionResult) -> None:
        if result == ExecutionResult.PASS:
            self.right += 1
        elif result == ExecutionResult.FAIL:
            self.wrong += 1
        elif result == ExecutionResult.ERROR:
            self.exceptions += 1
        elif result == ExecutionResult.IGNORE:
            self.ignores += 1

    def add_summary(self, other: "TestSummary") -> None:
        self.right += other.right
        self.wrong += other.wrong
        self.ignores += other.ignores
        self.exceptions += other.exceptions

    @property
    def execution_result(self) -> ExecutionResult:
        return ExecutionResult.from_summary(self)


@dataclass
class TestResult:
    """Verdict attached to a cell or a row."""
    execution_result: Optional[ExecutionResult]
    message: Optional[str] = None
    actual: Any = None
    expected: Any = None

    __test__ = False

    @classmethod
    def passed(cls, actual: Any = None, expected: Any = None) -> "TestResult":
        return cls(ExecutionResult.PASS, actual=actual, expected=expected)

    @classmethod
    def failed(cls, actual: Any = None, expected: Any = None) -> "TestResult":
        return cls(ExecutionResult.FAIL, actual=actual, expected=expected)

    @classmethod
    def error(cls, message: str) -> "TestResult":
        return cls(ExecutionResult.ERROR, message=message)

    @classmethod
    def plain(cls, actual: Any = None) -> "TestResult":
        """Result that shows a value without a verdict."""
        return cls(None, actual=actual)
