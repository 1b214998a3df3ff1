"""Instructions and the expectations evaluated against their results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional

from slimtables.core.results import TestResult

if TYPE_CHECKING:
    from slimtables.core.context import SlimTestContext
    from slimtables.core.tables.base import SlimTable

CALL = "call"
NOOP = "noop"


@dataclass(frozen=True)
class Instruction:
    """A request for the fixture executor."""
    id: str
    kind: str = CALL
    method: str = ""
    args: tuple[str, ...] = ()

    @classmethod
    def noop(cls, instruction_id: str) -> "Instruction":
        return cls(id=instruction_id, kind=NOOP)

    @property
    def is_noop(self) -> bool:
        return self.kind == NOOP

    def with_args(self, args: tuple[str, ...]) -> "Instruction":
        return replace(self, args=args)


@dataclass(frozen=True)
class FixtureException:
    """Stands in for a return value when the executor raised."""
    message: str


class Expectation:
    """Turns an instruction's return value into a result."""

    def evaluate_expectation(self, return_value: Any) -> Optional[TestResult]:
        raise NotImplementedError


class RowExpectation(Expectation):
    """Expectation bound to one cell of its table.

    Any verdict it produces is recorded on that cell and counted in the
    owning table's context.
    """

    def __init__(self, table: "SlimTable", col: int, row: int, expected: Optional[str] = None):
        self.table = table
        self.col = col
        self.row = row
        self.expected = expected

    def evaluate_expectation(self, return_value: Any) -> Optional[TestResult]:
        if isinstance(return_value, FixtureException):
            result = TestResult.error(return_value.message)
        else:
            result = self.create_evaluation(return_value)

        if result is None:
            return None

        if result.execution_result is not None:
            self.table.test_context.increment(result.execution_result)
        self.table.table.update_cell(self.col, self.row, result)
        return result

    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        raise NotImplementedError


@dataclass
class SlimAssertion:
    """An instruction paired with the expectation that checks it."""
    instruction: Instruction
    expectation: Expectation
    context: Optional["SlimTestContext"] = field(default=None, repr=False)
