"""Script table - one fixture call per row."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Optional

from slimtables.core.naming import disgrace_class_name, disgrace_method_name
from slimtables.core.results import TestResult
from slimtables.core.tables.assertions import Instruction, RowExpectation, SlimAssertion
from slimtables.core.tables.base import SlimTable
from slimtables.errors import SlimSyntaxError

if TYPE_CHECKING:
    from slimtables.core.scenario.table import ScenarioTable

logger = logging.getLogger(__name__)

SYMBOL_ASSIGNMENT = re.compile(r"^\$([A-Za-z]\w*)=$")


def to_cell_string(value: Any) -> str:
    """Render a fixture return value the way it is compared to a cell."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CheckExpectation(RowExpectation):
    """Passes when the returned value equals the expected cell."""

    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        actual_string = to_cell_string(actual)
        expected = (self.expected or "").strip()
        if actual_string == expected:
            return TestResult.passed(actual_string, expected)
        return TestResult.failed(actual_string, expected)


class SymbolAssignmentExpectation(RowExpectation):
    """Stores the returned value in a symbol instead of checking it."""

    def __init__(self, table: SlimTable, col: int, row: int, symbol: str):
        super().__init__(table, col, row)
        self.symbol = symbol

    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        value = to_cell_string(actual)
        self.table.test_context.set_symbol(self.symbol, value)
        return TestResult.plain(f"${self.symbol}<-[{value}]")


class EnsureExpectation(RowExpectation):
    """``ensure`` passes on a true result, ``reject`` on a false one."""

    def __init__(self, table: SlimTable, col: int, row: int, negate: bool = False):
        super().__init__(table, col, row)
        self.negate = negate

    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        truthy = to_cell_string(actual).lower() == "true"
        if truthy != self.negate:
            return TestResult.passed(actual)
        return TestResult.failed(actual)


class ShowExpectation(RowExpectation):
    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        return TestResult.plain(to_cell_string(actual))


class ActionExpectation(RowExpectation):
    """Only boolean results produce a verdict."""

    def create_evaluation(self, actual: Any) -> Optional[TestResult]:
        if actual is True:
            return TestResult.passed(actual)
        if actual is False:
            return TestResult.failed(actual)
        return None


class ScriptTable(SlimTable):
    """Interprets each row after the header as one step.

    Supported rows:
    - ``note ...``, ``# ...`` or empty: ignored
    - ``check | phrase... | expected``
    - ``ensure | phrase...`` / ``reject | phrase...``
    - ``show | phrase...``
    - anything else: a scenario call if a registered scenario matches,
      otherwise a plain action
    """

    table_kind = "script"

    def get_assertions(self) -> list[SlimAssertion]:
        assertions: list[SlimAssertion] = []
        for row in range(1, self.table.get_row_count()):
            assertions.extend(self._assertions_for_row(row))
        return assertions

    def _assertions_for_row(self, row: int) -> list[SlimAssertion]:
        cells = [c.strip() for c in self.table.get_row(row)]
        if not cells or not any(cells):
            return []

        keyword = cells[0].lower()
        if keyword == "note" or cells[0].startswith("#"):
            return []

        if keyword == "check":
            if len(cells) < 3:
                raise SlimSyntaxError(f"Row {row}: check needs a method and an expected value")
            expected = cells[-1]
            expected_col = len(cells) - 1
            symbol = SYMBOL_ASSIGNMENT.match(expected)
            if symbol:
                expectation = SymbolAssignmentExpectation(self, expected_col, row, symbol.group(1))
            else:
                expectation = CheckExpectation(self, expected_col, row, expected)
            return [self.make_assertion(self._call(cells[1:-1], row), expectation)]

        if keyword in ("ensure", "reject"):
            expectation = EnsureExpectation(self, 0, row, negate=keyword == "reject")
            return [self.make_assertion(self._call(cells[1:], row), expectation)]

        if keyword == "show":
            expectation = ShowExpectation(self, len(cells), row)
            return [self.make_assertion(self._call(cells[1:], row), expectation)]

        return self._action_or_scenario(cells, row)

    def _action_or_scenario(self, cells: list[str], row: int) -> list[SlimAssertion]:
        scenario = None
        arguments: list[str] = []

        if not cells[0].endswith(";"):
            scenario = self.test_context.get_scenario(disgrace_class_name(" ".join(cells[0::2])))
            arguments = cells[1::2]

            if scenario is None and len(cells) == 1:
                scenario, arguments = self._match_parameterized(cells[0])

        if scenario is not None:
            logger.debug(f"Row {row} of {self.id} calls scenario {scenario.name}")
            return scenario.call_positional(arguments, self, row)

        return [self.make_assertion(self._call(cells, row), ActionExpectation(self, 0, row))]

    def _match_parameterized(self, phrase: str) -> tuple[Optional["ScenarioTable"], list[str]]:
        for scenario in self.test_context.get_scenarios():
            arguments = scenario.match_parameters(phrase)
            if arguments is not None:
                return scenario, arguments
        return None, []

    def _call(self, cells: list[str], row: int) -> Instruction:
        if not cells:
            raise SlimSyntaxError(f"Row {row}: missing method name")

        if cells[0].endswith(";"):
            method = disgrace_method_name(cells[0][:-1])
            args = cells[1:]
        else:
            method = disgrace_method_name(" ".join(cells[0::2]))
            args = cells[1::2]

        return Instruction(id=self.make_instruction_id(), method=method, args=tuple(args))
