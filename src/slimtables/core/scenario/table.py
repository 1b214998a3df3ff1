"""Scenario table - a reusable, parameterized script."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from slimtables.core.context import SlimTestContext
from slimtables.core.results import ExecutionResult, TestResult
from slimtables.core.scenario.binder import CallBinding, bind_named, bind_positional
from slimtables.core.scenario.context import ScenarioTestContext
from slimtables.core.scenario.header import ScenarioDefinition, parse_header
from slimtables.core.scenario.matcher import match_template
from slimtables.core.scenario.templater import expand_body
from slimtables.core.table import Table
from slimtables.core.tables.assertions import Expectation, Instruction, SlimAssertion
from slimtables.core.tables.base import SlimTable
from slimtables.core.tables.factory import get_default_factory
from slimtables.core.tables.script import ScriptTable
from slimtables.errors import TableCreationError

logger = logging.getLogger(__name__)

DEFAULT_CHILD_KIND = "script"

_default_child_kind = DEFAULT_CHILD_KIND


def set_default_child_kind(kind: str) -> None:
    """Kind used for scenario bodies called from non-script tables.

    Set once at load time, see ``slimtables.config.apply_config``.
    """
    global _default_child_kind
    _default_child_kind = kind


def get_default_child_kind() -> str:
    return _default_child_kind


class ScenarioTable(SlimTable):
    """Declares a scenario and expands it at each call site.

    The header is parsed when the document collects assertions; the
    scenario then registers itself by name and adds no assertions of its
    own. Calls clone the table, substitute the arguments and run the copy
    as a child script under a ``ScenarioTestContext``.
    """

    table_kind = "scenario"

    def __init__(self, table: Table, table_id: str, test_context: SlimTestContext):
        super().__init__(table, table_id, test_context)
        self.definition: Optional[ScenarioDefinition] = None
        self._call_count = 0

    def get_assertions(self) -> list[SlimAssertion]:
        self.parse_table()
        return []

    def parse_table(self) -> ScenarioDefinition:
        """Parse the header and register the scenario.

        Raises:
            SlimSyntaxError: If the header has no name cell
        """
        self.definition = parse_header(self.table)
        self.test_context.add_scenario(self.definition.name, self)
        logger.debug(
            f"Registered scenario {self.definition.name} "
            f"(inputs={self.definition.inputs}, outputs={sorted(self.definition.outputs)})"
        )
        return self.definition

    def _require_definition(self) -> ScenarioDefinition:
        if self.definition is None:
            return self.parse_table()
        return self.definition

    @property
    def name(self) -> str:
        return self._require_definition().name

    @property
    def inputs(self) -> list[str]:
        return list(self._require_definition().inputs)

    @property
    def outputs(self) -> set[str]:
        return set(self._require_definition().outputs)

    @property
    def parameterized(self) -> bool:
        return self._require_definition().parameterized

    def match_parameters(self, phrase: str) -> Optional[list[str]]:
        """Arguments captured from ``phrase``, or None if it does not invoke this scenario."""
        return match_template(self._require_definition().name_template, phrase)

    def call(
        self, arguments: Mapping[str, str], parent_table: SlimTable, row: int
    ) -> list[SlimAssertion]:
        """Expand the scenario for a call with named arguments.

        Raises:
            SlimSyntaxError: If an argument is not a declared input
            TableCreationError: If no child table can run the body
        """
        definition = self._require_definition()
        return self._expand(bind_named(definition.inputs, arguments), parent_table, row)

    def call_positional(
        self, arguments: Sequence[str], parent_table: SlimTable, row: int
    ) -> list[SlimAssertion]:
        """Expand the scenario for a call with arguments in declaration order."""
        definition = self._require_definition()
        return self._expand(bind_positional(definition.inputs, arguments), parent_table, row)

    def expand(self, binding: CallBinding) -> Table:
        """The body as it will run for ``binding``."""
        return expand_body(self.table, binding, self._require_definition().inputs)

    def _expand(self, binding: CallBinding, parent_table: SlimTable, row: int) -> list[SlimAssertion]:
        new_table = self.expand(binding)
        test_context = ScenarioTestContext(parent_table.test_context)
        child = self.create_child(test_context, parent_table, new_table)
        parent_table.add_child_table(child, row)

        logger.debug(f"Expanding scenario {self.name} at row {row} of {parent_table.id} as {child.id}")

        assertions = child.get_assertions()
        assertions.append(
            child.make_assertion(
                Instruction.noop(child.make_instruction_id()),
                ScenarioExpectation(self, child, test_context, row),
            )
        )
        return assertions

    def create_child(
        self, test_context: ScenarioTestContext, parent_table: SlimTable, new_table: Table
    ) -> ScriptTable:
        """Child of the caller's kind if that is a script kind, else the default kind."""
        factory = get_default_factory()
        kind = parent_table.table_kind
        if not factory.is_script_kind(kind):
            kind = get_default_child_kind()

        child_id = f"{self.id}_{self._call_count}"
        self._call_count += 1

        child = factory.create_table(kind, new_table, child_id, test_context)
        if not isinstance(child, ScriptTable):
            raise TableCreationError(f"Table kind {kind} cannot run a scenario")
        return child


class ScenarioExpectation(Expectation):
    """Applies the scenario verdict to the calling row.

    Runs after every assertion of the expanded body. The row is marked
    when the scenario declares no outputs or did not pass; otherwise the
    checks on the calling row decide its status.
    """

    def __init__(
        self,
        scenario: ScenarioTable,
        child: ScriptTable,
        test_context: ScenarioTestContext,
        row: int,
    ):
        self.scenario = scenario
        self.child = child
        self.test_context = test_context
        self.row = row

    def evaluate_expectation(self, return_value: Any) -> Optional[TestResult]:
        status = self.test_context.execution_result
        if not self.scenario.outputs or status != ExecutionResult.PASS:
            logger.debug(f"Scenario {self.scenario.name} marks row {self.row}: {status.value}")
            self.child.parent.table.update_row(self.row, TestResult(status))
        return None
