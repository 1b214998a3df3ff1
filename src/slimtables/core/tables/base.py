"""Base class for interpreted tables."""

from __future__ import annotations

from typing import Optional

from slimtables.core.context import SlimTestContext
from slimtables.core.table import Table
from slimtables.core.tables.assertions import Expectation, Instruction, SlimAssertion


class SlimTable:
    """A table of a given kind, bound to an execution context."""

    table_kind = "table"

    def __init__(self, table: Table, table_id: str, test_context: SlimTestContext):
        self.table = table
        self.id = table_id
        self.test_context = test_context
        self.parent: Optional[SlimTable] = None
        self.children: list[SlimTable] = []
        self._instruction_number = 0

    def get_assertions(self) -> list[SlimAssertion]:
        """Build the assertions for this table."""
        raise NotImplementedError

    def add_child_table(self, child: "SlimTable", row: int) -> None:
        child.parent = self
        self.children.append(child)
        self.table.add_child_table(child, row)

    def make_instruction_id(self) -> str:
        instruction_id = f"{self.id}_{self._instruction_number}"
        self._instruction_number += 1
        return instruction_id

    def make_assertion(self, instruction: Instruction, expectation: Expectation) -> SlimAssertion:
        return SlimAssertion(instruction, expectation, context=self.test_context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"
