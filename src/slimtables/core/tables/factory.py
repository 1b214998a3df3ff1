"""Creates tables of a given kind."""

from __future__ import annotations

import logging
from typing import Optional

from slimtables.core.context import SlimTestContext
from slimtables.core.table import Table
from slimtables.core.tables.base import SlimTable
from slimtables.errors import TableCreationError

logger = logging.getLogger(__name__)


class SlimTableFactory:
    """Maps kind tags such as ``script`` to table classes."""

    def __init__(self):
        self._kinds: dict[str, type[SlimTable]] = {}

    def register(self, kind: str, table_class: type[SlimTable]) -> None:
        self._kinds[kind.lower()] = table_class

    def get_table_class(self, kind: str) -> Optional[type[SlimTable]]:
        return self._kinds.get(kind.lower())

    def is_script_kind(self, kind: str) -> bool:
        """Whether ``kind`` names a table that can run a scenario body."""
        from slimtables.core.tables.script import ScriptTable

        table_class = self.get_table_class(kind)
        return table_class is not None and issubclass(table_class, ScriptTable)

    def create_table(
        self, kind: str, table: Table, table_id: str, test_context: SlimTestContext
    ) -> SlimTable:
        """Create a table of the given kind.

        Raises:
            TableCreationError: If the kind is not registered
        """
        table_class = self.get_table_class(kind)
        if table_class is None:
            raise TableCreationError(f"Unknown table kind: {kind}")

        logger.debug(f"Creating {kind} table {table_id}")
        return table_class(table, table_id, test_context)

    def make_table(self, table: Table, table_id: str, test_context: SlimTestContext) -> SlimTable:
        """Create a table whose kind is named by its first cell."""
        if table.get_row_count() == 0 or table.get_column_count_in_row(0) == 0:
            raise TableCreationError(f"Table {table_id} is empty")

        kind = table.get_cell_contents(0, 0).strip()
        return self.create_table(kind, table, table_id, test_context)


_default_factory: Optional[SlimTableFactory] = None


def get_default_factory() -> SlimTableFactory:
    """Factory with the built-in ``script`` and ``scenario`` kinds."""
    global _default_factory

    if _default_factory is None:
        from slimtables.core.scenario.table import ScenarioTable
        from slimtables.core.tables.script import ScriptTable

        factory = SlimTableFactory()
        factory.register(ScriptTable.table_kind, ScriptTable)
        factory.register(ScenarioTable.table_kind, ScenarioTable)
        _default_factory = factory

    return _default_factory
