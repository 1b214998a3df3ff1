"""YAML test document loader."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from slimtables.core.context import TestContext
from slimtables.core.naming import disgrace_class_name
from slimtables.core.results import TestResult
from slimtables.core.scenario.table import ScenarioTable
from slimtables.core.table import Table
from slimtables.core.tables.assertions import SlimAssertion
from slimtables.core.tables.base import SlimTable
from slimtables.core.tables.factory import SlimTableFactory, get_default_factory
from slimtables.core.tables.runner import Executor, run_assertions
from slimtables.errors import SlimSyntaxError

logger = logging.getLogger(__name__)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} patterns in data with environment variables.

    Args:
        data: Data structure (dict, list, or str)

    Returns:
        Data with environment variables expanded
    """
    if isinstance(data, str):
        pattern = re.compile(r'\$\{([^}]+)\}')
        def replacer(match):
            var_name = match.group(1)
            return os.environ.get(var_name, '')
        return pattern.sub(replacer, data)
    elif isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    else:
        return data


def _load_yaml(stream: Any) -> Any:
    # BaseLoader keeps every scalar as written, so `yes` or `1.0` stay cell text
    try:
        return yaml.load(stream, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise SlimSyntaxError(f"Invalid YAML: {e}") from e


@dataclass
class TestDocument:
    """Tables of one test document sharing one context."""
    tables: list[SlimTable] = field(default_factory=list)
    context: TestContext = field(default_factory=TestContext)
    source_path: Optional[Path] = None
    _assertions: dict[str, list[SlimAssertion]] = field(default_factory=dict, repr=False)

    __test__ = False

    @property
    def scenarios(self) -> list[ScenarioTable]:
        return self.context.get_scenarios()

    def assertions_for(self, table: SlimTable) -> list[SlimAssertion]:
        """Assertions of ``table``, built on first use only.

        Building twice would expand every scenario call again.
        """
        if table.id not in self._assertions:
            self._assertions[table.id] = table.get_assertions()
        return self._assertions[table.id]

    def collect(self) -> list[SlimTable]:
        """Build every table's assertions without running them.

        Scenario tables register themselves here, in document order.
        """
        for table in self.tables:
            self.assertions_for(table)
        return self.tables

    def run(self, executor: Executor) -> list[Optional[TestResult]]:
        """Collect and evaluate the tables one after another."""
        results: list[Optional[TestResult]] = []
        for table in self.tables:
            assertions = self.assertions_for(table)
            logger.debug(f"Running {len(assertions)} assertions of {table.id}")
            results.extend(run_assertions(assertions, executor))
        return results

    def find_scenario_call(self, phrase: str) -> tuple[Optional[ScenarioTable], list[str]]:
        """Resolve a phrase the way a script row would.

        Returns:
            The matching scenario and its positional arguments, or
            (None, []) when no scenario is invoked by the phrase
        """
        scenario = self.context.get_scenario(disgrace_class_name(phrase))
        if scenario is not None:
            return scenario, []

        for scenario in self.context.get_scenarios():
            arguments = scenario.match_parameters(phrase)
            if arguments is not None:
                return scenario, arguments
        return None, []


class DocumentParser:
    """Builds a ``TestDocument`` from YAML.

    Expected layout::

        tables:
          - rows:
              - [scenario, add _ and _, "x, y, sum?"]
              - [push, "@x"]
              - [push, "@{y}"]
              - [check, total, "$sum="]
          - rows:
              - [script]
              - [add 1 and 2]

    A table may also be given directly as its list of rows.
    """

    def __init__(self, factory: Optional[SlimTableFactory] = None, expand_env: bool = True):
        self.factory = factory or get_default_factory()
        self.expand_env = expand_env

    def parse(self, path: Path) -> TestDocument:
        """Parse a test document from a YAML file.

        Raises:
            SlimSyntaxError: If the file is missing, empty or malformed
            TableCreationError: If a table names an unknown kind
        """
        if not path.exists():
            raise SlimSyntaxError(f"Test document not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = _load_yaml(f)

        if not data:
            raise SlimSyntaxError(f"Empty test document: {path}")

        document = self._parse_document(data)
        document.source_path = path
        return document

    def parse_string(self, content: str) -> TestDocument:
        data = _load_yaml(content)
        if not data:
            raise SlimSyntaxError("Empty test document")
        return self._parse_document(data)

    def _parse_document(self, data: Any) -> TestDocument:
        if self.expand_env:
            data = expand_env_vars(data)

        if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
            raise SlimSyntaxError("Test document must contain a 'tables' list")

        document = TestDocument()
        for index, table_data in enumerate(data["tables"]):
            table = Table.from_rows(self._parse_rows(table_data, index))
            kind = table.get_cell_contents(0, 0).strip().lower()
            document.tables.append(
                self.factory.make_table(table, f"{kind}Table_{index}", document.context)
            )

        logger.debug(f"Loaded {len(document.tables)} tables")
        return document

    def _parse_rows(self, table_data: Any, index: int) -> list[list]:
        rows = table_data.get("rows") if isinstance(table_data, dict) else table_data

        if not isinstance(rows, list) or not rows:
            raise SlimSyntaxError(f"Table {index} has no rows")

        for row in rows:
            if not isinstance(row, list) or not row:
                raise SlimSyntaxError(f"Table {index}: every row must be a non-empty list of cells")

        return rows
