"""Execution context shared by the tables of one test document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from slimtables.core.results import ExecutionResult, TestSummary

if TYPE_CHECKING:
    from slimtables.core.scenario.table import ScenarioTable

logger = logging.getLogger(__name__)


class SlimTestContext:
    """Capabilities every table sees while it is built and evaluated.

    Subclasses must implement every method; ``ScenarioTestContext`` wraps
    another context and forwards to it.
    """

    def get_symbol(self, name: str) -> Optional[str]:
        raise NotImplementedError

    def set_symbol(self, name: str, value: str) -> None:
        raise NotImplementedError

    def add_scenario(self, name: str, scenario: "ScenarioTable") -> None:
        raise NotImplementedError

    def get_scenario(self, name: str) -> Optional["ScenarioTable"]:
        raise NotImplementedError

    def get_scenarios(self) -> list["ScenarioTable"]:
        raise NotImplementedError

    def increment(self, result: ExecutionResult) -> None:
        raise NotImplementedError

    def increment_summary(self, summary: TestSummary) -> None:
        raise NotImplementedError

    def increment_passed(self) -> None:
        self.increment(ExecutionResult.PASS)

    def increment_failed(self) -> None:
        self.increment(ExecutionResult.FAIL)

    def increment_errored(self) -> None:
        self.increment(ExecutionResult.ERROR)

    def increment_ignored(self) -> None:
        self.increment(ExecutionResult.IGNORE)


class TestContext(SlimTestContext):
    """Top-level context for one document execution."""

    __test__ = False

    def __init__(self):
        self.symbols: dict[str, str] = {}
        self.scenarios: dict[str, "ScenarioTable"] = {}
        self.summary = TestSummary()

    def get_symbol(self, name: str) -> Optional[str]:
        return self.symbols.get(name)

    def set_symbol(self, name: str, value: str) -> None:
        self.symbols[name] = value

    def add_scenario(self, name: str, scenario: "ScenarioTable") -> None:
        if name in self.scenarios:
            logger.debug(f"Replacing scenario registration: {name}")
            # Re-insert so enumeration order follows the latest registration
            del self.scenarios[name]
        self.scenarios[name] = scenario

    def get_scenario(self, name: str) -> Optional["ScenarioTable"]:
        return self.scenarios.get(name)

    def get_scenarios(self) -> list["ScenarioTable"]:
        return list(self.scenarios.values())

    def increment(self, result: ExecutionResult) -> None:
        self.summary.add(result)

    def increment_summary(self, summary: TestSummary) -> None:
        self.summary.add_summary(summary)
