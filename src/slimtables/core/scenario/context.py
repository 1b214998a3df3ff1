"""Nested execution context for one scenario call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from slimtables.core.context import SlimTestContext
from slimtables.core.results import ExecutionResult, TestSummary

if TYPE_CHECKING:
    from slimtables.core.scenario.table import ScenarioTable

logger = logging.getLogger(__name__)


class ScenarioTestContext(SlimTestContext):
    """Wraps the caller's context and keeps a private tally.

    Every outcome is forwarded to the wrapped context, so document totals
    stay exact, and also counted locally to derive the verdict of the call.
    """

    def __init__(self, test_context: SlimTestContext):
        self.test_context = test_context
        self.summary = TestSummary()
        self.closed = False

    def get_symbol(self, name: str) -> Optional[str]:
        return self.test_context.get_symbol(name)

    def set_symbol(self, name: str, value: str) -> None:
        self.test_context.set_symbol(name, value)

    def add_scenario(self, name: str, scenario: "ScenarioTable") -> None:
        self.test_context.add_scenario(name, scenario)

    def get_scenario(self, name: str) -> Optional["ScenarioTable"]:
        return self.test_context.get_scenario(name)

    def get_scenarios(self) -> list["ScenarioTable"]:
        return self.test_context.get_scenarios()

    def increment(self, result: ExecutionResult) -> None:
        if self.closed:
            logger.warning(f"Outcome {result.value} counted after the scenario verdict was read")
        self.test_context.increment(result)
        self.summary.add(result)

    def increment_summary(self, summary: TestSummary) -> None:
        self.test_context.increment_summary(summary)
        self.summary.add_summary(summary)

    @property
    def execution_result(self) -> ExecutionResult:
        """Verdict of the call. Reading it closes the tally."""
        self.closed = True
        return self.summary.execution_result
