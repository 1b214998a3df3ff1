"""Table interpreters for slimtables."""

from slimtables.core.tables.assertions import (
    Expectation,
    FixtureException,
    Instruction,
    RowExpectation,
    SlimAssertion,
)
from slimtables.core.tables.base import SlimTable
from slimtables.core.tables.factory import SlimTableFactory, get_default_factory
from slimtables.core.tables.runner import run_assertions
from slimtables.core.tables.script import ScriptTable

__all__ = [
    "Expectation",
    "FixtureException",
    "Instruction",
    "RowExpectation",
    "SlimAssertion",
    "SlimTable",
    "SlimTableFactory",
    "get_default_factory",
    "run_assertions",
    "ScriptTable",
]
