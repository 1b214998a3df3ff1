"""Tests for scenario registration, expansion and roll-up."""

import pytest

from slimtables.core.results import ExecutionResult, TestSummary
from slimtables.core.scenario.context import ScenarioTestContext
from slimtables.core.scenario.table import ScenarioTable, set_default_child_kind
from slimtables.core.tables.base import SlimTable
from slimtables.core.tables.factory import get_default_factory
from slimtables.core.tables.runner import run_assertions
from slimtables.core.tables.script import ScriptTable
from slimtables.errors import SlimSyntaxError


class CustomScriptTable(ScriptTable):
    table_kind = "custom"


class DecisionLikeTable(SlimTable):
    table_kind = "decision"

    def get_assertions(self):
        return []


@pytest.fixture
def custom_kind(monkeypatch):
    """Register a script subclass in the default factory for one test."""
    monkeypatch.setitem(get_default_factory()._kinds, "custom", CustomScriptTable)


@pytest.fixture
def caller(make_table, context):
    """A script table with a calling row at index 1."""
    return ScriptTable(make_table(["script"], ["add 3 and 4"]), "scriptTable_1", context)


@pytest.fixture
def add_scenario(make_table, context):
    """A registered scenario adding two numbers."""
    scenario = ScenarioTable(
        make_table(
            ["scenario", "add _ and _", "x, y"],
            ["push", "@x"],
            ["push", "@{y}"],
            ["check", "total", "7"],
        ),
        "scenarioTable_0",
        context,
    )
    assert scenario.get_assertions() == []
    return scenario


def with_outputs(make_table, context):
    scenario = ScenarioTable(
        make_table(
            ["scenario", "add _ and _", "x, y, sum?"],
            ["push", "@x"],
            ["push", "@y"],
            ["check", "total", "7"],
        ),
        "scenarioTable_0",
        context,
    )
    scenario.get_assertions()
    return scenario


def test_scenario_registers_itself(add_scenario, context):
    """Test that parsing registers the scenario by name."""
    assert context.get_scenario("AddAnd") is add_scenario
    assert add_scenario.inputs == ["x", "y"]
    assert add_scenario.outputs == set()
    assert add_scenario.parameterized is True


def test_invalid_header_registers_nothing(make_table, context):
    """Test that a malformed header fails before registration."""
    scenario = ScenarioTable(make_table(["scenario"]), "scenarioTable_0", context)

    with pytest.raises(SlimSyntaxError):
        scenario.get_assertions()
    assert context.get_scenarios() == []


def test_call_expands_body(add_scenario, caller):
    """Test that a call substitutes arguments into a child script."""
    assertions = add_scenario.call({"x": "3", "y": "4"}, caller, 1)

    child = caller.children[0]
    assert isinstance(child, ScriptTable)
    assert child.parent is caller
    assert caller.table.children[1] == [child]
    assert child.table.get_row(1) == ["push", "3"]
    assert child.table.get_row(2) == ["push", "4"]
    assert add_scenario.table.get_row(1) == ["push", "@x"]

    assert [a.instruction.method for a in assertions[:-1]] == ["push", "push", "total"]
    assert assertions[-1].instruction.is_noop


def test_call_positional(add_scenario, caller):
    """Test a positional call binds in declaration order."""
    add_scenario.call_positional(["5", "6", "extra"], caller, 1)

    child = caller.children[0]
    assert child.table.get_row(1) == ["push", "5"]
    assert child.table.get_row(2) == ["push", "6"]


def test_call_with_unknown_argument(add_scenario, caller):
    """Test that an undeclared argument stops the call."""
    with pytest.raises(SlimSyntaxError, match="The argument z is not an input"):
        add_scenario.call({"x": "3", "z": "4"}, caller, 1)

    assert caller.children == []


def test_child_uses_nested_context(add_scenario, caller, context):
    """Test that the child runs under a wrapper of the caller's context."""
    add_scenario.call({"x": "1", "y": "2"}, caller, 1)

    child_context = caller.children[0].test_context
    assert isinstance(child_context, ScenarioTestContext)
    assert child_context.test_context is context


def test_child_kind_follows_script_caller(add_scenario, make_table, context, custom_kind):
    """Test that a script-kind caller gets a child of its own kind."""
    caller = CustomScriptTable(make_table(["custom"], ["x"]), "customTable_1", context)

    add_scenario.call({"x": "1", "y": "2"}, caller, 1)

    assert type(caller.children[0]) is CustomScriptTable


def test_child_kind_defaults_for_other_callers(add_scenario, make_table, context, custom_kind):
    """Test that non-script callers get the configured default kind."""
    caller = DecisionLikeTable(make_table(["decision"], ["x"]), "decisionTable_1", context)

    add_scenario.call({"x": "1", "y": "2"}, caller, 1)
    assert type(caller.children[0]) is ScriptTable

    set_default_child_kind("custom")
    add_scenario.call({"x": "1", "y": "2"}, caller, 1)
    assert type(caller.children[1]) is CustomScriptTable


def test_aggregator_forwards_and_tallies(context):
    """Test that every outcome reaches both tallies."""
    nested = ScenarioTestContext(context)
    nested.increment_passed()
    nested.increment_failed()
    nested.increment_summary(TestSummary(ignores=2))

    assert context.summary == TestSummary(right=1, wrong=1, ignores=2)
    assert nested.summary == TestSummary(right=1, wrong=1, ignores=2)
    assert nested.execution_result == ExecutionResult.FAIL
    assert nested.closed


def test_aggregator_forwards_symbols_and_scenarios(context, add_scenario):
    """Test that symbols and the scenario registry are shared."""
    nested = ScenarioTestContext(context)
    nested.set_symbol("total", "7")

    assert context.get_symbol("total") == "7"
    assert nested.get_scenario("AddAnd") is add_scenario
    assert nested.get_scenarios() == [add_scenario]


@pytest.mark.parametrize(
    "summary, expected",
    [
        (TestSummary(), ExecutionResult.PASS),
        (TestSummary(right=3), ExecutionResult.PASS),
        (TestSummary(right=1, ignores=1), ExecutionResult.IGNORE),
        (TestSummary(right=5, wrong=1, ignores=2), ExecutionResult.FAIL),
        (TestSummary(wrong=4, exceptions=1), ExecutionResult.ERROR),
    ],
)
def test_verdict_precedence(summary, expected):
    """Test error > fail > ignore > pass."""
    assert ExecutionResult.from_summary(summary) == expected


def test_roll_up_marks_row_without_outputs(add_scenario, caller, make_executor):
    """Test that a passing scenario without outputs marks the calling row."""
    assertions = add_scenario.call({"x": "3", "y": "4"}, caller, 1)
    run_assertions(assertions, make_executor({"total": 7}))

    assert caller.table.row_status(1).execution_result == ExecutionResult.PASS


def test_roll_up_leaves_row_with_outputs_on_pass(make_table, context, caller, make_executor):
    """Test that a passing scenario with outputs leaves the row alone."""
    scenario = with_outputs(make_table, context)

    assertions = scenario.call({"x": "3", "y": "4"}, caller, 1)
    run_assertions(assertions, make_executor({"total": 7}))

    assert caller.table.row_status(1) is None


def test_roll_up_marks_failure_regardless_of_outputs(make_table, context, caller, make_executor):
    """Test that a failing scenario always marks the row."""
    scenario = with_outputs(make_table, context)

    assertions = scenario.call({"x": "3", "y": "4"}, caller, 1)
    run_assertions(assertions, make_executor({"push": True, "total": 8}))

    assert caller.table.row_status(1).execution_result == ExecutionResult.FAIL
    assert context.summary == TestSummary(right=2, wrong=1)


def test_roll_up_marks_error(add_scenario, caller, make_executor, context):
    """Test that a fixture exception becomes an error verdict."""
    assertions = add_scenario.call({"x": "3", "y": "4"}, caller, 1)
    results = run_assertions(assertions, make_executor({"total": RuntimeError("boom")}))

    assert caller.table.row_status(1).execution_result == ExecutionResult.ERROR
    assert "boom" in results[2].message
    assert context.summary == TestSummary(exceptions=1)


def test_roll_up_runs_last(add_scenario, caller, make_executor):
    """Test that the verdict is read only after the body ran."""
    assertions = add_scenario.call({"x": "3", "y": "4"}, caller, 1)
    run_assertions(assertions[:-1], make_executor({"total": 7}))

    assert caller.table.row_status(1) is None

    run_assertions(assertions[-1:], make_executor())
    assert caller.table.row_status(1).execution_result == ExecutionResult.PASS


def test_reregistration_keeps_resolved_calls(add_scenario, make_table, context, caller, make_executor):
    """Test that a later scenario with the same name only affects later lookups."""
    resolved = context.get_scenario("AddAnd")
    early = resolved.call_positional(["3", "4"], caller, 1)

    replacement = ScenarioTable(
        make_table(["scenario", "add _ and _", "a, b"], ["check", "total", "@a"]),
        "scenarioTable_9",
        context,
    )
    replacement.get_assertions()

    assert context.get_scenario("AddAnd") is replacement
    assert context.get_scenarios() == [replacement]
    assert [a.instruction.method for a in early[:-1]] == ["push", "push", "total"]
    assert caller.children[0].table.get_row(1) == ["push", "3"]
