"""Scenario tables for slimtables."""

from slimtables.core.scenario.header import (
    ScenarioDefinition,
    is_name_parameterized,
    parse_header,
    unparameterize,
)
from slimtables.core.scenario.matcher import (
    Literal,
    Placeholder,
    match_template,
    render_template,
    tokenize_parameterized_name,
)
from slimtables.core.scenario.binder import CallBinding, bind_named, bind_positional
from slimtables.core.scenario.templater import expand_body, substitute_arguments
from slimtables.core.scenario.context import ScenarioTestContext
from slimtables.core.scenario.table import (
    ScenarioExpectation,
    ScenarioTable,
    get_default_child_kind,
    set_default_child_kind,
)

__all__ = [
    # Header
    "ScenarioDefinition",
    "is_name_parameterized",
    "parse_header",
    "unparameterize",
    # Matching
    "Literal",
    "Placeholder",
    "match_template",
    "render_template",
    "tokenize_parameterized_name",
    # Binding and expansion
    "CallBinding",
    "bind_named",
    "bind_positional",
    "expand_body",
    "substitute_arguments",
    # Execution
    "ScenarioTestContext",
    "ScenarioExpectation",
    "ScenarioTable",
    "get_default_child_kind",
    "set_default_child_kind",
]
