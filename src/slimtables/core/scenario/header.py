"""Scenario header parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from slimtables.core.naming import disgrace_class_name, disgrace_method_name
from slimtables.core.scenario.matcher import (
    NameToken,
    alternating_name_template,
    tokenize_parameterized_name,
)
from slimtables.core.table import Table
from slimtables.errors import SlimSyntaxError

# An underscore preceded by a non-word character and followed by one (or the end)
UNDERSCORE_PATTERN = re.compile(r"\W_(?=\W|$)")

OUTPUT_MARKER = "?"


@dataclass
class ScenarioDefinition:
    """Name and parameters declared by a scenario header."""
    name: str
    parameterized: bool
    inputs: list[str] = field(default_factory=list)
    outputs: set[str] = field(default_factory=set)
    name_template: tuple[NameToken, ...] = ()

    def add_argument(self, token: str) -> None:
        """Classify a raw header token as an input or an output."""
        token = token.strip()
        if not token:
            return
        if token.endswith(OUTPUT_MARKER):
            self.outputs.add(disgrace_method_name(token[: -len(OUTPUT_MARKER)]))
        else:
            self.inputs.append(disgrace_method_name(token))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "parameterized": self.parameterized,
            "inputs": list(self.inputs),
            "outputs": sorted(self.outputs),
        }


def is_name_parameterized(name_cell: str) -> bool:
    return UNDERSCORE_PATTERN.search(name_cell) is not None


def unparameterize(name_cell: str) -> str:
    """Canonical name of a parameterized name cell.

    Example:
        "add _ and _" -> "AddAnd"
    """
    return disgrace_class_name(UNDERSCORE_PATTERN.sub(" ", name_cell).strip())


def parse_header(table: Table) -> ScenarioDefinition:
    """Parse the first row of a scenario table.

    Two layouts are accepted::

        | scenario | add _ and _ | x, y       |
        | scenario | add | x | and | y | sum? |

    Raises:
        SlimSyntaxError: If the header has no name cell
    """
    columns = table.get_column_count_in_row(0)
    if columns <= 1:
        raise SlimSyntaxError("Scenario tables must have a name.")

    name_cell = table.get_cell_contents(1, 0)

    if is_name_parameterized(name_cell):
        definition = ScenarioDefinition(
            name=unparameterize(name_cell),
            parameterized=True,
            name_template=tokenize_parameterized_name(name_cell),
        )
        if columns > 2:
            for token in table.get_cell_contents(2, 0).split(","):
                definition.add_argument(token)
        return definition

    fragments = [table.get_cell_contents(col, 0) for col in range(1, columns, 2)]
    arguments = [table.get_cell_contents(col, 0) for col in range(2, columns, 2)]

    definition = ScenarioDefinition(
        name=disgrace_class_name(" ".join(fragments).strip()),
        parameterized=False,
    )
    for token in arguments:
        definition.add_argument(token)

    if definition.inputs:
        definition.name_template = alternating_name_template(fragments, len(arguments))

    return definition
