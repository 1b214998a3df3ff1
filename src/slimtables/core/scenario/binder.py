"""Binding call arguments to declared scenario inputs."""

from __future__ import annotations

from typing import Mapping, Sequence

from slimtables.errors import SlimSyntaxError

CallBinding = dict[str, str]


def check_declared(inputs: Sequence[str], names) -> None:
    """Raise for the first name that is not a declared input."""
    declared = set(inputs)
    for name in names:
        if name not in declared:
            raise SlimSyntaxError(f"The argument {name} is not an input to the scenario.")


def bind_named(inputs: Sequence[str], arguments: Mapping[str, str]) -> CallBinding:
    """Bind a name-to-value mapping.

    Raises:
        SlimSyntaxError: If a name is not a declared input
    """
    check_declared(inputs, arguments)
    return {name: value for name, value in arguments.items()}


def bind_positional(inputs: Sequence[str], values: Sequence[str]) -> CallBinding:
    """Pair declared inputs with values in order.

    Extra values and unmatched inputs are dropped without error.
    """
    return dict(zip(inputs, values))
