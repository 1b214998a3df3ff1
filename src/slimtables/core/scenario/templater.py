"""Argument substitution into a scenario body."""

from __future__ import annotations

import re
from typing import Sequence

from slimtables.core.scenario.binder import CallBinding, check_declared
from slimtables.core.table import Table

SIGIL = "@"


def substitute_arguments(content: str, binding: CallBinding) -> str:
    """Replace ``@name`` and ``@{name}`` with the bound values.

    Longer names are tried first so that ``@xy`` is not taken for ``@x``
    followed by ``y``. Substituted values are never scanned again.
    """
    if not binding:
        return content

    names = "|".join(re.escape(name) for name in sorted(binding, key=len, reverse=True))
    pattern = re.compile(rf"{SIGIL}\{{({names})\}}|{SIGIL}({names})")
    return pattern.sub(lambda m: binding[m.group(1) if m.group(1) is not None else m.group(2)], content)


def expand_body(body: Table, binding: CallBinding, inputs: Sequence[str]) -> Table:
    """Clone ``body`` with every bound argument substituted.

    Raises:
        SlimSyntaxError: If the binding names an undeclared input. Nothing
            is cloned in that case.
    """
    check_declared(inputs, binding)
    return body.as_template(lambda content: substitute_arguments(content, binding))
