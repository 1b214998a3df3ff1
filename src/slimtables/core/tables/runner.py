"""Sequential assertion evaluation."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

from slimtables.core.context import SlimTestContext
from slimtables.core.results import TestResult
from slimtables.core.tables.assertions import FixtureException, Instruction, SlimAssertion

logger = logging.getLogger(__name__)

Executor = Callable[[Instruction], Any]

SYMBOL_REFERENCE = re.compile(r"\$([A-Za-z]\w*)")


def resolve_symbols(text: str, context: Optional[SlimTestContext]) -> str:
    """Replace ``$name`` references with symbol values.

    Unknown symbols are left as written.
    """
    if context is None:
        return text

    def replacer(match):
        value = context.get_symbol(match.group(1))
        return match.group(0) if value is None else value

    return SYMBOL_REFERENCE.sub(replacer, text)


def run_assertions(assertions: list[SlimAssertion], executor: Executor) -> list[Optional[TestResult]]:
    """Evaluate assertions strictly in order.

    Args:
        assertions: Assertions as produced by the tables
        executor: Called with every non-noop instruction

    Returns:
        The result of each expectation (``None`` where nothing was recorded)
    """
    results: list[Optional[TestResult]] = []

    for assertion in assertions:
        instruction = assertion.instruction

        if instruction.is_noop:
            return_value = None
        else:
            instruction = instruction.with_args(
                tuple(resolve_symbols(a, assertion.context) for a in instruction.args)
            )
            try:
                return_value = executor(instruction)
            except Exception as e:
                logger.warning(f"Instruction {instruction.id} ({instruction.method}) raised: {e}")
                return_value = FixtureException(f"{type(e).__name__}: {e}")

        result = assertion.expectation.evaluate_expectation(return_value)
        logger.debug(f"Instruction {instruction.id}: {result}")
        results.append(result)

    return results
