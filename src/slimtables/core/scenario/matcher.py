"""Matching invocation phrases against parameterized scenario names.

A parameterized name such as ``add _ and _`` is kept as a sequence of
literal and placeholder tokens. The same tokens drive both the regular
expression used for matching and the display form of the name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

PLACEHOLDER_TEXT = "_"

# A standalone underscore: not glued to a word character on either side
_PLACEHOLDER = re.compile(r"(?<!\w)_(?!\w)")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    pass


NameToken = Union[Literal, Placeholder]


def tokenize_parameterized_name(name: str) -> tuple[NameToken, ...]:
    """Split a name cell into literal text and placeholder tokens."""
    tokens: list[NameToken] = []
    position = 0
    for match in _PLACEHOLDER.finditer(name):
        if match.start() > position:
            tokens.append(Literal(name[position:match.start()]))
        tokens.append(Placeholder())
        position = match.end()
    if position < len(name):
        tokens.append(Literal(name[position:]))
    return tuple(tokens)


def alternating_name_template(fragments: Sequence[str], argument_count: int) -> tuple[NameToken, ...]:
    """Template for an alternating header.

    Each name fragment is followed by a placeholder when an argument
    column follows it, everything separated by single spaces.
    """
    parts: list[NameToken] = []
    for index, fragment in enumerate(fragments):
        parts.append(Literal(fragment.strip()))
        if index < argument_count:
            parts.append(Placeholder())

    tokens: list[NameToken] = []
    for index, part in enumerate(parts):
        if index > 0:
            tokens.append(Literal(" "))
        tokens.append(part)
    return tuple(tokens)


def render_template(tokens: Sequence[NameToken]) -> str:
    return "".join(
        PLACEHOLDER_TEXT if isinstance(t, Placeholder) else t.text for t in tokens
    )


def placeholder_count(tokens: Sequence[NameToken]) -> int:
    return sum(1 for t in tokens if isinstance(t, Placeholder))


def template_pattern(tokens: Sequence[NameToken]) -> re.Pattern:
    """Regular expression capturing one group per placeholder."""
    return re.compile(
        "".join("(.*)" if isinstance(t, Placeholder) else re.escape(t.text) for t in tokens)
    )


def match_template(tokens: Sequence[NameToken], phrase: str) -> Optional[list[str]]:
    """Extract the placeholder values from ``phrase``.

    Returns:
        One captured string per placeholder, left to right, or None if the
        whole phrase does not fit the template
    """
    if not tokens:
        return None

    match = template_pattern(tokens).fullmatch(phrase)
    if match is None:
        return None
    return list(match.groups())
