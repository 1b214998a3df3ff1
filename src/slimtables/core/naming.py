"""Identifier normalization for free-text cell contents."""

from __future__ import annotations

import re

_SEPARATOR = re.compile(r"[^A-Za-z0-9_]+")


def _words(text: str) -> list[str]:
    return [w for w in _SEPARATOR.split(text.strip()) if w]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def disgrace_class_name(text: str) -> str:
    """Turn cell text into a class-style identifier.

    Example:
        "add and" -> "AddAnd"
    """
    return "".join(_capitalize(w) for w in _words(text))


def disgrace_method_name(text: str) -> str:
    """Turn cell text into a method-style identifier.

    Example:
        "first name" -> "firstName", "total?" -> "total"
    """
    name = disgrace_class_name(text)
    return name[:1].lower() + name[1:]
