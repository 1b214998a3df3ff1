"""Exceptions raised while building tables from a test document."""

from __future__ import annotations


class SlimError(Exception):
    """Base class for slimtables errors."""


class SlimSyntaxError(SlimError, ValueError):
    """Structural problem in a table or in a scenario call."""


class TableCreationError(SlimError):
    """A table of the requested kind could not be created."""
