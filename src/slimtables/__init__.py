"""Slimtables - scenario tables for table-driven fixture tests."""

__version__ = "0.1.0"
