"""Configuration for slimtables."""

from slimtables.config.loader import apply_config, load_config
from slimtables.config.schema import SlimTablesConfig

__all__ = ["SlimTablesConfig", "apply_config", "load_config"]
