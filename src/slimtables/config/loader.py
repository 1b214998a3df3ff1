"""Configuration loader for slimtables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from slimtables.config.schema import SlimTablesConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".slimtables.yaml", ".slimtables.yml", "slimtables.yaml", "slimtables.yml"]
GLOBAL_CONFIG_DIR = Path.home() / ".config" / "slimtables"
GLOBAL_CONFIG_FILE = GLOBAL_CONFIG_DIR / "config.yaml"


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file in current or parent directories."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    # Search upward for config file
    while current != current.parent:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.exists():
                return config_path
        current = current.parent

    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load YAML configuration file."""
    if not path.exists():
        return {}

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
        return data if data else {}


def load_config(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
) -> SlimTablesConfig:
    """Load and merge configuration from all sources.

    Priority (later overrides earlier):
    1. Built-in defaults
    2. Global config (~/.config/slimtables/config.yaml)
    3. Project config (.slimtables.yaml)
    4. Explicit config file (if provided)
    """
    config_data: Dict[str, Any] = {}

    if GLOBAL_CONFIG_FILE.exists():
        global_data = load_yaml_file(GLOBAL_CONFIG_FILE)
        config_data = _deep_merge(config_data, global_data)

    project_file = find_config_file(project_dir)
    if project_file:
        logger.debug(f"Using project config: {project_file}")
        config_data = _deep_merge(config_data, load_yaml_file(project_file))

    if config_file and config_file.exists():
        logger.debug(f"Using config file: {config_file}")
        config_data = _deep_merge(config_data, load_yaml_file(config_file))

    return SlimTablesConfig(**config_data) if config_data else SlimTablesConfig()


def apply_config(config: SlimTablesConfig) -> None:
    """Install process-wide settings. Call once before loading documents.

    Raises:
        ValueError: If the default child kind cannot run a scenario body
    """
    from slimtables.core.scenario.table import set_default_child_kind
    from slimtables.core.tables.factory import get_default_factory

    kind = config.scenario.default_child_kind
    if not get_default_factory().is_script_kind(kind):
        raise ValueError(f"Unknown script table kind for scenario bodies: {kind}")

    set_default_child_kind(kind)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config(config: SlimTablesConfig, path: Path) -> None:
    """Save configuration to YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_defaults=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
