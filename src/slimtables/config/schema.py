"""Configuration schema for slimtables using Pydantic."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ScenarioConfig(BaseModel):
    """Scenario expansion settings."""

    default_child_kind: str = "script"  # Used when the caller is not a script table


class DocumentConfig(BaseModel):
    """Test document loading settings."""

    expand_env_vars: bool = True  # Expand ${VAR} in cells


class SlimTablesConfig(BaseModel):
    """Root configuration model for slimtables."""

    version: int = 1
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)

    @classmethod
    def get_default(cls) -> "SlimTablesConfig":
        """Return default configuration."""
        return cls()
