"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``mediatorkit.toml`` only
contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True}

    strict: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str | None = None
    disabled: list[str] = Field(default_factory=list)
