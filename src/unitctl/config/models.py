"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``unitctl.toml`` only holds
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DisplayConfig(BaseModel):
    """[display] section — decimal places shown for results."""

    model_config = {"frozen": True}

    linear_precision: int = Field(default=6, ge=0, le=15)
    temperature_precision: int = Field(default=4, ge=0, le=15)


class SessionConfig(BaseModel):
    """[session] section."""

    model_config = {"frozen": True}

    default_domain: str = "Length"


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    prompt: str = "unitctl> "
    history_limit_display: int = Field(default=20, ge=1)
