"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, roverctl.toml only contains
overrides.  A missing file means every default applies.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- roverctl.toml sections ---


class RunnerConfig(BaseModel):
    """[runner] section."""

    model_config = {"frozen": True}

    parallel: bool = False
    max_workers: int | None = Field(default=None, ge=1)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    color: bool = True
    width: int = Field(default=120, ge=20)

