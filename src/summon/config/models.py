"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, summon.toml only contains overrides.
An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    detect_cycles: bool = True
    max_depth: int | None = Field(default=None, ge=0)
    cache_plans: bool = False


class ExecutionConfig(BaseModel):
    """[execution] section."""

    model_config = {"frozen": True}

    deep_copy_facts: bool = False


class SpellbookConfig(BaseModel):
    """[spellbook] section.

    ``modules`` lists ``package.module[:attr]`` references loaded at startup;
    ``plugins`` toggles entry-point discovery.
    """

    model_config = {"frozen": True}

    modules: list[str] = Field(default_factory=list)
    plugins: bool = True


class SummonConfig(BaseModel):
    """Root model for a whole summon.toml file."""

    model_config = {"frozen": True}

    search: SearchConfig = Field(default_factory=SearchConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    spellbook: SpellbookConfig = Field(default_factory=SpellbookConfig)
