"""Configuration for Plugin Arena.

This module provides the matchmaking and scoring settings, loadable from
environment variables or a YAML file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

# field name -> (environment variable, parser)
_MATCHMAKING_ENV_VARS: dict[str, tuple[str, type]] = {
    "tier_count": ("MATCHMAKING_TIER_COUNT", int),
    "same_tier_probability": ("MATCHMAKING_SAME_TIER_PROB", float),
    "top_tier_bias": ("MATCHMAKING_TOP_TIER_BIAS", float),
    "max_elo_difference": ("MATCHMAKING_MAX_ELO_DIFF", int),
    "low_vote_threshold": ("MATCHMAKING_LOW_VOTE_THRESHOLD", int),
    "low_vote_boost": ("MATCHMAKING_LOW_VOTE_BOOST", float),
}


class MatchmakingConfig(BaseModel):
    """Tunables for pair selection.

    Attributes:
        tier_count: Number of ELO strata the pool is split into.
        same_tier_probability: Chance the second plugin is drawn from the
            first plugin's tier or its neighbours; otherwise the whole pool.
        top_tier_bias: Base of the geometric tier weights (1.0 = uniform).
        max_elo_difference: Largest ELO gap preferred for a pair.
        low_vote_threshold: Plugins below this vote count get boosted.
        low_vote_boost: Sampling weight for boosted plugins (others are 1.0).
    """

    tier_count: int = Field(default=5, ge=1)
    same_tier_probability: float = Field(default=0.85, ge=0.0, le=1.0)
    top_tier_bias: float = Field(default=1.5, gt=0.0)
    max_elo_difference: float = Field(default=300, ge=0)
    low_vote_threshold: int = Field(default=10, ge=0)
    low_vote_boost: float = Field(default=2.0, gt=0.0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MatchmakingConfig:
        """Load matchmaking settings from ``MATCHMAKING_*`` environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            MatchmakingConfig instance.

        Raises:
            ConfigError: If a variable cannot be parsed or is out of range.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field, (env_var, parse) in _MATCHMAKING_ENV_VARS.items():
            raw = environ.get(env_var)
            if raw is None or raw == "":
                continue
            try:
                values[field] = parse(raw)
            except ValueError:
                raise ConfigError(
                    f"cannot parse {env_var}={raw!r} as {parse.__name__}",
                    field=field,
                ) from None
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(str(e)) from e


class ScoringConfig(BaseModel):
    """Tunables for ELO updates and ranking views.

    Attributes:
        k_factor: ELO K-factor for every vote.
        now_weights: (elo, stars) weights of the default view.
        classic_weights: (elo, stars) weights of the classic view.
        growth_window_days: Window for the star growth metric.
        history_retention_days: Snapshots older than this are pruned.
        vote_cooldown_hours: Window in which a voter may not repeat a pair.
    """

    k_factor: int = Field(default=32, ge=1, le=100)
    now_weights: tuple[float, float] = (0.6, 0.4)
    classic_weights: tuple[float, float] = (0.3, 0.7)
    growth_window_days: int = Field(default=60, ge=1)
    history_retention_days: int = Field(default=90, ge=1)
    vote_cooldown_hours: int = Field(default=24, ge=0)

    @field_validator("now_weights", "classic_weights")
    @classmethod
    def validate_weights(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Validate that a weight pair is non-negative and sums to 1."""
        if min(v) < 0 or abs(sum(v) - 1.0) > 1e-9:
            raise ValueError(f"Weights {v} must be non-negative and sum to 1")
        return v


class ArenaConfig(BaseModel):
    """Full Arena configuration, typically loaded from YAML.

    Example YAML:
        ```yaml
        matchmaking:
          tier_count: 4
          top_tier_bias: 1.0
        scoring:
          vote_cooldown_hours: 12
        ```
    """

    matchmaking: MatchmakingConfig = Field(default_factory=MatchmakingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str | Path) -> ArenaConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            ArenaConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the YAML is not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file: expected dict, got {type(data).__name__}")

        return cls(**data)
