"""Core data models for Plugin Arena.

This module defines the primary data structures used throughout the package:
- Plugin: A community plugin competing in pairwise votes
- Vote: A single recorded comparison outcome
- MetricsSnapshot: A daily star count used to derive growth
- Result types: VotePair, VoteOutcome, RankedPlugin, RankingPage, ScoreUpdateResult
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC; leave aware ones alone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Category(str, Enum):
    """Plugin categories."""

    MCP = "mcp"
    SKILL = "skill"
    HOOK = "hook"
    COMMAND = "command"


class RankingType(str, Enum):
    """Ranking views over the same plugin pool.

    NOW blends ELO with total stars, CLASSIC leans on stars, and TREND
    blends ELO with recent star growth.
    """

    NOW = "now"
    TREND = "trend"
    CLASSIC = "classic"


class Confidence(str, Enum):
    """How much a plugin's ELO can be trusted, based on vote count."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QualityLabel(str, Enum):
    """Descriptive label for how evenly matched a pair is."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class Plugin(BaseModel):
    """A plugin ranked by the arena.

    Attributes:
        id: Unique identifier.
        name: Display name.
        github_url: Source repository URL.
        category: Plugin category.
        keywords: Free-form search keywords.
        tags: Free-form tags.
        description: Optional description text.
        github_stars: Current star count (raw popularity).
        github_stars_60d: Star growth over the trailing window.
        elo_score: Current ELO rating.
        vote_count: Number of comparisons this plugin took part in.
        composite_score_now: Stored composite score for the default view.
        is_hidden: Hidden plugins never enter sampling or scoring.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: str
    name: str = ""
    github_url: str = ""
    category: Category = Category.SKILL
    keywords: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    github_stars: int = Field(default=0, ge=0)
    github_stars_60d: int = Field(default=0, ge=0)
    elo_score: float = 1500.0
    vote_count: int = Field(default=0, ge=0)
    composite_score_now: float = 0.0
    is_hidden: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Vote(BaseModel):
    """A recorded comparison: one voter preferred winner over loser.

    Attributes:
        id: Unique identifier.
        winner_id: Plugin that won the comparison.
        loser_id: Plugin that lost the comparison.
        voter_fingerprint: Opaque voter identity, used only for cooldowns.
        created_at: When the vote was cast.
    """

    id: str
    winner_id: str
    loser_id: str
    voter_fingerprint: str
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("created_at")
    @classmethod
    def _aware_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def _distinct_plugins(self) -> Vote:
        if self.winner_id == self.loser_id:
            raise ValueError("winner_id and loser_id must differ")
        return self

    def involves_pair(self, plugin_a: str, plugin_b: str) -> bool:
        """Check whether this vote was cast on the unordered pair (a, b)."""
        return {self.winner_id, self.loser_id} == {plugin_a, plugin_b}


class MetricsSnapshot(BaseModel):
    """Star count for one plugin on one day."""

    plugin_id: str
    stars: int = Field(ge=0)
    recorded_at: date


class MatchQuality(BaseModel):
    """How close a presented pair is in ELO.

    Attributes:
        elo_difference: Absolute ELO gap between the two plugins.
        quality: Step label derived from the gap.
    """

    elo_difference: float
    quality: QualityLabel


class VotePair(BaseModel):
    """A pair of plugins served for voting.

    Attributes:
        plugin_a: Left-hand plugin (the focus plugin in focused mode).
        plugin_b: Right-hand plugin.
        match_quality: Descriptor of the pair's ELO gap.
        focused_mode: Whether plugin_a was pinned by the caller.
        focus_plugin_id: Id of the pinned plugin in focused mode.
    """

    plugin_a: Plugin
    plugin_b: Plugin
    match_quality: MatchQuality | None = None
    focused_mode: bool = False
    focus_plugin_id: str | None = None


class VoteOutcome(BaseModel):
    """Result of recording a vote."""

    winner_id: str
    loser_id: str
    new_winner_elo: float
    new_loser_elo: float


class RankedPlugin(Plugin):
    """A plugin with its position in a ranking view.

    Attributes:
        rank: Position in the view (1-indexed, global across pages).
        composite_score: View-specific score (0-100, two decimals).
        confidence: Confidence class from vote count.
    """

    rank: int
    composite_score: float = 0.0
    confidence: Confidence = Confidence.LOW


class RankingPage(BaseModel):
    """One page of a ranking view."""

    plugins: list[RankedPlugin] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 20


class ScoreUpdateResult(BaseModel):
    """Counters for one periodic score refresh cycle.

    Attributes:
        total_plugins: Visible plugins considered.
        stars_updated: Plugins whose star count was written.
        history_recorded: Daily snapshots upserted.
        sixty_day_calculated: Plugins whose growth metric was recomputed.
        composite_score_updated: Plugins whose composite score was written.
        old_records_deleted: Snapshots pruned past the retention window.
        errors: Per-plugin failures; these never abort the cycle.
    """

    total_plugins: int = 0
    stars_updated: int = 0
    history_recorded: int = 0
    sixty_day_calculated: int = 0
    composite_score_updated: int = 0
    old_records_deleted: int = 0
    errors: list[str] = Field(default_factory=list)
