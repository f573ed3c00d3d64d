"""Plugin Arena - Rank community plugins by pairwise votes.

Votes between two plugins update ELO ratings, which are blended with
GitHub popularity into three ranking views. Matchmaking decides which
two plugins a voter sees next.

Example:
    ```python
    from plugin_arena import Arena, InMemoryStore, Plugin

    arena = Arena(InMemoryStore([Plugin(id="a"), Plugin(id="b"), Plugin(id="c")]))

    pair = arena.next_pair()
    arena.record_vote(pair.plugin_a.id, pair.plugin_b.id, voter="fp-123")

    page = arena.rankings("now")
    print(page.plugins[0].id)
    ```
"""

from .arena import Arena
from .config import ArenaConfig, MatchmakingConfig, ScoringConfig
from .exceptions import (
    ConfigError,
    DuplicateVoteError,
    InvalidVoteError,
    NotEnoughPluginsError,
    PluginArenaError,
    PluginNotFoundError,
)
from .matchmaking import (
    assign_tiers,
    match_quality,
    select_opponent,
    select_pair,
    select_tier_weighted,
    select_with_vote_boost,
)
from .models import (
    Category,
    Confidence,
    MatchQuality,
    MetricsSnapshot,
    Plugin,
    QualityLabel,
    RankedPlugin,
    RankingPage,
    RankingType,
    ScoreUpdateResult,
    Vote,
    VoteOutcome,
    VotePair,
)
from .reporter import TextReporter, print_results
from .scorer import ELO, RatingTracker, Scorer, composite_score, normalize_stars, trend_score
from .store import BaseStore, InMemoryStore

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "Arena",
    # Configuration
    "ArenaConfig",
    "MatchmakingConfig",
    "ScoringConfig",
    # Core models
    "Plugin",
    "Category",
    "Vote",
    "MetricsSnapshot",
    # Result models
    "VotePair",
    "VoteOutcome",
    "MatchQuality",
    "QualityLabel",
    "RankedPlugin",
    "RankingPage",
    "RankingType",
    "Confidence",
    "ScoreUpdateResult",
    # Scorer
    "ELO",
    "RatingTracker",
    "Scorer",
    "composite_score",
    "trend_score",
    "normalize_stars",
    # Matchmaking
    "select_pair",
    "select_opponent",
    "match_quality",
    "assign_tiers",
    "select_tier_weighted",
    "select_with_vote_boost",
    # Storage
    "BaseStore",
    "InMemoryStore",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "PluginArenaError",
    "ConfigError",
    "InvalidVoteError",
    "PluginNotFoundError",
    "DuplicateVoteError",
    "NotEnoughPluginsError",
]
