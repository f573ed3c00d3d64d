"""Matchmaking module.

Chooses which plugins to put in front of a voter:
- select_pair: Sample a pair from the whole pool
- select_opponent: Sample an opponent for a pinned plugin
- match_quality: Label how close a pair is in ELO
- assign_tiers and friends: The stratified sampling primitives underneath
"""

from .pairing import DEFAULT_MATCHMAKING_CONFIG, match_quality, select_opponent, select_pair
from .tiers import (
    adjacent_candidates,
    assign_tiers,
    filter_by_elo_difference,
    find_tier,
    select_tier_weighted,
    select_with_vote_boost,
    weighted_choice,
)

__all__ = [
    "DEFAULT_MATCHMAKING_CONFIG",
    "select_pair",
    "select_opponent",
    "match_quality",
    "assign_tiers",
    "select_tier_weighted",
    "select_with_vote_boost",
    "filter_by_elo_difference",
    "adjacent_candidates",
    "find_tier",
    "weighted_choice",
]
