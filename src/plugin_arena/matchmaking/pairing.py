"""Pair selection for voting.

Two entry points sit on top of the tiering primitives:

- ``select_pair`` samples both plugins from the pool.
- ``select_opponent`` pins one plugin (focused mode) and samples its opponent.

Both prefer opponents from nearby tiers and within the ELO gap, but treat
those preferences as soft: when they leave no candidate, the gap limit is
dropped before giving up. Only an exhausted pool yields ``None``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from ..config import MatchmakingConfig
from ..models import MatchQuality, Plugin, QualityLabel
from .tiers import (
    adjacent_candidates,
    assign_tiers,
    filter_by_elo_difference,
    find_tier,
    select_tier_weighted,
    select_with_vote_boost,
)

logger = logging.getLogger(__name__)

DEFAULT_MATCHMAKING_CONFIG = MatchmakingConfig()

# (max ELO gap, label), checked in order
QUALITY_STEPS: list[tuple[float, QualityLabel]] = [
    (50, QualityLabel.EXCELLENT),
    (100, QualityLabel.GOOD),
    (200, QualityLabel.FAIR),
]


def _pick_opponent(
    anchor: Plugin,
    scoped: list[Plugin],
    fallback: list[Plugin],
    config: MatchmakingConfig,
    rng: random.Random | None,
) -> Plugin | None:
    candidates = filter_by_elo_difference(
        scoped,
        anchor.elo_score,
        config.max_elo_difference,
        anchor.id,
    )
    if not candidates:
        logger.debug(
            f"No opponent within {config.max_elo_difference} ELO of '{anchor.id}', "
            "widening to the full pool"
        )
        candidates = [p for p in fallback if p.id != anchor.id]
        if not candidates:
            return None

    return select_with_vote_boost(candidates, config, exclude_id=anchor.id, rng=rng)


def select_pair(
    plugins: Sequence[Plugin],
    config: MatchmakingConfig | None = None,
    rng: random.Random | None = None,
) -> tuple[Plugin, Plugin] | None:
    """Select two plugins to compare.

    1. Split the visible pool into tiers and pick a tier, favouring the top.
    2. Pick the first plugin from that tier, boosting low-vote plugins.
    3. With ``same_tier_probability``, look for the second plugin in the
       first plugin's tier and its neighbours; otherwise in the whole pool.
    4. Drop candidates outside ``max_elo_difference``; if none remain, fall
       back to the whole pool.
    5. Pick the second plugin, boosting low-vote plugins.
    6. Swap the order half the time to avoid left/right bias.

    Args:
        plugins: Plugin pool. Hidden plugins are ignored.
        config: Matchmaking tunables (defaults apply when omitted).
        rng: Random source for all draws.

    Returns:
        Tuple of two distinct plugins, or None if fewer than two are visible.

    Example:
        ```python
        pair = select_pair(plugins, MatchmakingConfig(tier_count=3), random.Random(7))
        if pair is None:
            ...  # not enough plugins yet
        ```
    """
    config = config or DEFAULT_MATCHMAKING_CONFIG
    rng = rng or random.Random()

    pool = [p for p in plugins if not p.is_hidden]
    if len(pool) < 2:
        return None

    tiers = assign_tiers(pool, config.tier_count)
    selected_tier = select_tier_weighted(tiers, config.top_tier_bias, rng)
    tier_plugins = tiers.get(selected_tier, [])
    if not tier_plugins:
        return None

    first = select_with_vote_boost(tier_plugins, config, rng=rng)
    if first is None:
        return None

    if rng.random() < config.same_tier_probability:
        scoped = adjacent_candidates(tiers, selected_tier)
    else:
        scoped = pool

    second = _pick_opponent(first, scoped, pool, config, rng)
    if second is None:
        return None

    logger.debug(f"Selected pair '{first.id}' vs '{second.id}' from tier {selected_tier}")

    if rng.random() < 0.5:
        return first, second
    return second, first


def select_opponent(
    focus: Plugin,
    candidates: Sequence[Plugin],
    config: MatchmakingConfig | None = None,
    rng: random.Random | None = None,
) -> Plugin | None:
    """Select an opponent for a pinned plugin (focused mode).

    Runs the same tier, gap and vote-boost pipeline as ``select_pair`` with
    the first plugin fixed to ``focus``. The focus plugin's tier is found by
    membership in tiers built over ``candidates``; if the caller left it out
    of ``candidates`` the top tier is used. The order is left to the caller.

    Args:
        focus: The pinned plugin.
        candidates: Potential opponents. Hidden plugins are ignored.
        config: Matchmaking tunables (defaults apply when omitted).
        rng: Random source for all draws.

    Returns:
        An opponent whose id differs from ``focus.id``, or None if there is none.
    """
    config = config or DEFAULT_MATCHMAKING_CONFIG
    rng = rng or random.Random()

    pool = [p for p in candidates if not p.is_hidden]
    available = [p for p in pool if p.id != focus.id]
    if not available:
        return None

    tiers = assign_tiers(pool, config.tier_count)
    focus_tier = find_tier(tiers, focus.id)
    if focus_tier is None:
        focus_tier = 0

    if rng.random() < config.same_tier_probability:
        scoped = [p for p in adjacent_candidates(tiers, focus_tier) if p.id != focus.id]
    else:
        scoped = available

    return _pick_opponent(focus, scoped, available, config, rng)


def match_quality(plugin_a: Plugin, plugin_b: Plugin) -> MatchQuality:
    """Describe how evenly matched two plugins are.

    Returns:
        MatchQuality with the absolute ELO gap and a label: excellent up to
        50, good up to 100, fair up to 200, poor beyond.
    """
    elo_difference = abs(plugin_a.elo_score - plugin_b.elo_score)

    for limit, label in QUALITY_STEPS:
        if elo_difference <= limit:
            return MatchQuality(elo_difference=elo_difference, quality=label)

    return MatchQuality(elo_difference=elo_difference, quality=QualityLabel.POOR)
