"""Tiering and weighted sampling primitives for matchmaking.

The pool is split into contiguous ELO strata (tier 0 is the top). Tiers
are recomputed from the current snapshot on every call; nothing here
keeps state between calls. All random draws go through an injectable
``random.Random`` so tests can seed or script them.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import TypeVar

from ..config import MatchmakingConfig
from ..models import Plugin

T = TypeVar("T")

Tiers = dict[int, list[Plugin]]


def weighted_choice(
    items: Sequence[T],
    weights: Sequence[float],
    rng: random.Random | None = None,
) -> T | None:
    """Pick one item with probability proportional to its weight.

    Scans cumulative weights against a single uniform draw. Floating-point
    underrun falls through to the last item.

    Args:
        items: Candidates.
        weights: Positive weight per candidate.
        rng: Random source (defaults to the ``random`` module).

    Returns:
        The chosen item, or None if ``items`` is empty.
    """
    if not items:
        return None

    remaining = (rng or random).random() * sum(weights)
    for item, weight in zip(items, weights):
        remaining -= weight
        if remaining <= 0:
            return item

    return items[-1]


def assign_tiers(plugins: Sequence[Plugin], tier_count: int) -> Tiers:
    """Split plugins into ELO tiers.

    Plugins are sorted by ELO descending, with id ascending as the tie-break
    so equal ratings always land in the same order. Each tier gets
    ``len // tier_count`` plugins and the remainder goes one per tier from
    the top, so upper tiers are never smaller than lower ones. Tiers that
    would be empty are left out of the mapping.

    Args:
        plugins: Plugin pool.
        tier_count: Number of tiers to split into.

    Returns:
        Mapping of tier index to plugins in that tier (best first).

    Example:
        ```python
        tiers = assign_tiers(plugins, 5)  # 12 plugins -> sizes 3, 3, 2, 2, 2
        ```
    """
    if not plugins:
        return {}
    tier_count = max(1, tier_count)

    ordered = sorted(plugins, key=lambda p: (-p.elo_score, p.id))
    base_size, remainder = divmod(len(ordered), tier_count)

    tiers: Tiers = {}
    start = 0
    for tier in range(tier_count):
        size = base_size + (1 if tier < remainder else 0)
        members = ordered[start : start + size]
        if members:
            tiers[tier] = members
        start += size

    return tiers


def select_tier_weighted(
    tiers: Tiers,
    top_tier_bias: float,
    rng: random.Random | None = None,
) -> int:
    """Pick a tier index, favouring upper tiers.

    Tier ``t`` gets weight ``top_tier_bias ** (n - t - 1)`` where ``n`` is the
    number of non-empty tiers. A bias of 1.0 is uniform. Using the configured
    tier count for ``n`` instead only rescales every weight by the same
    factor, so the distribution is unchanged.

    Weights are computed in log space and shifted so the largest is 1.0,
    which keeps them finite for any tier count.

    Returns:
        A key of ``tiers`` (0 if ``tiers`` is empty).
    """
    tier_numbers = sorted(tiers)
    if not tier_numbers:
        return 0

    count = len(tier_numbers)
    log_bias = math.log(top_tier_bias)
    exponents = [(count - tier - 1) * log_bias for tier in tier_numbers]
    peak = max(exponents)
    weights = [math.exp(e - peak) for e in exponents]

    return weighted_choice(tier_numbers, weights, rng)


def select_with_vote_boost(
    plugins: Sequence[Plugin],
    config: MatchmakingConfig,
    exclude_id: str | None = None,
    rng: random.Random | None = None,
) -> Plugin | None:
    """Pick a plugin, oversampling those with few votes.

    Plugins under ``config.low_vote_threshold`` votes weigh
    ``config.low_vote_boost``; all others weigh 1.0.

    Returns:
        The chosen plugin, or None if nothing is left after exclusion.
    """
    available = [p for p in plugins if p.id != exclude_id] if exclude_id else list(plugins)
    if not available:
        return None

    weights = [
        config.low_vote_boost if p.vote_count < config.low_vote_threshold else 1.0
        for p in available
    ]
    return weighted_choice(available, weights, rng)


def filter_by_elo_difference(
    plugins: Sequence[Plugin],
    target_elo: float,
    max_diff: float,
    exclude_id: str,
) -> list[Plugin]:
    """Keep plugins within ``max_diff`` ELO of ``target_elo``, minus ``exclude_id``."""
    return [
        p for p in plugins
        if p.id != exclude_id and abs(p.elo_score - target_elo) <= max_diff
    ]


def adjacent_candidates(tiers: Tiers, tier: int) -> list[Plugin]:
    """Plugins in ``tier`` and its immediate neighbours, top tier first."""
    return [
        plugin
        for neighbour in (tier - 1, tier, tier + 1)
        for plugin in tiers.get(neighbour, [])
    ]


def find_tier(tiers: Tiers, plugin_id: str) -> int | None:
    """Locate the tier holding ``plugin_id``."""
    for tier, members in tiers.items():
        if any(p.id == plugin_id for p in members):
            return tier
    return None
