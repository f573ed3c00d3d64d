"""Composite scoring for ranking views.

Blends ELO with GitHub popularity signals onto a common 0-100 scale.
Star counts are heavy-tailed, so they are log-normalized before blending.
While a plugin has few votes its ELO is down-weighted in favour of the
popularity signal.
"""

from __future__ import annotations

import logging
import math

from ..models import Category, Plugin, RankedPlugin, RankingPage, RankingType
from .elo import ELO

logger = logging.getLogger(__name__)

# Votes needed before ELO gets its full weight in a blend
MIN_VOTES_FOR_FULL_WEIGHT = 10

NOW_WEIGHTS = (0.6, 0.4)
CLASSIC_WEIGHTS = (0.3, 0.7)


def normalize_stars(stars: float, max_stars: float) -> float:
    """Log-normalize a star count against the largest count in the set.

    Args:
        stars: Star count (or star growth) of one plugin.
        max_stars: Largest value in the set being ranked.

    Returns:
        Score in [0, 100]. 0 when either argument is non-positive.
    """
    if stars <= 0 or max_stars <= 0:
        return 0.0

    log_stars = math.log10(stars + 1)
    log_max = math.log10(max_stars + 1)

    return min(100.0, log_stars / log_max * 100)


def normalize_elo(elo: float) -> float:
    """Map the 1000-2000 ELO band onto 0-100, saturating outside it."""
    return min(100.0, max(0.0, (elo - 1000) / 10))


def composite_score(
    elo: float,
    stars: float,
    max_stars: float,
    vote_count: int,
    elo_weight: float = NOW_WEIGHTS[0],
    github_weight: float = NOW_WEIGHTS[1],
) -> float:
    """Blend ELO and stars into a 0-100 composite score.

    Below 10 votes the ELO weight is scaled by ``vote_count / 10`` and the
    star weight takes up the rest, so a rating built on a handful of votes
    cannot dominate.

    Args:
        elo: Plugin's ELO rating.
        stars: Plugin's star count.
        max_stars: Largest star count in the set.
        vote_count: Plugin's vote count.
        elo_weight: ELO weight once the plugin has enough votes.
        github_weight: Star weight once the plugin has enough votes.

    Returns:
        Composite score in [0, 100].

    Example:
        ```python
        composite_score(1600, 1000, 1000, vote_count=50)  # 0.6*60 + 0.4*100 = 76.0
        composite_score(1600, 1000, 1000, vote_count=0)   # 100.0, stars only
        ```
    """
    normalized_elo = normalize_elo(elo)
    normalized_github = normalize_stars(stars, max_stars)

    adjusted_elo_weight = elo_weight
    adjusted_github_weight = github_weight

    if vote_count < MIN_VOTES_FOR_FULL_WEIGHT:
        confidence = vote_count / MIN_VOTES_FOR_FULL_WEIGHT
        adjusted_elo_weight = elo_weight * confidence
        adjusted_github_weight = 1 - adjusted_elo_weight

    return normalized_elo * adjusted_elo_weight + normalized_github * adjusted_github_weight


def trend_score(
    stars_60d: float,
    max_stars_60d: float,
    elo: float,
    vote_count: int,
) -> float:
    """Blend recent star growth with ELO into a 0-100 trend score.

    Growth counts for 80% while the plugin has fewer than 10 votes and 50%
    afterwards.
    """
    normalized_growth = normalize_stars(stars_60d, max_stars_60d)
    normalized_elo = normalize_elo(elo)

    if vote_count < MIN_VOTES_FOR_FULL_WEIGHT:
        return normalized_growth * 0.8 + normalized_elo * 0.2

    return normalized_growth * 0.5 + normalized_elo * 0.5


def score_for_view(
    plugin: Plugin,
    ranking_type: RankingType,
    max_stars: float,
    max_stars_60d: float,
    now_weights: tuple[float, float] = NOW_WEIGHTS,
    classic_weights: tuple[float, float] = CLASSIC_WEIGHTS,
) -> float:
    """Score a plugin for one ranking view."""
    if ranking_type == RankingType.TREND:
        return trend_score(
            plugin.github_stars_60d,
            max_stars_60d,
            plugin.elo_score,
            plugin.vote_count,
        )

    weights = classic_weights if ranking_type == RankingType.CLASSIC else now_weights
    return composite_score(
        plugin.elo_score,
        plugin.github_stars,
        max_stars,
        plugin.vote_count,
        *weights,
    )


def _sort_key(ranking_type: RankingType):
    if ranking_type == RankingType.TREND:
        return lambda p: (-p.github_stars_60d, p.id)
    if ranking_type == RankingType.CLASSIC:
        return lambda p: (-p.github_stars, p.id)
    return lambda p: (-p.composite_score_now, p.id)


class Scorer:
    """Builds ranking views over a plugin pool.

    Example:
        ```python
        page = Scorer.rank(plugins, RankingType.TREND, page=1, per_page=20)
        for plugin in page.plugins:
            print(plugin.rank, plugin.name, plugin.composite_score)
        ```
    """

    @staticmethod
    def rank(
        plugins: list[Plugin],
        ranking_type: RankingType | str = RankingType.NOW,
        page: int = 1,
        per_page: int = 20,
        category: Category | str | None = None,
        now_weights: tuple[float, float] = NOW_WEIGHTS,
        classic_weights: tuple[float, float] = CLASSIC_WEIGHTS,
    ) -> RankingPage:
        """Rank visible plugins for one view and return one page.

        Plugins are ordered by the view's stored sort key (composite score
        for NOW, total stars for CLASSIC, star growth for TREND). The
        displayed score is recomputed per plugin, with maxima taken over the
        page being returned.

        Args:
            plugins: Plugin pool. Hidden plugins are skipped.
            ranking_type: Which view to build.
            page: 1-indexed page number.
            per_page: Page size.
            category: Optional category filter.
            now_weights: (elo, stars) weights of the NOW view.
            classic_weights: (elo, stars) weights of the CLASSIC view.

        Returns:
            RankingPage with globally numbered ranks.
        """
        ranking_type = RankingType(ranking_type)
        page = max(1, page)
        per_page = max(1, per_page)

        visible = [p for p in plugins if not p.is_hidden]
        if category is not None:
            category = Category(category)
            visible = [p for p in visible if p.category == category]

        ordered = sorted(visible, key=_sort_key(ranking_type))
        start = (page - 1) * per_page
        window = ordered[start : start + per_page]

        if not window:
            return RankingPage(plugins=[], total=len(ordered), page=page, per_page=per_page)

        max_stars = max(p.github_stars for p in window)
        max_stars_60d = max(p.github_stars_60d for p in window)

        ranked = [
            RankedPlugin(
                **plugin.model_dump(),
                rank=start + index + 1,
                composite_score=round(
                    score_for_view(
                        plugin,
                        ranking_type,
                        max_stars,
                        max_stars_60d,
                        now_weights,
                        classic_weights,
                    ),
                    2,
                ),
                confidence=ELO.classify_confidence(plugin.vote_count),
            )
            for index, plugin in enumerate(window)
        ]
        logger.debug(
            f"Ranked {len(ranked)} of {len(ordered)} plugins "
            f"(view={ranking_type.value}, page={page})"
        )

        return RankingPage(plugins=ranked, total=len(ordered), page=page, per_page=per_page)
