"""Scoring module for Plugin Arena.

This module provides the ELO rating system and the composite scores used
by the ranking views.

Components:
    - ELO: ELO rating math and confidence classification
    - RatingTracker: Tracks ELO ratings across a series of votes
    - Scorer: Builds paginated ranking views
    - composite_score / trend_score: View-specific blends on a 0-100 scale

Example:
    ```python
    from plugin_arena.scorer import ELO, composite_score

    new_winner, new_loser = ELO.update(1500, 1500)  # (1516.0, 1484.0)
    score = composite_score(new_winner, stars=250, max_stars=4000, vote_count=1)
    ```
"""

from .composite import (
    Scorer,
    composite_score,
    normalize_elo,
    normalize_stars,
    score_for_view,
    trend_score,
)
from .elo import ELO, RatingTracker

__all__ = [
    "Scorer",
    "ELO",
    "RatingTracker",
    "composite_score",
    "trend_score",
    "normalize_elo",
    "normalize_stars",
    "score_for_view",
]
