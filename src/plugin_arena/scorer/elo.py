"""ELO rating system for plugin rankings.

This module implements the ELO rating system commonly used in chess and
other competitive games, adapted for pairwise plugin votes where a user
picks the better of two plugins.
"""

from __future__ import annotations

from ..models import Confidence


class ELO:
    """ELO rating system for plugin rankings.

    After each vote both plugins have their ratings adjusted. The amount
    depends on how surprising the result was given their current ratings.
    Ratings are not clamped.

    Example:
        ```python
        # After a vote where plugin_a (1500) beats plugin_b (1400)
        new_a, new_b = ELO.update(1500, 1400)
        # new_a ≈ 1511.52, new_b ≈ 1388.48

        confidence = ELO.classify_confidence(12)  # Confidence.MEDIUM
        ```
    """

    DEFAULT_RATING = 1500.0
    DEFAULT_K = 32
    SCALE = 400

    HIGH_CONFIDENCE_VOTES = 50
    MEDIUM_CONFIDENCE_VOTES = 10

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Calculate the probability that plugin A beats plugin B.

        Args:
            rating_a: ELO rating of plugin A.
            rating_b: ELO rating of plugin B.

        Returns:
            Expected score between 0 and 1. ``expected_score(a, b) +
            expected_score(b, a) == 1``.

        Example:
            ```python
            ELO.expected_score(1500, 1500)  # 0.5
            ELO.expected_score(1600, 1400)  # ~0.76
            ```
        """
        return 1 / (1 + 10 ** ((rating_b - rating_a) / ELO.SCALE))

    @staticmethod
    def update(
        winner_elo: float,
        loser_elo: float,
        k: int = DEFAULT_K,
    ) -> tuple[float, float]:
        """Update ELO ratings after a vote.

        The winner moves toward an actual score of 1 and the loser toward 0.
        Both results are rounded to two decimals so stored values stay stable.

        Args:
            winner_elo: Current ELO rating of the winner.
            loser_elo: Current ELO rating of the loser.
            k: K-factor determining rating volatility (default 32).

        Returns:
            Tuple of (new_winner_elo, new_loser_elo).

        Example:
            ```python
            ELO.update(1500, 1500)  # (1516.0, 1484.0)

            # Upset victory moves ratings further
            ELO.update(1400, 1600)  # (1424.31, 1575.69)
            ```
        """
        expected_winner = ELO.expected_score(winner_elo, loser_elo)
        expected_loser = ELO.expected_score(loser_elo, winner_elo)

        new_winner = winner_elo + k * (1.0 - expected_winner)
        new_loser = loser_elo + k * (0.0 - expected_loser)

        return round(new_winner, 2), round(new_loser, 2)

    @staticmethod
    def classify_confidence(vote_count: int) -> Confidence:
        """Classify how trustworthy a rating is from its vote count.

        Args:
            vote_count: Number of votes the plugin took part in.

        Returns:
            HIGH at 50+ votes, MEDIUM at 10+, LOW otherwise.
        """
        if vote_count >= ELO.HIGH_CONFIDENCE_VOTES:
            return Confidence.HIGH
        if vote_count >= ELO.MEDIUM_CONFIDENCE_VOTES:
            return Confidence.MEDIUM
        return Confidence.LOW

    @classmethod
    def create_tracker(
        cls,
        plugin_ids: list[str],
        initial_rating: float = DEFAULT_RATING,
        k: int = DEFAULT_K,
    ) -> RatingTracker:
        """Create a rating tracker for a set of plugins.

        Args:
            plugin_ids: Plugin ids to track.
            initial_rating: Starting ELO rating (default 1500).
            k: K-factor for rating updates (default 32).

        Returns:
            RatingTracker instance.
        """
        return RatingTracker(plugin_ids, initial_rating, k)


class RatingTracker:
    """Tracks ELO ratings and vote counts for plugins over a series of votes.

    Useful for simulating a vote stream without a store.

    Example:
        ```python
        tracker = RatingTracker(["a", "b", "c"])
        tracker.record_vote("a", "b")
        tracker.record_vote("b", "c")

        tracker.get_rankings()
        # [("a", 1516.0), ("b", 1500.74), ("c", 1483.26)]
        ```
    """

    def __init__(
        self,
        plugin_ids: list[str],
        initial_rating: float = ELO.DEFAULT_RATING,
        k: int = ELO.DEFAULT_K,
    ):
        self.ratings: dict[str, float] = {pid: initial_rating for pid in plugin_ids}
        self.vote_counts: dict[str, int] = {pid: 0 for pid in plugin_ids}
        self.wins: dict[str, int] = {pid: 0 for pid in plugin_ids}
        self.k = k
        self.history: list[tuple[str, str]] = []

    def _require(self, plugin_id: str) -> None:
        if plugin_id not in self.ratings:
            raise KeyError(f"Plugin '{plugin_id}' is not being tracked")

    def record_vote(self, winner: str, loser: str) -> tuple[float, float]:
        """Record a vote and update both ratings.

        Args:
            winner: Id of the winning plugin.
            loser: Id of the losing plugin.

        Returns:
            Tuple of (new_winner_rating, new_loser_rating).

        Raises:
            KeyError: If either plugin is not being tracked.
            ValueError: If winner and loser are the same plugin.
        """
        self._require(winner)
        self._require(loser)
        if winner == loser:
            raise ValueError("A plugin cannot be voted against itself")

        new_winner, new_loser = ELO.update(
            self.ratings[winner],
            self.ratings[loser],
            self.k,
        )
        self.ratings[winner] = new_winner
        self.ratings[loser] = new_loser

        self.vote_counts[winner] += 1
        self.vote_counts[loser] += 1
        self.wins[winner] += 1
        self.history.append((winner, loser))

        return new_winner, new_loser

    def get_rating(self, plugin_id: str) -> float:
        """Get the current rating for a plugin.

        Raises:
            KeyError: If the plugin is not being tracked.
        """
        self._require(plugin_id)
        return self.ratings[plugin_id]

    def get_rankings(self) -> list[tuple[str, float]]:
        """Get all plugins ranked by rating, descending (ties by id)."""
        return sorted(self.ratings.items(), key=lambda x: (-x[1], x[0]))

    def get_stats(self, plugin_id: str) -> dict[str, float | int | str]:
        """Get rating, votes, wins, losses and confidence for a plugin.

        Raises:
            KeyError: If the plugin is not being tracked.
        """
        self._require(plugin_id)
        votes = self.vote_counts[plugin_id]
        wins = self.wins[plugin_id]
        return {
            "rating": self.ratings[plugin_id],
            "votes": votes,
            "wins": wins,
            "losses": votes - wins,
            "confidence": ELO.classify_confidence(votes).value,
        }

    def add_plugin(self, plugin_id: str, initial_rating: float | None = None) -> None:
        """Start tracking a plugin. Already-tracked plugins are left as is."""
        if plugin_id in self.ratings:
            return

        rating = initial_rating if initial_rating is not None else ELO.DEFAULT_RATING
        self.ratings[plugin_id] = rating
        self.vote_counts[plugin_id] = 0
        self.wins[plugin_id] = 0
