"""Main Arena class for Plugin Arena.

This module provides the primary entry point. The Arena wires the pure
rating, scoring and matchmaking functions to a store: it serves vote
pairs, records votes, builds ranking pages and runs the periodic score
refresh.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from .config import ArenaConfig
from .exceptions import (
    DuplicateVoteError,
    InvalidVoteError,
    NotEnoughPluginsError,
    PluginArenaError,
    PluginNotFoundError,
)
from .matchmaking import match_quality, select_opponent, select_pair
from .models import (
    Category,
    MetricsSnapshot,
    Plugin,
    RankingPage,
    RankingType,
    ScoreUpdateResult,
    Vote,
    VoteOutcome,
    VotePair,
    as_utc,
)
from .scorer import Scorer, composite_score
from .store import BaseStore, InMemoryStore

logger = logging.getLogger(__name__)


class Arena:
    """Main entry point for Plugin Arena.

    Example:
        ```python
        from plugin_arena import Arena, InMemoryStore, Plugin

        arena = Arena(InMemoryStore([Plugin(id="a"), Plugin(id="b")]))
        pair = arena.next_pair()
        arena.record_vote(pair.plugin_a.id, pair.plugin_b.id, voter="fp-123")
        print(arena.rankings("now").plugins[0].id)
        ```
    """

    def __init__(
        self,
        store: BaseStore | None = None,
        config: ArenaConfig | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the Arena.

        Args:
            store: Plugin storage. Defaults to an empty InMemoryStore.
            config: Optional configuration. Uses defaults if not provided.
            rng: Random source for matchmaking (seed it for reproducibility).
        """
        self.store = store if store is not None else InMemoryStore()
        self.config = config or ArenaConfig()
        self.rng = rng or random.Random()

        if self.config.verbose:
            logging.getLogger("plugin_arena").setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, path: str | Path, store: BaseStore | None = None) -> Arena:
        """Create an Arena from a YAML configuration file."""
        return cls(store=store, config=ArenaConfig.from_yaml(path))

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------

    def next_pair(
        self,
        category: Category | str | None = None,
        focus_plugin_id: str | None = None,
    ) -> VotePair:
        """Choose the next pair of plugins to show a voter.

        In focused mode the focus plugin is always ``plugin_a`` and its
        opponent comes from the same category.

        Args:
            category: Restrict the pool to one category (normal mode only).
            focus_plugin_id: Pin this plugin and only sample its opponent.

        Returns:
            VotePair with a match quality descriptor.

        Raises:
            PluginNotFoundError: If the focus plugin is unknown or hidden.
            NotEnoughPluginsError: If no pair can be formed.
        """
        matchmaking = self.config.matchmaking

        if focus_plugin_id:
            focus = self._visible_plugin(focus_plugin_id)
            candidates = [
                p for p in self.store.list_plugins(category=focus.category)
                if p.id != focus.id
            ]
            opponent = select_opponent(focus, candidates, matchmaking, self.rng)
            if opponent is None:
                raise NotEnoughPluginsError("focused pair", len(candidates) + 1)

            return VotePair(
                plugin_a=focus,
                plugin_b=opponent,
                match_quality=match_quality(focus, opponent),
                focused_mode=True,
                focus_plugin_id=focus.id,
            )

        if category is not None:
            category = Category(category)
        plugins = self.store.list_plugins(category=category)

        pair = select_pair(plugins, matchmaking, self.rng)
        if pair is None:
            raise NotEnoughPluginsError("pair", len(plugins))

        plugin_a, plugin_b = pair
        return VotePair(
            plugin_a=plugin_a,
            plugin_b=plugin_b,
            match_quality=match_quality(plugin_a, plugin_b),
        )

    def record_vote(
        self,
        winner_id: str,
        loser_id: str,
        voter: str,
        now: datetime | None = None,
    ) -> VoteOutcome:
        """Record a vote and update both ratings.

        Args:
            winner_id: Plugin the voter preferred.
            loser_id: The other plugin.
            voter: Opaque voter fingerprint.
            now: Vote time (defaults to the current UTC time). A naive
                datetime is read as UTC.

        Returns:
            VoteOutcome with both new ratings.

        Raises:
            InvalidVoteError: If an id is missing or both ids are equal.
            PluginNotFoundError: If either plugin is unknown or hidden.
            DuplicateVoteError: If the voter already voted on this pair
                within the cooldown window.
        """
        if not winner_id or not loser_id:
            raise InvalidVoteError("missing winner_id or loser_id", winner_id, loser_id)
        if winner_id == loser_id:
            raise InvalidVoteError("cannot vote for the same plugin", winner_id, loser_id)

        now = as_utc(now) if now else datetime.now(timezone.utc)
        cooldown = self.config.scoring.vote_cooldown_hours
        if cooldown > 0:
            recent = self.store.votes_since(voter, now - timedelta(hours=cooldown))
            if any(v.involves_pair(winner_id, loser_id) for v in recent):
                raise DuplicateVoteError(voter, winner_id, loser_id, cooldown)

        self._visible_plugin(winner_id)
        self._visible_plugin(loser_id)

        vote = Vote(
            id=uuid.uuid4().hex,
            winner_id=winner_id,
            loser_id=loser_id,
            voter_fingerprint=voter,
            created_at=now,
        )
        outcome = self.store.apply_vote(vote, self.config.scoring.k_factor)
        logger.info(
            f"Vote recorded: '{winner_id}' ({outcome.new_winner_elo}) beat "
            f"'{loser_id}' ({outcome.new_loser_elo})"
        )
        return outcome

    def _visible_plugin(self, plugin_id: str) -> Plugin:
        plugin = self.store.get_plugin(plugin_id)
        if plugin is None or plugin.is_hidden:
            raise PluginNotFoundError(plugin_id)
        return plugin

    # ------------------------------------------------------------------
    # Rankings
    # ------------------------------------------------------------------

    def rankings(
        self,
        ranking_type: RankingType | str = RankingType.NOW,
        category: Category | str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> RankingPage:
        """Build one page of a ranking view."""
        scoring = self.config.scoring
        return Scorer.rank(
            self.store.list_plugins(),
            ranking_type,
            page=page,
            per_page=per_page,
            category=category,
            now_weights=scoring.now_weights,
            classic_weights=scoring.classic_weights,
        )

    # ------------------------------------------------------------------
    # Periodic refresh
    # ------------------------------------------------------------------

    def refresh_scores(
        self,
        current_stars: dict[str, int],
        today: date | None = None,
    ) -> ScoreUpdateResult:
        """Run one periodic score refresh cycle.

        Applies externally fetched star counts, records today's snapshot,
        recomputes star growth over the configured window, prunes old
        snapshots and recomputes every visible plugin's stored composite
        score. Failures for one plugin are collected in ``errors`` and do
        not stop the cycle.

        Args:
            current_stars: Freshly fetched star counts by plugin id.
            today: Day of the refresh (defaults to today, UTC).

        Returns:
            ScoreUpdateResult with counters and collected errors.
        """
        scoring = self.config.scoring
        today = today or datetime.now(timezone.utc).date()
        result = ScoreUpdateResult()

        plugins = self.store.list_plugins()
        result.total_plugins = len(plugins)
        if not plugins:
            logger.info("No plugins to refresh")
            return result

        logger.info(f"Updating stars for {len(plugins)} plugins...")
        for plugin in plugins:
            stars = current_stars.get(plugin.id)
            if stars is None:
                result.errors.append(f"No star count fetched for '{plugin.id}'")
                continue
            if stars < 0:
                result.errors.append(f"Invalid star count for '{plugin.id}': {stars}")
                continue
            # A zero from the fetcher for a starred plugin is most likely a failed request
            if stars == 0 and plugin.github_stars > 0:
                logger.warning(f"Skipping '{plugin.id}': fetch returned 0 stars")
                continue

            try:
                self.store.update_plugin(plugin.id, github_stars=stars)
                result.stars_updated += 1
                self.store.record_snapshot(
                    MetricsSnapshot(plugin_id=plugin.id, stars=stars, recorded_at=today)
                )
                result.history_recorded += 1
            except (PluginArenaError, ValueError) as e:
                logger.warning(f"Failed to update stars for '{plugin.id}': {e}")
                result.errors.append(f"Failed to update '{plugin.id}': {e}")

        logger.info(f"Calculating {scoring.growth_window_days}-day star growth...")
        cutoff = today - timedelta(days=scoring.growth_window_days)
        old_stars: dict[str, int] = {}
        for snapshot in self.store.snapshots_on_or_before(cutoff):
            old_stars.setdefault(snapshot.plugin_id, snapshot.stars)

        for plugin in self.store.list_plugins():
            if plugin.id not in old_stars:
                continue
            growth = max(0, plugin.github_stars - old_stars[plugin.id])
            try:
                self.store.update_plugin(plugin.id, github_stars_60d=growth)
                result.sixty_day_calculated += 1
            except PluginArenaError as e:
                result.errors.append(f"Failed to update growth for '{plugin.id}': {e}")

        retention_cutoff = today - timedelta(days=scoring.history_retention_days)
        result.old_records_deleted = self.store.delete_snapshots_before(retention_cutoff)

        logger.info("Calculating composite scores...")
        visible = self.store.list_plugins()
        max_stars = max([p.github_stars for p in visible] + [1])
        elo_weight, github_weight = scoring.now_weights
        for plugin in visible:
            score = composite_score(
                plugin.elo_score,
                plugin.github_stars,
                max_stars,
                plugin.vote_count,
                elo_weight,
                github_weight,
            )
            try:
                self.store.update_plugin(plugin.id, composite_score_now=score)
                result.composite_score_updated += 1
            except PluginArenaError as e:
                result.errors.append(f"Failed to update composite score for '{plugin.id}': {e}")

        logger.info(f"Score update completed: {result.model_dump()}")
        return result
