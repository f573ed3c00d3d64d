"""In-memory store.

Reference implementation of BaseStore, used by tests and small
deployments. Votes are serialized per plugin with a lock for each plugin,
taken in id order so two votes over the same pair cannot deadlock.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timezone
from typing import Any

from ..exceptions import PluginNotFoundError
from ..models import Category, MetricsSnapshot, Plugin, Vote, VoteOutcome, as_utc
from ..scorer import ELO
from .base import BaseStore

logger = logging.getLogger(__name__)


class InMemoryStore(BaseStore):
    """Thread-safe dict-backed store.

    Example:
        ```python
        store = InMemoryStore([Plugin(id="a"), Plugin(id="b")])
        store.apply_vote(Vote(id="v1", winner_id="a", loser_id="b", voter_fingerprint="x"), k=32)
        store.get_plugin("a").elo_score  # 1516.0
        ```
    """

    def __init__(self, plugins: list[Plugin] | None = None):
        self._plugins: dict[str, Plugin] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._votes: list[Vote] = []
        self._snapshots: dict[tuple[str, date], MetricsSnapshot] = {}

        for plugin in plugins or []:
            self.add_plugin(plugin)

    @property
    def votes(self) -> list[Vote]:
        """Append-only vote log (copy)."""
        with self._registry_lock:
            return list(self._votes)

    def _lock_for(self, plugin_id: str) -> threading.Lock:
        with self._registry_lock:
            if plugin_id not in self._plugins:
                raise PluginNotFoundError(plugin_id)
            return self._locks[plugin_id]

    def list_plugins(
        self,
        category: Category | None = None,
        include_hidden: bool = False,
    ) -> list[Plugin]:
        with self._registry_lock:
            plugins = list(self._plugins.values())
        if not include_hidden:
            plugins = [p for p in plugins if not p.is_hidden]
        if category is not None:
            plugins = [p for p in plugins if p.category == Category(category)]
        return plugins

    def get_plugin(self, plugin_id: str) -> Plugin | None:
        with self._registry_lock:
            return self._plugins.get(plugin_id)

    def add_plugin(self, plugin: Plugin) -> None:
        with self._registry_lock:
            self._plugins[plugin.id] = plugin
            self._locks.setdefault(plugin.id, threading.Lock())

    def update_plugin(self, plugin_id: str, **fields: Any) -> Plugin:
        with self._lock_for(plugin_id):
            return self._write(plugin_id, **fields)

    def _write(self, plugin_id: str, **fields: Any) -> Plugin:
        with self._registry_lock:
            current = self._plugins[plugin_id]
            updated = current.model_copy(
                update={**fields, "updated_at": datetime.now(timezone.utc)}
            )
            self._plugins[plugin_id] = updated
            return updated

    def apply_vote(self, vote: Vote, k: int) -> VoteOutcome:
        first, second = sorted((vote.winner_id, vote.loser_id))
        first_lock = self._lock_for(first)
        second_lock = self._lock_for(second)

        with first_lock, second_lock:
            winner = self.get_plugin(vote.winner_id)
            loser = self.get_plugin(vote.loser_id)

            new_winner_elo, new_loser_elo = ELO.update(winner.elo_score, loser.elo_score, k)

            self._write(
                winner.id,
                elo_score=new_winner_elo,
                vote_count=winner.vote_count + 1,
            )
            self._write(
                loser.id,
                elo_score=new_loser_elo,
                vote_count=loser.vote_count + 1,
            )
            with self._registry_lock:
                self._votes.append(vote)

        return VoteOutcome(
            winner_id=vote.winner_id,
            loser_id=vote.loser_id,
            new_winner_elo=new_winner_elo,
            new_loser_elo=new_loser_elo,
        )

    def votes_since(self, voter: str, since: datetime) -> list[Vote]:
        since = as_utc(since)
        return [
            v for v in self.votes
            if v.voter_fingerprint == voter and v.created_at >= since
        ]

    def record_snapshot(self, snapshot: MetricsSnapshot) -> None:
        with self._registry_lock:
            self._snapshots[(snapshot.plugin_id, snapshot.recorded_at)] = snapshot

    def snapshots_on_or_before(self, day: date) -> list[MetricsSnapshot]:
        with self._registry_lock:
            snapshots = [s for s in self._snapshots.values() if s.recorded_at <= day]
        return sorted(snapshots, key=lambda s: s.recorded_at, reverse=True)

    def delete_snapshots_before(self, day: date) -> int:
        with self._registry_lock:
            stale = [key for key, s in self._snapshots.items() if s.recorded_at < day]
            for key in stale:
                del self._snapshots[key]
        if stale:
            logger.debug(f"Deleted {len(stale)} snapshots recorded before {day}")
        return len(stale)
