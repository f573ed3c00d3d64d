"""Base storage interface.

The arena never talks to a database directly. A store supplies snapshots
of the plugin pool and persists votes, ratings, metrics and scores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models import Category, MetricsSnapshot, Plugin, Vote, VoteOutcome


class BaseStore(ABC):
    """Abstract base class for plugin storage.

    Implementations must make ``apply_vote`` an atomic read-modify-write of
    both plugins: two concurrent votes touching the same plugin must never
    both read its old rating. A conditional update, a transaction or a
    per-plugin lock all satisfy this.
    """

    @abstractmethod
    def list_plugins(
        self,
        category: Category | None = None,
        include_hidden: bool = False,
    ) -> list[Plugin]:
        """Return a snapshot of the plugin pool in storage order."""
        ...

    @abstractmethod
    def get_plugin(self, plugin_id: str) -> Plugin | None:
        """Return one plugin (hidden or not), or None if unknown."""
        ...

    @abstractmethod
    def add_plugin(self, plugin: Plugin) -> None:
        """Insert or replace a plugin."""
        ...

    @abstractmethod
    def update_plugin(self, plugin_id: str, **fields: Any) -> Plugin:
        """Overwrite fields of one plugin and return the updated plugin.

        Raises:
            PluginNotFoundError: If the plugin is unknown.
        """
        ...

    @abstractmethod
    def apply_vote(self, vote: Vote, k: int) -> VoteOutcome:
        """Atomically update both ratings and vote counts, and log the vote.

        Raises:
            PluginNotFoundError: If either plugin is unknown.
        """
        ...

    @abstractmethod
    def votes_since(self, voter: str, since: datetime) -> list[Vote]:
        """Return the votes cast by ``voter`` at or after ``since``."""
        ...

    @abstractmethod
    def record_snapshot(self, snapshot: MetricsSnapshot) -> None:
        """Upsert the star count for a plugin on a day."""
        ...

    @abstractmethod
    def snapshots_on_or_before(self, day: date) -> list[MetricsSnapshot]:
        """Return snapshots recorded on or before ``day``, newest first."""
        ...

    @abstractmethod
    def delete_snapshots_before(self, day: date) -> int:
        """Delete snapshots recorded before ``day`` and return how many."""
        ...
