"""Custom exceptions for Plugin Arena.

The rating, scoring and matchmaking core never raises for expected
conditions; it returns ``None`` or 0. These exceptions belong to the
facade and storage seam, where a missing pair or a bad vote has to be
reported to a caller.
"""

from __future__ import annotations


class PluginArenaError(Exception):
    """Base exception for all Plugin Arena errors."""

    pass


class ConfigError(PluginArenaError):
    """Error in configuration.

    Raised when configuration is invalid or cannot be parsed.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Configuration error in '{field}': {message}"
        super().__init__(full_message)


class InvalidVoteError(PluginArenaError):
    """A vote request that can never be applied.

    Raised when an id is missing or a plugin is voted against itself.
    """

    def __init__(
        self,
        message: str,
        winner_id: str | None = None,
        loser_id: str | None = None,
    ):
        self.winner_id = winner_id
        self.loser_id = loser_id
        super().__init__(f"Invalid vote: {message}")


class PluginNotFoundError(PluginArenaError):
    """Plugin id is unknown or the plugin is hidden."""

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        super().__init__(f"Plugin '{plugin_id}' not found or hidden.")


class DuplicateVoteError(PluginArenaError):
    """The voter already voted on this pair inside the cooldown window."""

    def __init__(
        self,
        voter: str,
        winner_id: str,
        loser_id: str,
        cooldown_hours: int,
    ):
        self.voter = voter
        self.winner_id = winner_id
        self.loser_id = loser_id
        self.cooldown_hours = cooldown_hours
        message = (
            f"Already voted on '{winner_id}' vs '{loser_id}' "
            f"in the last {cooldown_hours} hours.\n"
            "Try again later or vote on a different pair."
        )
        super().__init__(message)


class NotEnoughPluginsError(PluginArenaError):
    """No pair or opponent could be produced from the available pool."""

    def __init__(self, operation: str, available: int):
        self.operation = operation
        self.available = available
        message = (
            f"Not enough plugins for '{operation}' "
            f"({available} eligible, at least 2 required)."
        )
        super().__init__(message)
