"""Text reporter for Plugin Arena results.

Provides human-readable formatting for ranking pages, vote pairs and
score refresh summaries.
"""

from __future__ import annotations

from ..models import RankingPage, ScoreUpdateResult, VotePair


class TextReporter:
    """Formats results as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_rankings(arena.rankings("trend")))
        ```
    """

    BAR_WIDTH = 20

    @staticmethod
    def _bar(fraction: float, width: int = 20) -> str:
        """Render a simple bar chart segment."""
        fraction = min(1.0, max(0.0, fraction))
        filled = round(fraction * width)
        return "█" * filled + "░" * (width - filled)

    def format_rankings(self, page: RankingPage) -> str:
        """Format a RankingPage as a leaderboard.

        Args:
            page: The ranking page to format.

        Returns:
            Formatted string.
        """
        lines = [
            f"Rankings (page {page.page}, {page.total} plugins)",
            f"{'=' * 70}",
            f"  {'Rank':<6} {'Plugin':<24} {'Score':<{self.BAR_WIDTH + 8}} {'ELO':<9} {'Conf'}",
            f"  {'-' * 68}",
        ]

        if not page.plugins:
            lines.append("  (no plugins)")

        for plugin in page.plugins:
            name = plugin.name or plugin.id
            lines.append(
                f"  {plugin.rank:<6} {name[:24]:<24} "
                f"{self._bar(plugin.composite_score / 100, self.BAR_WIDTH)} {plugin.composite_score:6.2f} "
                f"{plugin.elo_score:<9.2f} {plugin.confidence.value}"
            )

        return "\n".join(lines)

    def format_pair(self, pair: VotePair) -> str:
        """Format a VotePair as a side-by-side matchup."""
        a, b = pair.plugin_a, pair.plugin_b
        lines = [
            f"{a.name or a.id}  vs  {b.name or b.id}",
            f"  ELO: {a.elo_score:.2f} vs {b.elo_score:.2f}",
        ]
        if pair.match_quality is not None:
            lines.append(
                f"  Match: {pair.match_quality.quality.value} "
                f"(gap {pair.match_quality.elo_difference:.0f})"
            )
        if pair.focused_mode:
            lines.append(f"  Focused on: {pair.focus_plugin_id}")

        return "\n".join(lines)

    def format_refresh(self, result: ScoreUpdateResult) -> str:
        """Format a ScoreUpdateResult as a summary."""
        lines = [
            "Score Refresh",
            f"{'=' * 50}",
            f"Plugins:            {result.total_plugins}",
            f"Stars updated:      {result.stars_updated}",
            f"History recorded:   {result.history_recorded}",
            f"Growth calculated:  {result.sixty_day_calculated}",
            f"Composite updated:  {result.composite_score_updated}",
            f"Old records pruned: {result.old_records_deleted}",
        ]

        if result.errors:
            lines.append("")
            lines.append(f"Errors ({len(result.errors)}):")
            for error in result.errors:
                lines.append(f"  - {error}")

        return "\n".join(lines)


def print_results(result: RankingPage | VotePair | ScoreUpdateResult) -> None:
    """Convenience function to print formatted results.

    Automatically detects the result type and prints the appropriate format.

    Args:
        result: Any Plugin Arena result object.

    Example:
        ```python
        from plugin_arena import print_results

        print_results(arena.rankings())
        ```
    """
    reporter = TextReporter()

    if isinstance(result, RankingPage):
        print(reporter.format_rankings(result))
    elif isinstance(result, VotePair):
        print(reporter.format_pair(result))
    elif isinstance(result, ScoreUpdateResult):
        print(reporter.format_refresh(result))
    else:
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
