"""Tests for composite scoring and ranking views."""

import math

import pytest

from plugin_arena import Category, Confidence, Plugin, RankingType, Scorer
from plugin_arena.scorer import (
    composite_score,
    normalize_elo,
    normalize_stars,
    score_for_view,
    trend_score,
)


def make_plugin(pid: str, **kwargs) -> Plugin:
    """Helper to create Plugin objects."""
    return Plugin(id=pid, name=kwargs.pop("name", pid.upper()), **kwargs)


# ============================================================================
# Normalization
# ============================================================================


class TestNormalizeStars:
    """Tests for normalize_stars."""

    def test_zero_stars(self):
        assert normalize_stars(0, 100) == 0

    def test_zero_max(self):
        """No divide-by-zero when the set has no stars."""
        assert normalize_stars(100, 0) == 0

    def test_negative_inputs(self):
        assert normalize_stars(-5, 100) == 0
        assert normalize_stars(5, -100) == 0

    @pytest.mark.parametrize("value", [1, 7, 100, 123456])
    def test_max_value_scores_100(self, value):
        assert normalize_stars(value, value) == pytest.approx(100.0)

    def test_logarithmic(self):
        """Ten times fewer stars is far more than a tenth of the score."""
        score = normalize_stars(99, 9999)
        assert score == pytest.approx(50.0)

    def test_capped_at_100(self):
        """A value above the stated max saturates."""
        assert normalize_stars(500, 100) == 100.0

    def test_never_nan(self):
        for stars, max_stars in [(0, 0), (1, 1), (0, 1), (1, 0)]:
            assert not math.isnan(normalize_stars(stars, max_stars))


class TestNormalizeElo:
    """Tests for normalize_elo."""

    @pytest.mark.parametrize(
        "elo, expected",
        [(1000, 0), (1500, 50), (2000, 100), (900, 0), (2500, 100), (1234.5, 23.45)],
    )
    def test_values(self, elo, expected):
        assert normalize_elo(elo) == pytest.approx(expected)


# ============================================================================
# Blends
# ============================================================================


class TestCompositeScore:
    """Tests for composite_score."""

    def test_full_confidence_weights(self):
        """With 10+ votes the configured weights apply."""
        assert composite_score(1600, 1000, 1000, vote_count=50) == pytest.approx(76.0)

    def test_no_votes_uses_stars_only(self):
        """With zero votes ELO carries no weight."""
        assert composite_score(1600, 1000, 1000, vote_count=0) == pytest.approx(100.0)
        assert composite_score(2000, 0, 1000, vote_count=0) == pytest.approx(0.0)

    def test_partial_confidence(self):
        """At 5 votes the ELO weight is halved and stars take the rest."""
        score = composite_score(1600, 1000, 1000, vote_count=5)
        # elo weight 0.6 * 0.5 = 0.3, stars weight 0.7
        assert score == pytest.approx(60 * 0.3 + 100 * 0.7)

    def test_classic_weights(self):
        score = composite_score(1600, 1000, 1000, 20, elo_weight=0.3, github_weight=0.7)
        assert score == pytest.approx(60 * 0.3 + 100 * 0.7)

    def test_empty_popularity_set(self):
        """All-zero stars give a rating-only score without errors."""
        assert composite_score(1700, 0, 0, vote_count=30) == pytest.approx(42.0)

    @pytest.mark.parametrize("votes", [0, 3, 10, 80])
    def test_monotonic_in_elo(self, votes):
        scores = [composite_score(elo, 300, 1000, votes) for elo in range(900, 2200, 50)]
        assert scores == sorted(scores)

    @pytest.mark.parametrize("votes", [0, 3, 10, 80])
    def test_monotonic_in_stars(self, votes):
        scores = [composite_score(1550, stars, 1000, votes) for stars in range(0, 1001, 25)]
        assert scores == sorted(scores)

    def test_bounded(self):
        for elo in (0, 1500, 5000):
            for stars in (0, 10, 10_000):
                score = composite_score(elo, stars, 10_000, 25)
                assert 0 <= score <= 100


class TestTrendScore:
    """Tests for trend_score."""

    def test_low_votes_favor_growth(self):
        score = trend_score(500, 500, 1500, vote_count=3)
        assert score == pytest.approx(100 * 0.8 + 50 * 0.2)

    def test_enough_votes_balanced(self):
        score = trend_score(500, 500, 1500, vote_count=10)
        assert score == pytest.approx(100 * 0.5 + 50 * 0.5)

    def test_no_growth(self):
        assert trend_score(0, 0, 2000, vote_count=100) == pytest.approx(50.0)


class TestScoreForView:
    """Tests for view dispatch."""

    def test_views(self):
        plugin = make_plugin(
            "a", elo_score=1700, github_stars=200, github_stars_60d=40, vote_count=20
        )
        assert score_for_view(plugin, RankingType.NOW, 1000, 100) == pytest.approx(
            composite_score(1700, 200, 1000, 20, 0.6, 0.4)
        )
        assert score_for_view(plugin, RankingType.CLASSIC, 1000, 100) == pytest.approx(
            composite_score(1700, 200, 1000, 20, 0.3, 0.7)
        )
        assert score_for_view(plugin, RankingType.TREND, 1000, 100) == pytest.approx(
            trend_score(40, 100, 1700, 20)
        )


# ============================================================================
# Scorer.rank
# ============================================================================


@pytest.fixture
def pool() -> list[Plugin]:
    """A small pool with distinct orderings per view."""
    return [
        make_plugin("a", github_stars=1000, github_stars_60d=5, composite_score_now=40,
                    elo_score=1500, vote_count=0),
        make_plugin("b", github_stars=50, github_stars_60d=300, composite_score_now=90,
                    elo_score=1700, vote_count=60, category=Category.MCP),
        make_plugin("c", github_stars=400, github_stars_60d=80, composite_score_now=70,
                    elo_score=1600, vote_count=15),
        make_plugin("h", github_stars=99999, github_stars_60d=99999, composite_score_now=100,
                    is_hidden=True),
    ]


class TestScorerRank:
    """Tests for Scorer.rank."""

    def test_now_order(self, pool):
        page = Scorer.rank(pool, RankingType.NOW)
        assert [p.id for p in page.plugins] == ["b", "c", "a"]
        assert [p.rank for p in page.plugins] == [1, 2, 3]
        assert page.total == 3

    def test_classic_order(self, pool):
        page = Scorer.rank(pool, "classic")
        assert [p.id for p in page.plugins] == ["a", "c", "b"]

    def test_trend_order(self, pool):
        page = Scorer.rank(pool, RankingType.TREND)
        assert [p.id for p in page.plugins] == ["b", "c", "a"]

    def test_hidden_excluded(self, pool):
        page = Scorer.rank(pool)
        assert "h" not in {p.id for p in page.plugins}

    def test_category_filter(self, pool):
        page = Scorer.rank(pool, category="mcp")
        assert [p.id for p in page.plugins] == ["b"]
        assert page.total == 1

    def test_scores_and_confidence(self, pool):
        page = Scorer.rank(pool, RankingType.NOW)
        by_id = {p.id: p for p in page.plugins}

        # Max stars over the page is 1000
        assert by_id["a"].composite_score == round(composite_score(1500, 1000, 1000, 0), 2)
        assert by_id["b"].composite_score == round(composite_score(1700, 50, 1000, 60), 2)
        assert by_id["a"].confidence == Confidence.LOW
        assert by_id["b"].confidence == Confidence.HIGH
        assert by_id["c"].confidence == Confidence.MEDIUM

    def test_scores_rounded(self, pool):
        for plugin in Scorer.rank(pool, RankingType.TREND).plugins:
            assert plugin.composite_score == round(plugin.composite_score, 2)

    def test_pagination(self, pool):
        first = Scorer.rank(pool, RankingType.NOW, page=1, per_page=2)
        second = Scorer.rank(pool, RankingType.NOW, page=2, per_page=2)

        assert [p.id for p in first.plugins] == ["b", "c"]
        assert [p.id for p in second.plugins] == ["a"]
        assert second.plugins[0].rank == 3
        assert second.total == 3

    def test_page_past_end(self, pool):
        page = Scorer.rank(pool, page=5, per_page=10)
        assert page.plugins == []
        assert page.total == 3

    def test_empty_pool(self):
        page = Scorer.rank([])
        assert page.plugins == []
        assert page.total == 0

    def test_ties_broken_by_id(self):
        plugins = [make_plugin(pid, github_stars=10) for pid in ("z", "b", "m")]
        page = Scorer.rank(plugins, RankingType.CLASSIC)
        assert [p.id for p in page.plugins] == ["b", "m", "z"]
