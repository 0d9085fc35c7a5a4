"""
Tests for path scoring and softmax normalization.
"""

import math

import pytest

from pathwise.models import CareerPathCandidate, CategoryStats
from pathwise.performance import neutral_performance
from pathwise.scoring import blend_scores, normalize_scores, score_paths
from pathwise.tables import CAREER_PATH_WEIGHTS, CATEGORIES


def _zero_affinities():
    return {c: 0.0 for c in CATEGORIES}


def _by_key(candidates):
    return {c.path_key: c for c in candidates}


class TestBlendScores:
    """Test the 60/40 blend."""

    def test_blend(self):
        """Performance scaled by 100, interest by 10, then blended."""
        assert blend_scores(0.5, 3.0) == pytest.approx(50 * 0.6 + 30 * 0.4)

    def test_interest_capped(self):
        """Interest contribution never exceeds 100 before weighting."""
        assert blend_scores(0.0, 12.5) == pytest.approx(40.0)
        assert blend_scores(0.0, 1000.0) == pytest.approx(40.0)


class TestScorePaths:
    """Test raw score computation."""

    def test_one_candidate_per_path_in_table_order(self):
        """Output follows the authored path order."""
        candidates = score_paths({}, _zero_affinities())
        assert [c.path_key for c in candidates] == list(CAREER_PATH_WEIGHTS)
        assert all(c.probability == 0.0 for c in candidates)

    def test_performance_only(self):
        """Only categories with data contribute to performance."""
        perf = {"frontend": CategoryStats(correct=9, total=10)}
        scores = _by_key(score_paths(perf, _zero_affinities()))

        assert scores["fullstack"].performance_score == pytest.approx(0.36)
        assert scores["fullstack"].raw_score == pytest.approx(21.6)
        assert scores["datascience"].raw_score == pytest.approx(0.9 * 0.05 * 100 * 0.6)

    def test_absent_categories_are_skipped(self):
        """A path is not penalized for categories never quizzed."""
        perf = {"data": CategoryStats(correct=4, total=4)}
        scores = _by_key(score_paths(perf, _zero_affinities()))

        assert scores["datascience"].performance_score == pytest.approx(0.7)
        assert scores["mobile"].performance_score == pytest.approx(0.05)

    def test_zero_total_is_skipped(self):
        """Stats with no attempts behave like an absent category."""
        perf = {"data": CategoryStats(correct=0, total=0)}
        scores = _by_key(score_paths(perf, _zero_affinities()))
        assert scores["datascience"].performance_score == 0.0

    def test_neutral_performance(self):
        """Neutral table gives every path the same performance part."""
        scores = score_paths(neutral_performance(), _zero_affinities())
        for c in scores:
            assert c.raw_score == pytest.approx(30.0)

    def test_backend_interest(self):
        """Backend answer with neutral performance favours cloud."""
        affinities = _zero_affinities()
        affinities.update({"backend": 3.0, "cloud": 1.0})
        scores = _by_key(score_paths(neutral_performance(), affinities))

        assert scores["fullstack"].raw_score == pytest.approx(35.0)
        assert scores["datascience"].raw_score == pytest.approx(32.0)
        assert scores["cloud"].raw_score == pytest.approx(35.2)
        assert scores["mobile"].raw_score == pytest.approx(32.0)
        assert scores["security"].raw_score == pytest.approx(32.8)

    def test_missing_affinity_counts_as_zero(self):
        """Affinity vectors may omit categories."""
        scores = _by_key(score_paths(neutral_performance(), {"security": 2.0}))
        assert scores["security"].interest_score == pytest.approx(1.1)

    def test_interest_saturation_depends_on_answer_count(self):
        """Enough repeated answers hit the cap and erase path differences."""
        few = _zero_affinities()
        few.update({"backend": 9.0, "cloud": 3.0})
        many = _zero_affinities()
        many.update({"backend": 30.0, "cloud": 10.0})

        few_scores = _by_key(score_paths(neutral_performance(), few))
        many_scores = _by_key(score_paths(neutral_performance(), many))

        assert few_scores["cloud"].raw_score > few_scores["fullstack"].raw_score
        assert many_scores["cloud"].raw_score == pytest.approx(70.0)
        assert many_scores["fullstack"].raw_score == pytest.approx(70.0)

    def test_custom_weights(self):
        """The weight table can be replaced."""
        weights = {"only": {c: (1.0 if c == "cloud" else 0.0) for c in CATEGORIES}}
        perf = {"cloud": CategoryStats(correct=1, total=1)}
        candidates = score_paths(perf, _zero_affinities(), weights=weights)

        assert len(candidates) == 1
        assert candidates[0].raw_score == pytest.approx(60.0)


class TestNormalizeScores:
    """Test softmax normalization."""

    def test_empty(self):
        """No candidates gives an empty list."""
        assert normalize_scores([]) == []

    def test_two_candidates(self):
        """Temperature 10 softmax on a 10 point gap."""
        ranked = normalize_scores([
            CareerPathCandidate(path_key="a", raw_score=0.0),
            CareerPathCandidate(path_key="b", raw_score=10.0),
        ])

        assert [c.path_key for c in ranked] == ["b", "a"]
        assert ranked[0].probability == pytest.approx(math.e / (math.e + 1))
        assert ranked[1].probability == pytest.approx(1 / (math.e + 1))

    def test_sums_to_one_and_in_range(self):
        """Probabilities form a distribution."""
        raw = [12.5, 70.0, 0.0, 33.3, 55.1]
        ranked = normalize_scores([CareerPathCandidate(path_key=str(i), raw_score=s) for i, s in enumerate(raw)])

        assert sum(c.probability for c in ranked) == pytest.approx(1.0, abs=1e-9)
        assert all(0 < c.probability < 1 for c in ranked)
        probs = [c.probability for c in ranked]
        assert probs == sorted(probs, reverse=True)

    def test_ties_keep_input_order(self):
        """Equal scores keep authored order."""
        ranked = normalize_scores([
            CareerPathCandidate(path_key=k, raw_score=20.0) for k in ("x", "y", "z")
        ])
        assert [c.path_key for c in ranked] == ["x", "y", "z"]
        assert all(c.probability == pytest.approx(1 / 3) for c in ranked)

    def test_large_scores_do_not_overflow(self):
        """Very large raw scores still normalize."""
        ranked = normalize_scores([
            CareerPathCandidate(path_key="a", raw_score=10000.0),
            CareerPathCandidate(path_key="b", raw_score=9990.0),
        ])
        assert ranked[0].probability == pytest.approx(math.e / (math.e + 1))

    def test_negative_scores(self):
        """Negative raw scores still give positive probabilities."""
        ranked = normalize_scores([
            CareerPathCandidate(path_key="a", raw_score=-50.0),
            CareerPathCandidate(path_key="b", raw_score=-40.0),
        ])
        assert ranked[0].path_key == "b"
        assert all(c.probability > 0 for c in ranked)
