"""
Cluster Matching Tests

Strategy selection (embedding > profile > default), scoring per strategy,
contextual boost, and the threshold/sort/cap contract of
find_relevant_clusters.

Run:
----
    pytest tests/test_matching.py -v
"""

import pytest

from cluster_match.models import ClusterMatchConfig, MatchReason, RecommendationContext, UserProfile
from cluster_match.stages.matching import (
    MatchStrategy,
    context_boost,
    find_relevant_clusters,
    interest_overlap,
    select_strategy,
)
from cluster_match.stages.matching.context_boost import day_factor, time_factor


class TestStrategySelection:
    def test_embedding_wins(self):
        assert select_strategy([0.1, 0.2], UserProfile(interests=["x"])) is MatchStrategy.EMBEDDING

    def test_profile_when_no_embedding(self):
        assert select_strategy(None, UserProfile(interests=["x"])) is MatchStrategy.PROFILE

    def test_empty_embedding_counts_as_absent(self):
        assert select_strategy([], UserProfile()) is MatchStrategy.PROFILE
        assert select_strategy([], None) is MatchStrategy.DEFAULT

    def test_default(self):
        assert select_strategy(None, None) is MatchStrategy.DEFAULT

    def test_only_one_strategy_runs(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 10, topics=["travel"])]
        matches = find_relevant_clusters(
            clusters,
            user_embedding=[1.0, 0.0],
            user_profile=UserProfile(interests=["travel"]),
            min_match_threshold=0.0,
        )
        assert [m.reason for m in matches] == [MatchReason.EMBEDDING]


class TestMalformedInputs:
    """Invalid profile or context dicts are ignored, never raised."""

    def test_out_of_range_context_adds_no_boost(self, popularity_clusters, caplog):
        with caplog.at_level("WARNING"):
            matches = find_relevant_clusters(popularity_clusters, context={"time_of_day": 24})
        assert [m.score for m in matches] == pytest.approx([0.5, 0.45, 0.4])
        assert "INVALID_CONTEXT" in caplog.text

    def test_malformed_profile_falls_back_to_default(self, popularity_clusters, caplog):
        with caplog.at_level("WARNING"):
            matches = find_relevant_clusters(popularity_clusters, user_profile={"interests": 5})
        assert [m.reason for m in matches] == [MatchReason.DEFAULT] * 3
        assert "INVALID_USER_PROFILE" in caplog.text


class TestEmptyInput:
    def test_no_clusters_no_matches(self):
        assert find_relevant_clusters([], user_embedding=[1.0, 0.0]) == []
        assert find_relevant_clusters([]) == []


class TestEmbeddingStrategy:
    def test_scores_are_centroid_similarity(self, cluster_factory):
        clusters = [
            cluster_factory("dbscan-1", 5, centroid=[0.0, 1.0]),
            cluster_factory("dbscan-2", 5, centroid=[1.0, 0.0]),
            cluster_factory("dbscan-3", 5, centroid=[0.6, 0.8]),
        ]
        matches = find_relevant_clusters(clusters, user_embedding=[1.0, 0.0])

        assert [m.cluster.id for m in matches] == ["dbscan-2", "dbscan-3"]
        assert matches[0].score == pytest.approx(1.0)
        assert matches[1].score == pytest.approx(0.6)
        assert all(m.reason == MatchReason.EMBEDDING for m in matches)

    def test_negative_similarity_floored_at_zero(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 5, centroid=[-1.0, 0.0])]
        matches = find_relevant_clusters(clusters, user_embedding=[1.0, 0.0], min_match_threshold=0.0)
        assert matches[0].score == 0.0

    def test_dimension_mismatch_scores_zero_and_warns(self, cluster_factory, caplog):
        clusters = [
            cluster_factory("dbscan-1", 5, centroid=[1.0, 0.0, 0.0]),
            cluster_factory("dbscan-2", 5, centroid=[1.0, 0.0]),
        ]
        with caplog.at_level("WARNING"):
            matches = find_relevant_clusters(
                clusters, user_embedding=[1.0, 0.0], min_match_threshold=0.0
            )
        scores = {m.cluster.id: m.score for m in matches}
        assert scores["dbscan-1"] == 0.0
        assert scores["dbscan-2"] == pytest.approx(1.0)
        assert "CENTROID_DIM_MISMATCH" in caplog.text


class TestProfileStrategy:
    def test_interest_overlap_is_case_insensitive(self):
        assert interest_overlap(["Travel", "food"], ["travel", "music"]) == pytest.approx(0.5)
        assert interest_overlap([], ["travel"]) == 0.0
        assert interest_overlap(["travel"], []) == 0.0

    def test_overlap_plus_size_bonus(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 200, topics=["travel", "music"])]
        matches = find_relevant_clusters(
            clusters, user_profile=UserProfile(interests=["Travel", "food"])
        )
        # 0.7 * 0.5 + min(200 / 1000, 0.3)
        assert matches[0].score == pytest.approx(0.55)
        assert matches[0].reason == MatchReason.PROFILE

    def test_size_bonus_is_capped(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 5000, topics=["other"])]
        matches = find_relevant_clusters(clusters, user_profile=UserProfile(interests=["travel"]))
        assert matches[0].score == pytest.approx(0.3)

    def test_score_capped_at_one(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 5000, topics=["travel"])]
        matches = find_relevant_clusters(clusters, user_profile=UserProfile(interests=["travel"]))
        assert matches[0].score == pytest.approx(1.0)

    def test_profile_as_dict(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 200, topics=["travel", "music"])]
        matches = find_relevant_clusters(
            clusters, user_profile={"user_id": "u1", "interests": ["Travel", "food"]}
        )
        assert matches[0].score == pytest.approx(0.55)


class TestDefaultStrategy:
    def test_popularity_decay(self, popularity_clusters):
        matches = find_relevant_clusters(popularity_clusters)
        assert [m.cluster.size for m in matches] == [500, 300, 100]
        assert [m.score for m in matches] == pytest.approx([0.5, 0.45, 0.4])
        assert all(m.reason == MatchReason.DEFAULT for m in matches)

    def test_ranks_by_size_not_input_order(self, popularity_clusters):
        shuffled = [popularity_clusters[2], popularity_clusters[0], popularity_clusters[1]]
        matches = find_relevant_clusters(shuffled)
        assert [m.cluster.size for m in matches] == [500, 300, 100]
        # Caller's sequence is left alone
        assert [c.size for c in shuffled] == [100, 500, 300]

    def test_score_floor(self, cluster_factory):
        clusters = [cluster_factory(f"dbscan-{i}", 100 - i) for i in range(1, 11)]
        matches = find_relevant_clusters(clusters, min_match_threshold=0.0)
        assert matches[-1].score == pytest.approx(0.2)
        assert min(m.score for m in matches) >= 0.2


class TestContextBoost:
    @pytest.mark.parametrize(
        "hour, expected",
        [(3, 0.4), (9, 0.7), (10, 0.7), (17, 0.7), (18, 1.0), (20, 1.0), (22, 1.0), (23, 0.4)],
    )
    def test_time_factor(self, config, hour, expected):
        assert time_factor(hour, config) == pytest.approx(expected)

    @pytest.mark.parametrize("day, expected", [(0, 1.0), (6, 1.0), (3, 0.8), (1, 0.8)])
    def test_day_factor(self, config, day, expected):
        assert day_factor(day, config) == pytest.approx(expected)

    def test_missing_fields_add_nothing(self, config):
        assert context_boost(RecommendationContext(), config) == 0.0
        assert context_boost(RecommendationContext(time_of_day=10), config) == pytest.approx(0.07)
        assert context_boost(RecommendationContext(day_of_week=3), config) == pytest.approx(0.08)

    def test_peak_weekend_boost_capped_at_one(self, cluster_factory):
        clusters = [
            cluster_factory("dbscan-1", 5, centroid=[0.9, 0.43588989435]),
            cluster_factory("dbscan-2", 5, centroid=[0.5, 0.86602540378]),
        ]
        matches = find_relevant_clusters(
            clusters,
            user_embedding=[1.0, 0.0],
            context=RecommendationContext(time_of_day=20, day_of_week=6),
        )
        assert matches[0].score == pytest.approx(1.0)
        assert matches[1].score == pytest.approx(0.7)

    def test_boost_can_lift_match_over_threshold(self, cluster_factory):
        clusters = [cluster_factory("dbscan-1", 5, centroid=[0.25, 0.96824583655])]
        assert find_relevant_clusters(clusters, user_embedding=[1.0, 0.0]) == []
        boosted = find_relevant_clusters(
            clusters, user_embedding=[1.0, 0.0], context={"time_of_day": 20, "day_of_week": 0}
        )
        assert boosted[0].score == pytest.approx(0.45)

    def test_context_range_validation(self):
        with pytest.raises(ValueError):
            RecommendationContext(time_of_day=24)
        with pytest.raises(ValueError):
            RecommendationContext(day_of_week=7)


class TestThresholdSortCap:
    """Post-conditions on the ranked output."""

    def _clusters(self, cluster_factory):
        return [cluster_factory(f"dbscan-{i}", 10 * (20 - i)) for i in range(1, 16)]

    def test_sorted_descending_and_above_threshold(self, cluster_factory):
        matches = find_relevant_clusters(
            self._clusters(cluster_factory), min_match_threshold=0.3, max_clusters=20
        )
        scores = [m.score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(s >= 0.3 for s in scores)

    def test_max_clusters_caps_output(self, cluster_factory, config):
        matches = find_relevant_clusters(self._clusters(cluster_factory), min_match_threshold=0.0)
        assert len(matches) == config.max_clusters

    def test_larger_cap_extends_prefix(self, cluster_factory):
        clusters = self._clusters(cluster_factory)
        previous = []
        for k in range(0, 16):
            current = find_relevant_clusters(clusters, min_match_threshold=0.0, max_clusters=k)
            assert len(current) == k
            assert [m.cluster.id for m in current[: len(previous)]] == [
                m.cluster.id for m in previous
            ]
            previous = current

    def test_ties_keep_discovery_order(self, cluster_factory):
        clusters = [cluster_factory(f"dbscan-{i}", 5, centroid=[1.0, 0.0]) for i in range(1, 5)]
        matches = find_relevant_clusters(clusters, user_embedding=[1.0, 0.0])
        assert [m.cluster.id for m in matches] == ["dbscan-1", "dbscan-2", "dbscan-3", "dbscan-4"]

    def test_threshold_and_cap_from_config(self, popularity_clusters):
        config = ClusterMatchConfig(min_match_threshold=0.42, max_clusters=1)
        matches = find_relevant_clusters(popularity_clusters, config=config)
        assert [m.cluster.id for m in matches] == ["dbscan-1"]

    def test_all_scores_in_unit_interval(self, cluster_factory):
        clusters = self._clusters(cluster_factory)
        for kwargs in (
            {"user_embedding": [1.0, 0.0]},
            {"user_profile": UserProfile(interests=["x"])},
            {},
        ):
            matches = find_relevant_clusters(
                clusters,
                context=RecommendationContext(time_of_day=19, day_of_week=0),
                min_match_threshold=0.0,
                max_clusters=100,
                **kwargs,
            )
            assert all(0.0 <= m.score <= 1.0 for m in matches)
