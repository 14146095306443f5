"""Tests for interaction scoring and tier categorization."""

from datetime import datetime, timedelta, timezone

import pytest

from kuke_sitemap.core.scoring import (
    DEFAULT_SCORE_CONFIG,
    ScoreConfig,
    Tier,
    age_in_days,
    categorize,
    categorize_score,
    content_length,
    interaction_score,
)
from kuke_sitemap.schemas.content import ContentItem


def test_empty_post_scores_zero():
    assert interaction_score(ContentItem(id=1)) == 0


def test_score_is_weighted_sum_plus_length_bonus():
    post = ContentItem(id=1, likes_count=2, comments_count=1, collects_count=1, content="x" * 100)
    # 2*1.5 + 1*3 + 1*5 + 100*0.02
    assert interaction_score(post) == pytest.approx(13.0)


@pytest.mark.parametrize("length,bonus", [(0, 0), (500, 10), (1000, 20), (5000, 20)])
def test_length_bonus_saturates_at_twenty(length, bonus):
    assert interaction_score(ContentItem(id=1, content="a" * length)) == pytest.approx(bonus)


@pytest.mark.parametrize("field", ["likes_count", "comments_count", "collects_count"])
def test_score_non_decreasing_in_each_count(field):
    scores = [interaction_score(ContentItem(id=1, **{field: n})) for n in range(0, 20)]
    assert scores == sorted(scores)


def test_score_non_decreasing_in_content_length():
    scores = [interaction_score(ContentItem(id=1, content="a" * n)) for n in range(0, 1200, 50)]
    assert scores == sorted(scores)


@pytest.mark.parametrize("bad", ["lots", None, float("nan"), float("inf"), [], {}])
def test_malformed_counts_count_as_zero(bad):
    post = ContentItem.model_validate({"id": 1, "likes_count": bad, "comments_count": 2})
    assert interaction_score(post) == pytest.approx(6.0)


def test_missing_content_counts_as_empty():
    post = ContentItem.model_validate({"id": 1, "content": None, "likes_count": "4"})
    assert interaction_score(post) == pytest.approx(6.0)


def test_score_is_deterministic():
    post = ContentItem(id=7, likes_count=3, comments_count=5, content="hello")
    assert interaction_score(post) == interaction_score(post)


@pytest.mark.parametrize(
    "score,age,expected",
    [
        (150, 500, Tier.EVERGREEN),
        (60, 10, Tier.HOT),
        (12, 3, Tier.TRENDING),
        (12, 10, Tier.STANDARD),
        (3, 1, Tier.EXCLUDED),
        (60, 45, Tier.STANDARD),
        (60, 3, Tier.HOT),
        (100, 0, Tier.EVERGREEN),
        (5, 0, Tier.STANDARD),
        (4.99, 0, Tier.EXCLUDED),
    ],
)
def test_categorize_score_examples(score, age, expected):
    assert categorize_score(score, age) is expected


def test_categorize_is_total():
    tiers = set()
    for score in range(0, 160, 3):
        for age in (0, 3, 6.9, 7, 20, 29.9, 30, 365, float("inf")):
            tier = categorize_score(score, age)
            assert isinstance(tier, Tier)
            tiers.add(tier)
    assert tiers == set(Tier)


def test_default_thresholds_are_ordered():
    c = DEFAULT_SCORE_CONFIG
    assert c.evergreen_threshold >= c.hot_threshold >= c.trending_threshold >= c.min_index_score
    assert c.hot_max_age_days >= c.trending_max_age_days


def test_trending_threshold_is_independent_of_hot_threshold():
    # The trending floor stays at 10 no matter where the hot threshold sits
    config = ScoreConfig(hot_threshold=80)
    assert config.trending_threshold == 10
    assert categorize_score(12, 3, config) is Tier.TRENDING
    assert categorize_score(60, 3, config) is Tier.TRENDING


def test_weights_must_be_non_negative():
    with pytest.raises(ValueError):
        ScoreConfig(like_weight=-1)


def test_categorize_uses_updated_at_over_created_at(now):
    post = ContentItem(
        id=1,
        likes_count=8,
        created_at=now - timedelta(days=40),
        updated_at=now - timedelta(days=2),
    )
    assert age_in_days(post, now) == pytest.approx(2)
    assert categorize(post, now=now) is Tier.TRENDING


def test_categorize_depends_on_the_reference_instant(make_post, now):
    post = make_post(likes=40, age_days=5)  # score 60
    assert categorize(post, now=now) is Tier.HOT
    assert categorize(post, now=now + timedelta(days=30)) is Tier.STANDARD


def test_post_without_timestamp_is_treated_as_old(now):
    post = ContentItem(id=1, likes_count=40)
    assert age_in_days(post, now) == float("inf")
    assert categorize(post, now=now) is Tier.STANDARD


def test_naive_timestamps_are_read_as_utc(now):
    post = ContentItem.model_validate({"id": 1, "created_at": "2025-06-14T12:00:00"})
    assert age_in_days(post, now) == pytest.approx(1)


def test_count_too_large_for_float_counts_as_zero():
    post = ContentItem.model_validate({"id": 1, "likes_count": int("9" * 400), "comments_count": 2})
    assert post.likes_count == 0
    assert interaction_score(post) == pytest.approx(6.0)


def test_epoch_timestamps_are_parsed(now):
    post = ContentItem.model_validate({"id": 1, "created_at": 1718366400})
    assert post.created_at == datetime(2024, 6, 14, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["2025-06-14T12:00:00.1234Z", "2025-06-14T12:00:00+08:00"])
def test_iso_timestamp_variants_are_parsed(value):
    post = ContentItem.model_validate({"id": 1, "created_at": value})
    assert post.created_at is not None
    assert post.created_at.tzinfo is not None


@pytest.mark.parametrize("value", ["yesterday", "", [], {"ts": 1}])
def test_unreadable_timestamps_become_none(value):
    post = ContentItem.model_validate({"id": 1, "created_at": value})
    assert post.created_at is None


@pytest.mark.parametrize("text,length", [("abc", 3), ("玩家", 2), ("😀", 2), ("a😀b", 4), ("", 0)])
def test_content_length_counts_utf16_code_units(text, length):
    assert content_length(text) == length


def test_length_bonus_counts_emoji_as_two_units():
    post = ContentItem(id=1, content="😀" * 10)
    assert interaction_score(post) == pytest.approx(0.4)
