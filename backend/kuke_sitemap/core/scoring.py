"""
Scoring: Engagement score and sitemap tier assignment for community posts.

Each post gets an interaction score (weighted likes/comments/collects plus a
capped content-length bonus). The score and the post's age then decide which
tier sitemap it lands in.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from kuke_sitemap.schemas.content import ContentItem


class Tier(str, Enum):
    """Sitemap priority buckets"""
    EVERGREEN = "evergreen"
    HOT = "hot"
    TRENDING = "trending"
    STANDARD = "standard"
    EXCLUDED = "excluded"


class ScoreConfig(BaseModel):
    """Scoring weights and tier thresholds"""

    model_config = ConfigDict(frozen=True)

    like_weight: float = Field(1.5, ge=0)
    comment_weight: float = Field(3.0, ge=0)
    collect_weight: float = Field(5.0, ge=0)

    length_bonus_per_char: float = Field(0.02, ge=0)
    length_bonus_cap: float = Field(20.0, ge=0)

    evergreen_threshold: float = 100.0
    hot_threshold: float = 50.0
    # Tuned separately from hot_threshold
    trending_threshold: float = 10.0
    min_index_score: float = 5.0

    hot_max_age_days: float = 30.0
    trending_max_age_days: float = 7.0


DEFAULT_SCORE_CONFIG = ScoreConfig()


def content_length(text: str) -> int:
    """Length in UTF-16 code units, the way the web frontend counts characters."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def interaction_score(item: ContentItem, config: ScoreConfig = DEFAULT_SCORE_CONFIG) -> float:
    """
    Compute the engagement score for one post.

        likes*W_like + comments*W_comment + collects*W_collect
        + min(content_length(content) * 0.02, 20)
    """
    score = (
        item.likes_count * config.like_weight
        + item.comments_count * config.comment_weight
        + item.collects_count * config.collect_weight
    )
    length_bonus = min(content_length(item.content) * config.length_bonus_per_char, config.length_bonus_cap)
    return score + length_bonus


def age_in_days(item: ContentItem, now: Optional[datetime] = None) -> float:
    """Days since the item was last modified; infinite when it has no timestamp."""
    last_mod = item.last_modified
    if last_mod is None:
        return float("inf")
    now = now or datetime.now(timezone.utc)
    return (now - last_mod).total_seconds() / 86400


# Each rule is checked in order; first match wins.
_RULES: list[tuple[Tier, Callable[[float, float, ScoreConfig], bool]]] = [
    (Tier.EVERGREEN, lambda score, age, c: score >= c.evergreen_threshold),
    (Tier.HOT,       lambda score, age, c: score >= c.hot_threshold and age < c.hot_max_age_days),
    (Tier.TRENDING,  lambda score, age, c: score >= c.trending_threshold and age < c.trending_max_age_days),
    (Tier.STANDARD,  lambda score, age, c: score >= c.min_index_score),
]


def categorize_score(score: float, age: float, config: ScoreConfig = DEFAULT_SCORE_CONFIG) -> Tier:
    """Map a (score, age in days) pair to its tier."""
    for tier, rule in _RULES:
        if rule(score, age, config):
            return tier
    return Tier.EXCLUDED


def categorize(
    item: ContentItem,
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
    now: Optional[datetime] = None,
) -> Tier:
    """
    Assign a post to its sitemap tier.

    Args:
        item: The post to categorize.
        config: Weights and thresholds.
        now: Reference instant for the age calculation (defaults to current UTC time).

    Returns:
        The first tier whose rule matches, or Tier.EXCLUDED.
    """
    return categorize_score(interaction_score(item, config), age_in_days(item, now), config)
