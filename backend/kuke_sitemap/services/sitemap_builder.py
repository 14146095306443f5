"""
Sitemap Builder: Turns backend content into sitemap URL entries.

One builder per child sitemap:
    - sitemap-main            static core pages
    - sitemap-news            news articles
    - sitemap-posts-<tier>    posts whose engagement tier matches
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional

from kuke_sitemap.core.scoring import DEFAULT_SCORE_CONFIG, ScoreConfig, Tier, categorize
from kuke_sitemap.schemas.content import ContentItem, SitemapUrlEntry
from kuke_sitemap.services.community_client import CommunityApiClient, CommunityApiError
from kuke_sitemap.services.pagination import fetch_all
from kuke_sitemap.services.sitemap_xml import render_urlset

logger = logging.getLogger(__name__)


# Core pages with hand-assigned SEO weight
STATIC_ROUTES: list[dict] = [
    {"loc": "/",          "priority": 1.0, "changefreq": "daily"},
    {"loc": "/news",      "priority": 0.9, "changefreq": "daily"},
    {"loc": "/activity",  "priority": 0.9, "changefreq": "always"},
    {"loc": "/stats",     "priority": 0.8, "changefreq": "daily"},
    {"loc": "/consensus", "priority": 0.8, "changefreq": "weekly"},
    {"loc": "/players",   "priority": 0.7, "changefreq": "daily"},
    {"loc": "/bans",      "priority": 0.6, "changefreq": "daily"},
    {"loc": "/monitor",   "priority": 0.5, "changefreq": "always"},
]

# (priority, changefreq) per post tier
TIER_SEO: dict[Tier, tuple[float, str]] = {
    Tier.EVERGREEN: (1.0, "monthly"),
    Tier.HOT:       (0.9, "daily"),
    Tier.TRENDING:  (0.8, "daily"),
    Tier.STANDARD:  (0.6, "weekly"),
}
DEFAULT_TIER_SEO: tuple[float, str] = (0.5, "weekly")

# Tiers that get their own sitemap; excluded posts are never published
PUBLISHED_TIERS = [Tier.HOT, Tier.EVERGREEN, Tier.TRENDING, Tier.STANDARD]

NEWS_PRIORITY = 0.8
NEWS_CHANGEFREQ = "monthly"

POSTS_PREFIX = "sitemap-posts-"


def _lastmod(item: ContentItem, today: date) -> str:
    last_mod = item.last_modified
    return (last_mod.date() if last_mod else today).isoformat()


def build_main_entries(site_url: str, today: date) -> list[SitemapUrlEntry]:
    """Entries for the static core pages; the root maps to the bare site URL."""
    return [
        SitemapUrlEntry(
            loc=site_url if route["loc"] == "/" else f"{site_url}{route['loc']}",
            lastmod=today.isoformat(),
            changefreq=route["changefreq"],
            priority=route["priority"],
        )
        for route in STATIC_ROUTES
    ]


def build_news_entries(news: list[ContentItem], site_url: str, today: date) -> list[SitemapUrlEntry]:
    return [
        SitemapUrlEntry(
            loc=f"{site_url}/news/{item.id}",
            lastmod=_lastmod(item, today),
            changefreq=NEWS_CHANGEFREQ,
            priority=NEWS_PRIORITY,
        )
        for item in news
    ]


def post_location(post: ContentItem, site_url: str) -> str:
    section = "album" if post.is_album else "activity"
    return f"{site_url}/{section}/{post.id}"


def build_post_entries(
    posts: list[ContentItem],
    tier: Tier,
    site_url: str,
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
    now: Optional[datetime] = None,
) -> list[SitemapUrlEntry]:
    """
    Entries for the posts that categorize into `tier`.

    All posts are categorized against the same `now` so one response is
    internally consistent.
    """
    now = now or datetime.now(timezone.utc)
    today = now.date()
    priority, changefreq = TIER_SEO.get(tier, DEFAULT_TIER_SEO)

    entries = []
    for post in posts:
        if categorize(post, config, now) != tier:
            continue
        entries.append(SitemapUrlEntry(
            loc=post_location(post, site_url),
            lastmod=_lastmod(post, today),
            changefreq=changefreq,
            priority=priority,
        ))
    return entries


def parse_post_tier(name: str) -> Optional[Tier]:
    """Tier for a 'sitemap-posts-<tier>' name, None if it is not a published tier."""
    if not name.startswith(POSTS_PREFIX):
        return None
    value = name[len(POSTS_PREFIX):]
    for tier in PUBLISHED_TIERS:
        if tier.value == value:
            return tier
    return None


async def fetch_news(client: CommunityApiClient, limit: int = 1000) -> list[ContentItem]:
    """News listing, empty when the backend is unavailable."""
    try:
        return await client.get_news(limit=limit)
    except CommunityApiError as e:
        logger.warning(f"News unavailable, serving empty news sitemap: {e}")
        return []


async def fetch_posts(
    client: CommunityApiClient,
    per_page: int = 50,
    max_items: int = 10000,
    max_pages: int = 20,
) -> list[ContentItem]:
    logger.info("Fetching posts for sitemap...")
    return await fetch_all(
        lambda page, size: client.get_posts_page(page, size, post_type="latest"),
        per_page=per_page,
        max_items=max_items,
        max_pages=max_pages,
    )


async def generate_sitemap(
    name: str,
    client: CommunityApiClient,
    site_url: str,
    *,
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
    now: Optional[datetime] = None,
    news_limit: int = 1000,
    per_page: int = 50,
    max_items: int = 10000,
    max_pages: int = 20,
) -> Optional[str]:
    """
    Build the XML document for one child sitemap.

    Args:
        name: Sitemap name without the .xml suffix, e.g. 'sitemap-posts-hot'.
        client: Backend client used for news and post listings.
        site_url: Public site origin the entries point at.

    Returns:
        The rendered XML, or None when `name` is not a known sitemap.
    """
    now = now or datetime.now(timezone.utc)
    today = now.date()
    site_url = site_url.rstrip("/")

    if name == "sitemap-main":
        entries = build_main_entries(site_url, today)
    elif name == "sitemap-news":
        news = await fetch_news(client, limit=news_limit)
        entries = build_news_entries(news, site_url, today)
    else:
        tier = parse_post_tier(name)
        if tier is None:
            return None
        posts = await fetch_posts(client, per_page=per_page, max_items=max_items, max_pages=max_pages)
        entries = build_post_entries(posts, tier, site_url, config, now)

    logger.info(f"Generated {name} with {len(entries)} URL(s)")
    return render_urlset(entries)
