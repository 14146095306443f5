"""
Pagination: Walks the paginated post listing into one deduplicated list.

The page fetcher is injected so the loop can run against the real backend
client or a fake in tests.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Union

from kuke_sitemap.schemas.content import ContentItem, PostPage
from kuke_sitemap.services.community_client import CommunityApiError

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int, int], Awaitable[PostPage]]


async def fetch_all(
    fetch_page: PageFetcher,
    *,
    per_page: int = 50,
    max_items: int = 10000,
    max_pages: int = 20,
) -> list[ContentItem]:
    """
    Fetch pages sequentially starting at page 1.

    Stops after a page when it was empty, when max_items unique items were
    collected, when the backend-reported total was reached, or when max_pages
    pages were fetched. Items are deduplicated by id in first-seen order.

    A backend failure ends the walk early and returns what was collected so far.
    """
    seen_ids: set[Union[int, str]] = set()
    items: list[ContentItem] = []
    page = 1

    while page <= max_pages:
        try:
            result = await fetch_page(page, per_page)
        except CommunityApiError as e:
            logger.warning(f"Pagination aborted at page {page}, keeping {len(items)} items: {e}")
            break

        if not result.data:
            break

        for item in result.data:
            if item.id not in seen_ids:
                seen_ids.add(item.id)
                items.append(item)

        if len(items) >= max_items:
            items = items[:max_items]
            break
        if result.total is not None and len(items) >= result.total:
            break
        page += 1

    logger.info(f"Fetched {len(items)} unique items over {min(page, max_pages)} page(s)")
    return items
