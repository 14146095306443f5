"""
Community backend REST client for post and news listings
"""

import httpx
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from kuke_sitemap.schemas.content import ContentItem, PostPage

logger = logging.getLogger(__name__)


class CommunityApiError(Exception):
    """Custom exception for community backend errors"""
    pass


class CommunityApiClient:
    """Client for the community backend listing endpoints"""

    def __init__(self, base_url: str, timeout: float = 15.0,
                 posts_endpoint: str = "/api/posts",
                 news_endpoint: str = "/api/website/news/",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the community API client

        Args:
            base_url: Backend base URL, e.g. https://api.kuke.ink
            timeout: Request timeout in seconds
            posts_endpoint: Path of the paginated post listing
            news_endpoint: Path of the news listing
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.posts_endpoint = posts_endpoint
        self.news_endpoint = news_endpoint
        self._transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        """Always ask the backend for fresh data"""
        return {
            'Cache-Control': 'no-cache',
            'Accept': 'application/json'
        }

    async def _get_json(self, endpoint: str, params: Dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self._transport) as client:
                response = await client.get(endpoint, params=params, headers=self.headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {endpoint}: {e}")
            raise CommunityApiError(f"Failed to fetch {endpoint}: {e}")
        except ValueError as e:
            logger.error(f"Invalid JSON from {endpoint}: {e}")
            raise CommunityApiError(f"Invalid JSON from {endpoint}: {e}")

    def _parse_items(self, raw_items: List[Any], endpoint: str) -> List[ContentItem]:
        items = []
        for raw in raw_items:
            try:
                items.append(ContentItem.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed item from {endpoint}: {e.error_count()} error(s)")
            except (ValueError, TypeError, OverflowError) as e:
                logger.warning(f"Skipping unreadable item from {endpoint}: {e}")
        return items

    async def get_posts_page(self, page: int, per_page: int = 50,
                             post_type: str = "latest") -> PostPage:
        """
        Get one page of the post listing

        Args:
            page: 1-based page number
            per_page: Page size
            post_type: Listing order requested from the backend

        Returns:
            PostPage with the page's posts and the backend-reported total
        """
        params = {
            'page': page,
            'per_page': per_page,
            'type': post_type
        }
        data = await self._get_json(self.posts_endpoint, params)

        if not isinstance(data, dict):
            raise CommunityApiError(f"Unexpected post listing payload: {type(data).__name__}")

        raw_posts = data.get('data') or []
        if not isinstance(raw_posts, list):
            raise CommunityApiError("Post listing 'data' is not a list")

        total = data.get('total')
        try:
            total = int(total) if total is not None else None
        except (TypeError, ValueError):
            total = None

        return PostPage(data=self._parse_items(raw_posts, self.posts_endpoint), total=total)

    async def get_news(self, limit: int = 1000) -> List[ContentItem]:
        """
        Get the news article listing

        Args:
            limit: Maximum number of articles to request

        Returns:
            List of news items (bare list or {"data": [...]} payloads both accepted)
        """
        data = await self._get_json(self.news_endpoint, {'limit': limit})

        if isinstance(data, dict):
            data = data.get('data') or []
        if not isinstance(data, list):
            raise CommunityApiError(f"Unexpected news payload: {type(data).__name__}")

        return self._parse_items(data, self.news_endpoint)
