"""
Sitemap endpoints
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
import logging

from kuke_sitemap.core.config import settings
from kuke_sitemap.core.scoring import DEFAULT_SCORE_CONFIG, ScoreConfig
from kuke_sitemap.services.community_client import CommunityApiClient
from kuke_sitemap.services.sitemap_builder import generate_sitemap
from kuke_sitemap.services.sitemap_xml import render_sitemap_index

logger = logging.getLogger(__name__)

router = APIRouter()


def get_api_client() -> CommunityApiClient:
    """Backend client built from settings"""
    return CommunityApiClient(
        settings.API_BASE,
        timeout=settings.API_TIMEOUT,
        posts_endpoint=settings.POSTS_ENDPOINT,
        news_endpoint=settings.NEWS_ENDPOINT,
    )


def get_score_config() -> ScoreConfig:
    return DEFAULT_SCORE_CONFIG


def get_now() -> datetime:
    """Reference instant for categorization and lastmod dates"""
    return datetime.now(timezone.utc)


def _xml_response(xml: str) -> Response:
    return Response(
        content=xml,
        media_type="application/xml",
        headers={"Cache-Control": settings.cache_control},
    )


@router.get("/sitemap.xml")
async def sitemap_index(now: datetime = Depends(get_now)):
    """
    Sitemap index listing every child sitemap.

    Purely structural; never calls the backend.
    """
    return _xml_response(render_sitemap_index(settings.SITE_URL, today=now.date()))


@router.get("/sitemaps/{filename}")
async def child_sitemap(
    filename: str,
    client: CommunityApiClient = Depends(get_api_client),
    config: ScoreConfig = Depends(get_score_config),
    now: datetime = Depends(get_now),
):
    """
    One child sitemap: main, news, or posts for a single tier.

    Backend failures degrade to partial or empty documents rather than errors.
    """
    if not filename.endswith(".xml"):
        return PlainTextResponse("Not Found", status_code=404)

    name = filename[:-len(".xml")]
    xml = await generate_sitemap(
        name,
        client,
        settings.SITE_URL,
        config=config,
        now=now,
        news_limit=settings.NEWS_LIMIT,
        per_page=settings.POSTS_PER_PAGE,
        max_items=settings.POSTS_MAX_ITEMS,
        max_pages=settings.POSTS_MAX_PAGES,
    )
    if xml is None:
        logger.info(f"Unknown sitemap requested: {filename}")
        return PlainTextResponse("Sitemap not found", status_code=404)

    return _xml_response(xml)
