"""
Main router that includes all endpoint routers
"""

from fastapi import APIRouter

from kuke_sitemap.api.endpoints import sitemaps

# Create main router
api_router = APIRouter()

# Sitemaps are served from the site root, so no prefix
api_router.include_router(sitemaps.router, tags=["sitemaps"])
