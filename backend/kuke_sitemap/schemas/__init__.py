"""
Pydantic schemas for backend content and sitemap documents
"""

from .content import ContentItem, PostPage, SitemapUrlEntry

__all__ = ["ContentItem", "PostPage", "SitemapUrlEntry"]
