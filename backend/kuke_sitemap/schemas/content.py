"""
Pydantic schemas for community content and sitemap entries
"""

import math
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ContentItem(BaseModel):
    """A post or news article as returned by the community backend.

    The backend owns these records; this service only reads them. Counts and
    text are coerced to safe defaults so scoring never sees NaN or None.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Union[int, str] = Field(..., description="Backend identifier")
    title: str = Field("", description="Post or article title")
    content: str = Field("", description="Body text used for the length bonus")
    type: Optional[str] = Field(None, description="Post type, e.g. 'album'")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    likes_count: float = Field(0, description="Number of likes")
    comments_count: float = Field(0, description="Number of comments")
    collects_count: float = Field(0, description="Number of collects (bookmarks)")

    @field_validator("likes_count", "comments_count", "collects_count", mode="before")
    @classmethod
    def coerce_count(cls, v):
        """Non-numeric, NaN and infinite counts count as zero"""
        if isinstance(v, bool) or v is None:
            return 0
        try:
            n = float(v)
        except (TypeError, ValueError, OverflowError):
            return 0
        if math.isnan(n) or math.isinf(n):
            return 0
        return n

    @field_validator("title", "content", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("created_at", "updated_at", mode="wrap")
    @classmethod
    def coerce_timestamp(cls, v, handler) -> Optional[datetime]:
        """ISO strings and epoch numbers parse; anything else becomes None. Naive values are UTC."""
        try:
            parsed = handler(v)
        except ValidationError:
            return None
        if parsed is not None and parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    @property
    def last_modified(self) -> Optional[datetime]:
        """updated_at when present, else created_at"""
        return self.updated_at or self.created_at

    @property
    def is_album(self) -> bool:
        return self.type == "album"


class PostPage(BaseModel):
    """One page of the paginated post listing"""

    data: List[ContentItem] = Field(default_factory=list)
    total: Optional[int] = Field(None, description="Backend-reported total post count")


class SitemapUrlEntry(BaseModel):
    """A single <url> element of a sitemap document"""

    loc: str = Field(..., description="Absolute page URL")
    lastmod: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    changefreq: str = Field(..., description="Change frequency keyword")
    priority: float = Field(..., ge=0.0, le=1.0, description="Relative crawl priority")
