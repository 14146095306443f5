import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


# Make the backend/ directory importable without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = PROJECT_ROOT / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from kuke_sitemap.schemas.content import ContentItem  # noqa: E402


FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_post():
    """Build a post whose last modification is `age_days` before FIXED_NOW."""

    def _make(post_id=1, *, likes=0, comments=0, collects=0, content="", age_days=1.0, **extra):
        fields = {
            "id": post_id,
            "content": content,
            "likes_count": likes,
            "comments_count": comments,
            "collects_count": collects,
            "created_at": (FIXED_NOW - timedelta(days=age_days)).isoformat(),
        }
        fields.update(extra)
        return ContentItem.model_validate(fields)

    return _make
