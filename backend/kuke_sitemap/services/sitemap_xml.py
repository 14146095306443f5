"""
Sitemap XML: Serializes URL entries and the sitemap index.

Documents follow the sitemaps.org 0.9 protocol. ElementTree handles
entity escaping of text, so URLs containing '&', '<' or '>' stay well-formed.
"""

import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from kuke_sitemap.schemas.content import SitemapUrlEntry


SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Child sitemaps listed by the index, in publication order
SITEMAP_FILES = [
    "sitemap-main.xml",
    "sitemap-news.xml",
    "sitemap-posts-hot.xml",
    "sitemap-posts-evergreen.xml",
    "sitemap-posts-trending.xml",
    "sitemap-posts-standard.xml",
]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def render_urlset(entries: Iterable[SitemapUrlEntry]) -> str:
    """
    Render a <urlset> document.

    Args:
        entries: URL entries, rendered in the given order.

    Returns:
        The XML document as a string. An empty iterable yields an empty urlset.
    """
    root = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url_el = ET.SubElement(root, "url")
        ET.SubElement(url_el, "loc").text = entry.loc
        ET.SubElement(url_el, "lastmod").text = entry.lastmod
        ET.SubElement(url_el, "changefreq").text = entry.changefreq
        ET.SubElement(url_el, "priority").text = str(float(entry.priority))
    return _serialize(root)


def render_sitemap_index(
    site_url: str,
    filenames: Iterable[str] = SITEMAP_FILES,
    today: Optional[date] = None,
) -> str:
    """Render the <sitemapindex> pointing at {site_url}/sitemaps/<filename>."""
    lastmod = (today or utc_today()).isoformat()
    site_url = site_url.rstrip("/")

    root = ET.Element("sitemapindex", xmlns=SITEMAP_NS)
    for filename in filenames:
        sitemap_el = ET.SubElement(root, "sitemap")
        ET.SubElement(sitemap_el, "loc").text = f"{site_url}/sitemaps/{filename}"
        ET.SubElement(sitemap_el, "lastmod").text = lastmod
    return _serialize(root)
