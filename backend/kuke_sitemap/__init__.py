"""
kuke_sitemap: Engagement-tiered sitemap service for the kuke.ink community.

Submodules:
    - core: settings and post scoring/tiering
    - schemas: backend content and sitemap entry models
    - services: backend client, pagination, sitemap assembly and XML
    - api: FastAPI routes
"""

__version__ = "1.0.0"
