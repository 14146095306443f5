"""
FastAPI entry point for the Kuke sitemap service
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time
import logging

from kuke_sitemap import __version__
from kuke_sitemap.core.config import settings
from kuke_sitemap.api.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Kuke Sitemap Service",
    description="Engagement-tiered XML sitemaps for the kuke.ink community",
    version=__version__,
)


# Request timing header
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    started = time.time()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(time.time() - started)
    return response


app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Liveness check; does not touch the community backend"""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    return {
        "service": "Kuke Sitemap Service",
        "version": __version__,
        "sitemap_index": "/sitemap.xml",
        "sitemaps": "/sitemaps/{filename}.xml",
    }


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


@app.on_event("startup")
async def log_configuration():
    logger.info(
        f"Serving sitemaps for {settings.SITE_URL} from {settings.API_BASE} "
        f"({settings.POSTS_PER_PAGE}/page, max {settings.POSTS_MAX_PAGES} pages, "
        f"max {settings.POSTS_MAX_ITEMS} posts)"
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "kuke_sitemap.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
