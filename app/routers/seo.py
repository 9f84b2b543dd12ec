import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse, Response

from app import dependencies as deps
from app.services.posts_service import PostsService
from app.services.seo_service import (
    build_robots_rules,
    build_sitemap_entries,
    render_robots,
    render_sitemap,
)
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sitemap.xml")
def sitemap(
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    try:
        posts = service.list_posts()
    except Exception as e:
        logger.error(f"Failed to build sitemap: {e}")
        raise HTTPException(status_code=500, detail="Failed to build sitemap")

    entries = build_sitemap_entries(
        current_settings.SITE_URL, current_settings.SECTION_PATH, posts
    )
    return Response(content=render_sitemap(entries), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots(current_settings: Settings = Depends(deps.get_settings)):
    rules = build_robots_rules(current_settings.AI_CRAWLERS)
    return PlainTextResponse(render_robots(rules, current_settings.SITE_URL))
