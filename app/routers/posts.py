import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.schemas.blog import PostListing, PostMetadata, PostSummary, RenderedPost
from app.services.metadata_service import MetadataService
from app.services.page_renderer import render_post_page
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/posts", response_model=List[PostSummary])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get all posts metadata, newest first."""
    try:
        return service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/api/posts/{slug}", response_model=RenderedPost)
def get_post(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Get a single rendered post by slug."""
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/api/posts/{slug}/metadata", response_model=PostMetadata)
def get_post_metadata(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    metadata_service: MetadataService = Depends(deps.get_metadata_service),
):
    """Page metadata for a post; unknown slugs get the not-found title."""
    try:
        return metadata_service.build_post_metadata(service.get_post_frontmatter(slug))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error building metadata for {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to build post metadata")


@router.get("/android", response_model=PostListing)
def notes_listing(
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    try:
        posts = service.list_posts()
    except Exception as e:
        logger.error(f"Unexpected error listing notes: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    return PostListing(
        title=current_settings.SECTION_TITLE,
        description=current_settings.SECTION_DESCRIPTION,
        posts=posts,
    )


@router.get("/android/{slug}", response_class=HTMLResponse)
def note_page(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    metadata_service: MetadataService = Depends(deps.get_metadata_service),
):
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return HTMLResponse(render_post_page(post, metadata_service))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error rendering page {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to render post")
