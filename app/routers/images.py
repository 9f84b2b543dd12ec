import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app import dependencies as deps
from app.services.og_image_service import CONTENT_TYPE, OgImageService

logger = logging.getLogger(__name__)

router = APIRouter()


def _image_response(service: OgImageService, slug: Optional[str]) -> Response:
    try:
        image_data = service.render(slug)
    except Exception as e:
        logger.error(f"Failed to render OG image for {slug or 'section'}: {e}")
        raise HTTPException(status_code=500, detail="Failed to render image")

    headers = {"Content-Length": str(len(image_data))}
    return Response(content=image_data, media_type=CONTENT_TYPE, headers=headers)


# The `v` query parameter is a cache-buster for social platforms and is ignored.
@router.get("/android/opengraph-image")
def section_og_image(service: OgImageService = Depends(deps.get_og_image_service)):
    """Serve the section-level Open Graph image."""
    return _image_response(service, None)


@router.get("/android/{slug}/opengraph-image")
def post_og_image(
    slug: str, service: OgImageService = Depends(deps.get_og_image_service)
):
    """Serve the Open Graph image for a post, or the fallback for unknown slugs."""
    return _image_response(service, slug)
