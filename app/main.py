import logging

from fastapi import FastAPI

from app.routers import images, posts, seo
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Android Engineering Notes API",
    description="Notes, Open Graph images, sitemap and robots for davideagostini.com",
)

# Images first so /android/opengraph-image is not taken for a post slug
app.include_router(images.router)
app.include_router(posts.router)
app.include_router(seo.router)

logger.info(f"Serving notes from {settings.content_path}")


@app.get("/")
async def root():
    return {"message": "Android Engineering Notes API is running"}
