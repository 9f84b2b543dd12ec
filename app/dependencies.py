import requests
from fastapi import Depends

from app.repos.posts_repo import FilesystemPostsRepo
from app.services.font_loader import FontLoader
from app.services.markdown_renderer import MarkdownRenderer
from app.services.metadata_service import MetadataService
from app.services.og_image_service import OgImageService
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilesystemPostsRepo(current_settings.content_path)


def get_markdown_renderer(current_settings: Settings = Depends(get_settings)):
    return MarkdownRenderer(theme=current_settings.HIGHLIGHT_THEME)


def get_posts_service(
    repo=Depends(get_posts_repo),
    renderer=Depends(get_markdown_renderer),
):
    return PostsService(repo=repo, renderer=renderer)


def get_metadata_service(current_settings: Settings = Depends(get_settings)):
    return MetadataService(
        site_url=current_settings.SITE_URL,
        section_path=current_settings.SECTION_PATH,
        section_title=current_settings.SECTION_TITLE,
        author_name=current_settings.AUTHOR_NAME,
        og_image_version=current_settings.OG_IMAGE_VERSION,
    )


def get_font_loader(current_settings: Settings = Depends(get_settings)):
    with requests.Session() as session:
        yield FontLoader(
            family=current_settings.OG_FONT_FAMILY,
            session=session,
            remote=current_settings.OG_REMOTE_FONTS,
            fallback_path=current_settings.OG_FALLBACK_FONT_PATH,
            timeout=current_settings.FONT_FETCH_TIMEOUT,
        )


def get_og_image_service(
    posts_service=Depends(get_posts_service),
    font_loader=Depends(get_font_loader),
    current_settings: Settings = Depends(get_settings),
):
    return OgImageService(
        posts_service=posts_service,
        font_loader=font_loader,
        fallback_title=current_settings.SECTION_TITLE,
        site_identifier=current_settings.SITE_IDENTIFIER,
    )
