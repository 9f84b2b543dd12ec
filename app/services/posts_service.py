import logging
from typing import List, Optional

import yaml

from app.repos.posts_repo import FilesystemPostsRepo
from app.schemas.blog import PostFrontmatter, PostSummary, RenderedPost
from app.services.content_parser import parse_frontmatter, split_post
from app.services.markdown_renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

# Malformed YAML, frontmatter that fails validation, or undecodable bytes
PARSE_ERRORS = (yaml.YAMLError, ValueError)


class PostsService:
    def __init__(self, repo: FilesystemPostsRepo, renderer: MarkdownRenderer):
        self.repo = repo
        self.renderer = renderer

    def list_posts(self) -> List[PostSummary]:
        """All published posts, newest first. Unparseable files are skipped."""
        posts = []
        for post_id in self.repo.list_post_ids():
            post = self.get_post_frontmatter(post_id)
            if post:
                posts.append(PostSummary(**post.model_dump()))

        # sorted() is stable, so equal dates keep directory order
        return sorted(posts, key=lambda p: p.date, reverse=True)

    def get_all_post_ids(self) -> List[str]:
        return self.repo.list_post_ids()

    def get_post_frontmatter(self, post_id: str) -> Optional[PostFrontmatter]:
        parsed = self._load(post_id)
        if not parsed:
            return None
        post, _body = parsed
        return post

    def get_post(self, post_id: str) -> Optional[RenderedPost]:
        parsed = self._load(post_id)
        if not parsed:
            return None
        post, body = parsed
        content_html = self.renderer.render(body)
        return RenderedPost(**post.model_dump(), contentHtml=content_html)

    def _load(self, post_id: str):
        try:
            text = self.repo.read_post(post_id)
            if text is None:
                logger.debug(f"No content file for post {post_id}")
                return None
            metadata, body = split_post(text)
            return parse_frontmatter(post_id, metadata), body
        except PARSE_ERRORS as e:
            logger.warning(f"Failed to parse post {post_id}: {e}")
            return None
