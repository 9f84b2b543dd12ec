import html
import json
from typing import List, Optional

from app.schemas.blog import (
    OgImage,
    OpenGraphMetadata,
    PostFrontmatter,
    PostMetadata,
    TwitterMetadata,
)
from app.services.og_image_service import HEIGHT, WIDTH

NOT_FOUND_TITLE = "Post Not Found"


class MetadataService:
    def __init__(
        self,
        site_url: str,
        section_path: str,
        section_title: str,
        author_name: str,
        og_image_version: str,
    ):
        self.site_url = site_url.rstrip("/")
        self.section_path = section_path.rstrip("/")
        self.section_title = section_title
        self.author_name = author_name
        self.og_image_version = og_image_version

    def post_path(self, post_id: str) -> str:
        return f"{self.section_path}/{post_id}"

    def og_image_path(self, post_id: str) -> str:
        # Bump the version when the image layout changes so social caches refresh
        return f"{self.post_path(post_id)}/opengraph-image?v={self.og_image_version}"

    def build_post_metadata(self, post: Optional[PostFrontmatter]) -> PostMetadata:
        if not post:
            return PostMetadata(title=NOT_FOUND_TITLE)

        image_url = self.og_image_path(post.id)
        return PostMetadata(
            title=f"{post.title} | {self.section_title}",
            description=post.description,
            openGraph=OpenGraphMetadata(
                type="article",
                title=post.title,
                description=post.description,
                url=self.post_path(post.id),
                images=[
                    OgImage(
                        url=image_url,
                        width=WIDTH,
                        height=HEIGHT,
                        alt=f"{post.title} - Open Graph image",
                    )
                ],
            ),
            twitter=TwitterMetadata(
                card="summary_large_image",
                title=post.title,
                description=post.description,
                images=[image_url],
            ),
        )

    def build_json_ld(self, post: PostFrontmatter) -> dict:
        return {
            "@context": "https://schema.org",
            "@type": "TechArticle",
            "headline": post.title,
            "description": post.description,
            "author": {
                "@type": "Person",
                "name": self.author_name,
                "url": self.site_url,
            },
            "datePublished": post.date,
            "dateModified": post.date,
            "keywords": ", ".join(post.tags),
        }

    def absolute_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.site_url}/{url.lstrip('/')}"

    def render_head(self, metadata: PostMetadata) -> str:
        """Render ``<title>`` and ``<meta>`` tags for a page head."""
        tags: List[str] = [f"<title>{html.escape(metadata.title)}</title>"]
        if metadata.description:
            tags.append(_meta("name", "description", metadata.description))

        og = metadata.openGraph
        if og:
            tags.append(_meta("property", "og:type", og.type))
            tags.append(_meta("property", "og:title", og.title))
            tags.append(_meta("property", "og:description", og.description))
            tags.append(_meta("property", "og:url", self.absolute_url(og.url)))
            for image in og.images:
                tags.append(_meta("property", "og:image", self.absolute_url(image.url)))
                tags.append(_meta("property", "og:image:width", str(image.width)))
                tags.append(_meta("property", "og:image:height", str(image.height)))
                if image.alt:
                    tags.append(_meta("property", "og:image:alt", image.alt))

        twitter = metadata.twitter
        if twitter:
            tags.append(_meta("name", "twitter:card", twitter.card))
            tags.append(_meta("name", "twitter:title", twitter.title))
            tags.append(_meta("name", "twitter:description", twitter.description))
            for image_url in twitter.images:
                tags.append(_meta("name", "twitter:image", self.absolute_url(image_url)))

        return "\n".join(tags)

    def render_json_ld_script(self, post: PostFrontmatter) -> str:
        payload = json.dumps(self.build_json_ld(post), ensure_ascii=False)
        # keep "</script>" inside string values from closing the tag
        payload = payload.replace("</", "<\\/")
        return f'<script type="application/ld+json">{payload}</script>'


def _meta(attr: str, key: str, content: str) -> str:
    return f'<meta {attr}="{key}" content="{html.escape(content)}">'
