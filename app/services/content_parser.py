import datetime
import logging
import re
from typing import List, Tuple

import frontmatter

from app.schemas.blog import PostFrontmatter

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def split_post(text: str) -> Tuple[dict, str]:
    """Split a content file into its frontmatter mapping and markdown body."""
    parsed = frontmatter.loads(text)
    return dict(parsed.metadata or {}), parsed.content


def parse_frontmatter(post_id: str, metadata: dict) -> PostFrontmatter:
    """Build typed frontmatter for a post, normalising what YAML hands back."""
    date = convert_date_to_string(metadata.get("date"))
    if date and not ISO_DATE_PATTERN.match(date):
        logger.warning(
            f"Post {post_id} has a non YYYY-MM-DD date {date!r}; ordering may be off"
        )

    return PostFrontmatter(
        id=post_id,
        title=derive_title(metadata, post_id),
        date=date,
        description=str(metadata.get("description") or ""),
        tags=normalize_tags(metadata.get("tags")),
    )


def derive_title(metadata: dict, post_id: str) -> str:
    if metadata and metadata.get("title"):
        return str(metadata["title"])
    clean_id = post_id.replace("-", " ").replace("_", " ")
    return clean_id.title()


def normalize_tags(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item]
    return [str(value)]


def convert_date_to_string(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)
