import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

POST_EXTENSION = ".md"
DRAFT_PREFIX = "_"


class FilesystemPostsRepo:
    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def list_post_ids(self) -> List[str]:
        """Ids of every listable post, in directory order."""
        if not self.content_dir.is_dir():
            logger.debug(f"Content directory {self.content_dir} does not exist")
            return []

        return [
            path.name[: -len(POST_EXTENSION)]
            for path in sorted(self.content_dir.iterdir())
            if path.is_file() and is_listable(path.name)
        ]

    def get_post_path(self, post_id: str) -> Optional[Path]:
        if not is_valid_post_id(post_id):
            return None
        path = self.content_dir / f"{post_id}{POST_EXTENSION}"
        if not path.is_file():
            return None
        return path

    def read_post(self, post_id: str) -> Optional[str]:
        path = self.get_post_path(post_id)
        if path is None:
            return None
        return path.read_text(encoding="utf-8")


def is_listable(filename: str) -> bool:
    if filename == POST_EXTENSION or not filename.endswith(POST_EXTENSION):
        return False
    return not filename.startswith(DRAFT_PREFIX)


def is_valid_post_id(post_id: str) -> bool:
    if not post_id or post_id.startswith(DRAFT_PREFIX):
        return False
    if "/" in post_id or "\\" in post_id or post_id in (".", ".."):
        return False
    return "\x00" not in post_id
