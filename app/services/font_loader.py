import io
import logging
import re
from typing import Dict, Optional, Tuple

import requests
from PIL import ImageFont

logger = logging.getLogger(__name__)

GOOGLE_FONTS_API = (
    "https://fonts.googleapis.com/css2?family={font_name}:wght@{weight}&display=swap"
)
FONT_URL_PATTERN = re.compile(r"url\((https://fonts\.gstatic\.com/[^)]+)\)")


class FontFetchError(Exception):
    pass


class FontLoader:
    """
    Load OG image fonts.

    The webfont host is tried first; any failure falls back to a local font so
    an unreachable font host never breaks image rendering.
    """

    def __init__(
        self,
        family: str,
        session: Optional[requests.Session] = None,
        remote: bool = True,
        fallback_path: str = "",
        timeout: float = 10.0,
    ):
        self.family = family
        # A session created here is owned, and closed, by the loader
        self._owns_session = session is None
        self.session = requests.Session() if session is None else session
        self.remote = remote
        self.fallback_path = fallback_path
        self.timeout = timeout

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def load_fonts(self, specs: Dict[str, Tuple[int, int]]) -> dict:
        """
        Build a font per name from ``{name: (size, weight)}``.

        Each distinct weight is downloaded at most once per call.
        """
        downloaded: Dict[int, Optional[bytes]] = {}
        fonts = {}
        for name, (size, weight) in specs.items():
            if weight not in downloaded:
                downloaded[weight] = self.fetch_font_or_none(weight)
            fonts[name] = self.build_font(downloaded[weight], size)
        return fonts

    def fetch_font_or_none(self, weight: int) -> Optional[bytes]:
        if not self.remote:
            return None
        try:
            return self.fetch_font(weight)
        except (FontFetchError, requests.RequestException) as e:
            logger.warning(f"Falling back to local font for {self.family} {weight}: {e}")
            return None

    def fetch_font(self, weight: int) -> bytes:
        """Fetch the font-face CSS for one weight, then the font file it points to."""
        css_url = GOOGLE_FONTS_API.format(
            font_name=self.family.strip().replace(" ", "+"), weight=weight
        )
        response = self.session.get(css_url, timeout=self.timeout)
        response.raise_for_status()

        match = FONT_URL_PATTERN.search(response.text)
        if not match:
            raise FontFetchError(f"No font file URL in CSS from {css_url}")

        font_response = self.session.get(match.group(1), timeout=self.timeout)
        font_response.raise_for_status()
        logger.debug(f"Fetched {self.family} {weight} from {match.group(1)}")
        return font_response.content

    def build_font(self, data: Optional[bytes], size: int):
        if data:
            try:
                return ImageFont.truetype(io.BytesIO(data), size)
            except OSError as e:
                logger.warning(f"Downloaded {self.family} font is unreadable: {e}")
        return self.load_fallback(size)

    def load_fallback(self, size: int):
        if self.fallback_path:
            try:
                return ImageFont.truetype(self.fallback_path, size)
            except OSError as e:
                logger.error(f"Could not load fallback font {self.fallback_path}: {e}")
        return ImageFont.load_default(size=size)
