import io
import logging
from typing import List, Optional

from PIL import Image, ImageDraw

from app.schemas.blog import OgImageRequest
from app.services.font_loader import FontLoader
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 1200, 630
CONTENT_TYPE = "image/png"

# --- Layout ---
PADDING_X, PADDING_Y = 64, 56
CORNER_RADIUS = 28
BORDER_WIDTH = 2
TITLE_MAX_WIDTH_RATIO = 0.86
TITLE_LINE_HEIGHT = 1.05
FOOTER_GAP = 14
PILL_PADDING_X, PILL_PADDING_Y = 18, 12
PILL_RADIUS = 16
PILL_MAX_WIDTH = 760
ELLIPSIS = "…"

# --- Colors ---
BACKGROUND = (3, 7, 18, 255)
BORDER = (17, 24, 39, 255)
TEXT_PRIMARY = (248, 250, 252, 255)
TEXT_MUTED = (156, 163, 175, 255)
PILL_TEXT = (229, 231, 235, 255)
PILL_FILL = (255, 255, 255, 20)

# name -> (size, weight)
FONT_SPECS = {
    "title": (72, 700),
    "date": (40, 600),
    "pill": (38, 500),
    "site": (40, 600),
}


class OgImageService:
    def __init__(
        self,
        posts_service: PostsService,
        font_loader: FontLoader,
        fallback_title: str,
        site_identifier: str,
    ):
        self.posts_service = posts_service
        self.font_loader = font_loader
        self.fallback_title = fallback_title
        self.site_identifier = site_identifier

    def resolve_request(self, post_id: Optional[str]) -> OgImageRequest:
        post = self.posts_service.get_post_frontmatter(post_id) if post_id else None
        if not post:
            if post_id:
                logger.info(f"No post {post_id}, rendering fallback OG image")
            return OgImageRequest(title=self.fallback_title, date="")
        return OgImageRequest(title=post.title, date=post.date)

    def render(self, post_id: Optional[str] = None) -> bytes:
        """Render the OG image for a post (or the section) as PNG bytes."""
        image = self.compose(self.resolve_request(post_id))
        buffer = io.BytesIO()
        image.save(buffer, "PNG")
        return buffer.getvalue()

    def compose(self, request: OgImageRequest) -> Image.Image:
        fonts = self.font_loader.load_fonts(FONT_SPECS)

        image = Image.new("RGBA", (WIDTH, HEIGHT), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        draw.rounded_rectangle(
            [0, 0, WIDTH - 1, HEIGHT - 1],
            radius=CORNER_RADIUS,
            fill=BACKGROUND,
            outline=BORDER,
            width=BORDER_WIDTH,
        )

        left, top = PADDING_X, PADDING_Y
        right, bottom = WIDTH - PADDING_X, HEIGHT - PADDING_Y

        pill_font = fonts["pill"]
        pill_top = bottom - pill_height(pill_font)
        date_top = pill_top - FOOTER_GAP - text_height(fonts["date"])
        footer_top = date_top if request.date else pill_top

        # Title, pinned top-left, clamped to the space above the footer
        title_font = fonts["title"]
        max_title_width = int((right - left) * TITLE_MAX_WIDTH_RATIO)
        line_height = round(FONT_SPECS["title"][0] * TITLE_LINE_HEIGHT)
        max_lines = title_line_budget(
            title_font, line_height, footer_top - FOOTER_GAP - top
        )
        y = top
        for line in fit_lines(
            draw, request.title, title_font, max_title_width, max_lines
        ):
            draw.text((left, y), line, font=title_font, fill=TEXT_PRIMARY)
            y += line_height

        # Footer, bottom-aligned: site identifier on the right
        site_font = fonts["site"]
        site_width = draw.textlength(self.site_identifier, font=site_font)
        draw.text(
            (right - site_width, bottom - text_height(site_font)),
            self.site_identifier,
            font=site_font,
            fill=TEXT_MUTED,
        )

        # Left column: date above a pill repeating the title
        pill_text = ellipsize(
            draw, request.title, pill_font, PILL_MAX_WIDTH - 2 * PILL_PADDING_X
        )
        pill_width = int(draw.textlength(pill_text, font=pill_font)) + 2 * PILL_PADDING_X

        overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
        ImageDraw.Draw(overlay).rounded_rectangle(
            [left, pill_top, left + pill_width, bottom],
            radius=PILL_RADIUS,
            fill=PILL_FILL,
            outline=PILL_FILL,
        )
        image = Image.alpha_composite(image, overlay)
        draw = ImageDraw.Draw(image)
        draw.text(
            (left + PILL_PADDING_X, pill_top + PILL_PADDING_Y),
            pill_text,
            font=pill_font,
            fill=PILL_TEXT,
        )

        if request.date:
            draw.text((left, date_top), request.date, font=fonts["date"], fill=TEXT_MUTED)

        return image


def text_height(font) -> int:
    ascent, descent = font.getmetrics()
    return ascent + descent


def pill_height(font) -> int:
    return text_height(font) + 2 * PILL_PADDING_Y


def title_line_budget(font, line_height: int, available: int) -> int:
    """How many title lines fit in ``available`` pixels; never less than one."""
    spare = available - text_height(font)
    if spare < 0:
        return 1
    return spare // line_height + 1


def fit_lines(
    draw: ImageDraw.ImageDraw, text: str, font, max_width: int, max_lines: int
) -> List[str]:
    """Wrap ``text`` into at most ``max_lines`` lines, ellipsizing the last one."""
    lines = wrap_text(draw, text, font, max_width)
    if len(lines) <= max_lines:
        return lines
    kept = lines[: max_lines - 1]
    kept.append(ellipsize(draw, " ".join(lines[max_lines - 1 :]), font, max_width))
    return kept


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    """Wrap on spaces, keep explicit newlines, and break words wider than a line."""
    lines: List[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if draw.textlength(candidate, font=font) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            for char in word:
                if current and draw.textlength(current + char, font=font) > max_width:
                    lines.append(current)
                    current = ""
                current += char
        lines.append(current)
    return lines


def ellipsize(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
    """Single-line text clipped with an ellipsis to fit ``max_width``."""
    text = " ".join(text.split())
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + ELLIPSIS, font=font) > max_width:
        text = text[:-1]
    return text.rstrip() + ELLIPSIS
