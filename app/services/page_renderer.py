import html

from app.schemas.blog import RenderedPost
from app.services.metadata_service import MetadataService


def render_post_page(post: RenderedPost, metadata_service: MetadataService) -> str:
    """
    Bare HTML document for a post: metadata head, JSON-LD and the article body.

    Styling and navigation live in the front-end; this page only carries what
    crawlers and link previews read.
    """
    head = metadata_service.render_head(metadata_service.build_post_metadata(post))
    json_ld = metadata_service.render_json_ld_script(post)
    title = html.escape(post.title)
    date = html.escape(post.date)

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"{head}\n"
        "</head>\n"
        "<body>\n"
        f"{json_ld}\n"
        "<main>\n"
        f"<h1>{title}</h1>\n"
        f'<time datetime="{date}">{date}</time>\n'
        f'<article class="prose">{post.contentHtml}</article>\n'
        "</main>\n"
        "</body>\n"
        "</html>\n"
    )
