import json

import pytest

from app.schemas.blog import PostFrontmatter, RenderedPost
from app.services.metadata_service import NOT_FOUND_TITLE, MetadataService
from app.services.og_checker import extract_meta
from app.services.page_renderer import render_post_page


@pytest.fixture
def metadata_service():
    return MetadataService(
        site_url="https://davideagostini.com",
        section_path="/android",
        section_title="Android Engineering Notes",
        author_name="Davide Agostini",
        og_image_version="v2",
    )


@pytest.fixture
def post():
    return PostFrontmatter(
        id="compose-leak",
        title="Compose Performance: It's Probably a Leak",
        date="2026-02-12",
        description="Why 'Compose is slow' is often a lifecycle mismatch.",
        tags=["Compose", "Performance"],
    )


def test_build_post_metadata(metadata_service, post):
    metadata = metadata_service.build_post_metadata(post)

    assert metadata.title == f"{post.title} | Android Engineering Notes"
    assert metadata.description == post.description
    assert metadata.openGraph.type == "article"
    assert metadata.openGraph.url == "/android/compose-leak"
    image = metadata.openGraph.images[0]
    assert image.url == "/android/compose-leak/opengraph-image?v=v2"
    assert (image.width, image.height) == (1200, 630)
    assert image.alt == f"{post.title} - Open Graph image"
    assert metadata.twitter.card == "summary_large_image"
    assert metadata.twitter.images == [image.url]


def test_build_post_metadata_missing_post(metadata_service):
    metadata = metadata_service.build_post_metadata(None)

    assert metadata.title == NOT_FOUND_TITLE
    assert metadata.openGraph is None
    assert metadata.twitter is None


def test_build_json_ld(metadata_service, post):
    data = metadata_service.build_json_ld(post)

    assert data["@type"] == "TechArticle"
    assert data["headline"] == post.title
    assert data["author"] == {
        "@type": "Person",
        "name": "Davide Agostini",
        "url": "https://davideagostini.com",
    }
    assert data["datePublished"] == data["dateModified"] == "2026-02-12"
    assert data["keywords"] == "Compose, Performance"


def test_render_head_contains_absolute_og_tags(metadata_service, post):
    head = metadata_service.render_head(metadata_service.build_post_metadata(post))

    image_url = "https://davideagostini.com/android/compose-leak/opengraph-image?v=v2"
    assert extract_meta(head, "og:image", "property") == image_url
    assert extract_meta(head, "twitter:image", "name") == image_url
    assert "<title>Compose Performance: It&#x27;s Probably a Leak | " in head


def test_render_json_ld_script_cannot_close_the_tag(metadata_service, post):
    sneaky = post.model_copy(update={"title": "</script><b>x</b>"})

    script = metadata_service.render_json_ld_script(sneaky)

    assert script.count("</script>") == 1
    payload = script[len('<script type="application/ld+json">') : -len("</script>")]
    assert json.loads(payload)["headline"] == "</script><b>x</b>"


def test_render_post_page(metadata_service, post):
    rendered = RenderedPost(
        **post.model_dump(), contentHtml="<p>Hello <strong>world</strong></p>\n"
    )

    page = render_post_page(rendered, metadata_service)

    assert page.startswith("<!DOCTYPE html>")
    assert '<article class="prose"><p>Hello <strong>world</strong></p>' in page
    assert 'application/ld+json' in page
    assert extract_meta(page, "og:title", "property") == (
        "Compose Performance: It&#x27;s Probably a Leak"
    )
