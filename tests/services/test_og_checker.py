import requests

from app.services import og_checker
from app.services.og_checker import (
    EXIT_IMAGE_FETCH_FAILED,
    EXIT_INVALID_IMAGE,
    EXIT_MISSING_TAGS,
    EXIT_OK,
    EXIT_PAGE_FETCH_FAILED,
    check_og,
    extract_meta,
    main,
    normalize_url,
)
from tests.conftest import FakeResponse, FakeSession

PAGE_URL = "https://www.davideagostini.com/android/compose-leak"
IMAGE_URL = "https://www.davideagostini.com/android/compose-leak/opengraph-image?v=v2"
PAGE = f"""
<html><head>
<meta property="og:title" content="Compose Performance">
<meta property="og:image" content="{IMAGE_URL}">
<meta name="twitter:image" content="{IMAGE_URL}">
</head></html>
"""


def test_normalize_url():
    assert normalize_url("compose-leak") == PAGE_URL
    assert normalize_url("https://example.com/x") == "https://example.com/x"
    assert normalize_url("slug", "http://localhost:8000/android/") == (
        "http://localhost:8000/android/slug"
    )


def test_extract_meta():
    assert extract_meta(PAGE, "og:title") == "Compose Performance"
    assert extract_meta(PAGE, "twitter:image", "name") == IMAGE_URL
    assert extract_meta(PAGE, "twitter:image", "property") is None
    assert extract_meta("<META PROPERTY='og:image' CONTENT='x.png'>", "og:image") == "x.png"


def test_check_og_success(capsys):
    session = FakeSession(
        {
            PAGE_URL: FakeResponse(text=PAGE),
            IMAGE_URL: FakeResponse(headers={"content-type": "image/png"}),
        }
    )

    assert check_og(PAGE_URL, session) == EXIT_OK
    out = capsys.readouterr().out
    assert "og:title: Compose Performance" in out
    assert "OG metadata looks good" in out
    assert session.calls == [PAGE_URL, IMAGE_URL]


def test_check_og_page_not_ok():
    session = FakeSession({PAGE_URL: FakeResponse(status_code=404, reason="Not Found")})

    assert check_og(PAGE_URL, session) == EXIT_PAGE_FETCH_FAILED


def test_check_og_page_network_error():
    session = FakeSession({PAGE_URL: requests.ConnectionError("down")})

    assert check_og(PAGE_URL, session) == EXIT_PAGE_FETCH_FAILED


def test_check_og_missing_tags(capsys):
    page = '<meta property="og:title" content="Only a title">'
    session = FakeSession({PAGE_URL: FakeResponse(text=page)})

    assert check_og(PAGE_URL, session) == EXIT_MISSING_TAGS
    assert "og:image: MISSING" in capsys.readouterr().out


def test_check_og_image_fetch_failure():
    session = FakeSession(
        {PAGE_URL: FakeResponse(text=PAGE), IMAGE_URL: requests.Timeout("slow")}
    )

    assert check_og(PAGE_URL, session) == EXIT_IMAGE_FETCH_FAILED


def test_check_og_wrong_content_type():
    session = FakeSession(
        {
            PAGE_URL: FakeResponse(text=PAGE),
            IMAGE_URL: FakeResponse(headers={"content-type": "text/html"}),
        }
    )

    assert check_og(PAGE_URL, session) == EXIT_INVALID_IMAGE


def test_check_og_image_error_status():
    session = FakeSession(
        {
            PAGE_URL: FakeResponse(text=PAGE),
            IMAGE_URL: FakeResponse(status_code=500, headers={"content-type": "image/png"}),
        }
    )

    assert check_og(PAGE_URL, session) == EXIT_INVALID_IMAGE


def test_main_without_target_prints_usage(capsys):
    assert main([]) == EXIT_PAGE_FETCH_FAILED
    assert "Usage" in capsys.readouterr().err


def test_main_normalizes_slug_and_uses_session(monkeypatch):
    seen = {}

    def fake_check(url, session, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return EXIT_OK

    monkeypatch.setattr(og_checker, "check_og", fake_check)

    assert main(["compose-leak", "--timeout", "5"], session=FakeSession({})) == EXIT_OK
    assert seen == {"url": PAGE_URL, "timeout": 5.0}
