import textwrap

import pytest
import requests
from PIL import ImageFont


def write_post(directory, filename: str, raw: str):
    """Write a dedented content file into ``directory`` and return its path."""
    path = directory / filename
    path.write_text(textwrap.dedent(raw).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    directory = tmp_path / "content" / "android"
    directory.mkdir(parents=True)
    return directory


EXAMPLE_POST = """
---
title: "Test Post"
date: "2026-02-12"
description: "A short example"
tags: ["A", "B"]
---
Hello **world**
"""


class FakeResponse:
    """Minimal requests.Response stand-in."""

    def __init__(self, status_code=200, text="", content=b"", headers=None, reason="OK"):
        self.status_code = status_code
        self.text = text
        self.content = content
        self.headers = headers or {}
        self.reason = reason

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}")


class FakeSession:
    """
    Minimal requests.Session stand-in.
    Maps URLs to a FakeResponse, or to an exception instance to raise.
    """

    def __init__(self, responses: dict):
        self.responses = responses
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        result = self.responses.get(url)
        if result is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(result, Exception):
            raise result
        return result


class FakeFontLoader:
    """Font loader stand-in that never touches the network."""

    def __init__(self):
        self.calls = []

    def load_fonts(self, specs):
        self.calls.append(dict(specs))
        return {
            name: ImageFont.load_default(size=size) for name, (size, _w) in specs.items()
        }


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, frontmatter=None):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._frontmatter = frontmatter

    def list_posts(self):
        return self._list_posts_return

    def get_post(self, slug: str):
        return self._get_post_return

    def get_post_frontmatter(self, slug: str):
        return self._frontmatter
