from pathlib import Path

from app.settings import Settings, choose_env_file


def test_content_path_comes_from_setting():
    s = Settings(CONTENT_DIR="/srv/notes")
    assert s.content_path == Path("/srv/notes")


def test_section_url_joins_site_and_path():
    s = Settings(SITE_URL="https://example.com/", SECTION_PATH="/android")
    assert s.site_url == "https://example.com"
    assert s.section_url == "https://example.com/android"


def test_defaults_match_the_site():
    s = Settings()
    assert s.SECTION_TITLE == "Android Engineering Notes"
    assert s.OG_IMAGE_VERSION == "v2"
    assert "GPTBot" in s.AI_CRAWLERS


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
