"""
Check that a published post exposes working OpenGraph / Twitter image tags.

Exit codes:
    0  metadata and image look good
    1  bad usage, or the page itself could not be fetched
    2  og:image or twitter:image tag missing
    3  the image URL could not be fetched
    4  the image URL did not answer 2xx with an image/* content type
"""

import argparse
import logging
import re
import sys
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.davideagostini.com/android"
DEFAULT_TIMEOUT = 30.0

EXIT_OK = 0
EXIT_PAGE_FETCH_FAILED = 1
EXIT_MISSING_TAGS = 2
EXIT_IMAGE_FETCH_FAILED = 3
EXIT_INVALID_IMAGE = 4


def normalize_url(value: str, base_url: str = DEFAULT_BASE_URL) -> str:
    if value.startswith(("http://", "https://")):
        return value
    return f"{base_url.rstrip('/')}/{value}"


def extract_meta(html: str, key: str, attr: str = "property") -> Optional[str]:
    pattern = re.compile(
        rf"<meta[^>]+{attr}=[\"']{re.escape(key)}[\"'][^>]*content=[\"']([^\"']+)[\"'][^>]*>",
        re.IGNORECASE,
    )
    match = pattern.search(html)
    return match.group(1) if match else None


def check_og(url: str, session: requests.Session, timeout: float = DEFAULT_TIMEOUT) -> int:
    try:
        res = session.get(url, allow_redirects=True, timeout=timeout)
    except requests.RequestException as e:
        print(f"Failed to fetch page: {e}", file=sys.stderr)
        return EXIT_PAGE_FETCH_FAILED

    if not res.ok:
        print(f"Failed to fetch page: {res.status_code} {res.reason}", file=sys.stderr)
        return EXIT_PAGE_FETCH_FAILED

    page = res.text
    og_image = extract_meta(page, "og:image", "property")
    og_title = extract_meta(page, "og:title", "property")
    twitter_image = extract_meta(page, "twitter:image", "name")

    print("URL:", url)
    print("og:title:", og_title or "MISSING")
    print("og:image:", og_image or "MISSING")
    print("twitter:image:", twitter_image or "MISSING")

    if not og_image or not twitter_image:
        print("\nMissing required OG/Twitter image tags", file=sys.stderr)
        return EXIT_MISSING_TAGS

    try:
        image_res = session.get(og_image, allow_redirects=True, timeout=timeout)
    except requests.RequestException as e:
        print(f"\nCould not fetch og:image: {e}", file=sys.stderr)
        return EXIT_IMAGE_FETCH_FAILED

    content_type = image_res.headers.get("content-type") or "unknown"
    print("og:image status:", image_res.status_code)
    print("og:image content-type:", content_type)

    if not image_res.ok or not content_type.startswith("image/"):
        print("\nog:image URL is not valid", file=sys.stderr)
        return EXIT_INVALID_IMAGE

    print("\nOG metadata looks good")
    return EXIT_OK


def main(argv=None, session: Optional[requests.Session] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="check-og", description="Verify OG image metadata of a post."
    )
    parser.add_argument("target", nargs="?", help="post slug or full page URL")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)

    if not args.target:
        print("Usage: check-og <post-slug-or-url>", file=sys.stderr)
        return EXIT_PAGE_FETCH_FAILED

    url = normalize_url(args.target, args.base_url)
    logger.debug(f"Checking OG metadata for {url}")
    if session is not None:
        return check_og(url, session, timeout=args.timeout)
    with requests.Session() as http:
        return check_og(url, http, timeout=args.timeout)
