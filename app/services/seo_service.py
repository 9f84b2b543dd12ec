import datetime
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from app.schemas.blog import PostSummary
from app.schemas.seo import RobotsRule, SitemapEntry
from app.services.content_parser import ISO_DATE_PATTERN

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def build_sitemap_entries(
    site_url: str,
    section_path: str,
    posts: Iterable[PostSummary],
    now: Optional[datetime.datetime] = None,
) -> List[SitemapEntry]:
    """
    Home, the notes listing, then one entry per post dated by its frontmatter.

    Posts whose date is not YYYY-MM-DD get no lastModified.
    """
    base_url = site_url.rstrip("/")
    section_url = f"{base_url}{section_path.rstrip('/')}"
    generated_at = (now or datetime.datetime.now(datetime.timezone.utc)).isoformat()

    entries = [
        SitemapEntry(
            url=base_url,
            lastModified=generated_at,
            changeFrequency="daily",
            priority=1.0,
        ),
        SitemapEntry(
            url=section_url,
            lastModified=generated_at,
            changeFrequency="daily",
            priority=0.9,
        ),
    ]
    for post in posts:
        entries.append(
            SitemapEntry(
                url=f"{section_url}/{post.id}",
                lastModified=post.date if ISO_DATE_PATTERN.match(post.date) else "",
                changeFrequency="weekly",
                priority=0.8,
            )
        )
    return entries


def render_sitemap(entries: Iterable[SitemapEntry]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">',
    ]
    for entry in entries:
        lines.append("<url>")
        lines.append(f"<loc>{escape(entry.url)}</loc>")
        if entry.lastModified:
            lines.append(f"<lastmod>{escape(entry.lastModified)}</lastmod>")
        lines.append(f"<changefreq>{entry.changeFrequency}</changefreq>")
        lines.append(f"<priority>{entry.priority}</priority>")
        lines.append("</url>")
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def build_robots_rules(ai_crawlers: Iterable[str]) -> List[RobotsRule]:
    rules = [RobotsRule(userAgents=["*"], allow="/")]
    crawlers = [name for name in ai_crawlers if name]
    if crawlers:
        # Named AI crawlers are allowed explicitly, not just through the wildcard
        rules.append(RobotsRule(userAgents=crawlers, allow="/"))
    return rules


def render_robots(rules: Iterable[RobotsRule], site_url: str) -> str:
    groups = []
    for rule in rules:
        lines = [f"User-Agent: {agent}" for agent in rule.userAgents]
        lines.append(f"Allow: {rule.allow}")
        groups.append("\n".join(lines))
    groups.append(f"Sitemap: {site_url.rstrip('/')}/sitemap.xml")
    return "\n\n".join(groups) + "\n"
