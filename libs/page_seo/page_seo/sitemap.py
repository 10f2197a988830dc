"""
Sitemap XML + robots.txt.

Pages statiques, tags de niche puis slugs publiés ; chaque URL porte ses
alternates hreflang (ru, en, kk, x-default). Contenu stable pour un même
jour et une même liste → ETag stable.
"""
import hashlib
from datetime import date, datetime
from typing import Iterable, List, Optional

from . import config
from .bots import RESERVED_SLUGS
from .core.i18n import SUPPORTED_LANGS
from .core.schemas import SitemapPage
from .renderer.html import escape_xml, hreflang_alternates

STATIC_PAGES = (
    ("/",              "weekly",  "1.0"),
    ("/gallery",       "daily",   "0.8"),
    ("/pricing",       "monthly", "0.9"),
    ("/alternatives",  "monthly", "0.8"),
    ("/experts",       "daily",   "0.9"),
    ("/terms",         "yearly",  "0.3"),
    ("/privacy",       "yearly",  "0.3"),
    ("/payment-terms", "yearly",  "0.3"),
)

NICHE_TAGS = (
    "beauty", "fitness", "health", "education", "consulting",
    "coaching", "design", "marketing", "music", "photo", "tech",
    "food", "travel", "fashion", "art", "realty", "services", "events", "business", "other",
)

SITEMAP_LIMIT = 10000


def _lastmod(value: Optional[datetime], today: str) -> str:
    return value.date().isoformat() if value else today


def _url_entry(base_url: str, path: str, lastmod: str, changefreq: str, priority: str,
               image: Optional[str] = None, image_title: Optional[str] = None) -> List[str]:
    loc = base_url + path
    lines = [
        "  <url>",
        f"    <loc>{escape_xml(loc)}</loc>",
        f"    <lastmod>{lastmod}</lastmod>",
        f"    <changefreq>{changefreq}</changefreq>",
        f"    <priority>{priority}</priority>",
    ]
    # "/" : alternates en "/?lang=ru", x-default en "/"
    for hreflang, href in hreflang_alternates(base_url, path, SUPPORTED_LANGS):
        lines.append(
            f'    <xhtml:link rel="alternate" hreflang="{hreflang}" href="{escape_xml(href)}"/>'
        )
    if image:
        lines += [
            "    <image:image>",
            f"      <image:loc>{escape_xml(image)}</image:loc>",
            f"      <image:title>{escape_xml(image_title)}</image:title>",
            "    </image:image>",
        ]
    lines.append("  </url>")
    return lines


def build_sitemap_xml(pages: Iterable[SitemapPage], base_url: str = config.BASE_URL,
                      today: Optional[date] = None) -> str:
    """
    Sitemap complet.

    Args:
        pages: pages publiées (slug, title, avatar_url, updated_at)
        base_url: domaine canonique
        today: date du lastmod par défaut (aujourd'hui si None)
    """
    base_url = base_url.rstrip("/")
    day = (today or date.today()).isoformat()
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"',
        '        xmlns:xhtml="http://www.w3.org/1999/xhtml"',
        '        xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">',
    ]

    for path, changefreq, priority in STATIC_PAGES:
        lines += _url_entry(base_url, path, day, changefreq, priority)

    for tag in NICHE_TAGS:
        lines += _url_entry(base_url, f"/experts/{tag}", day, "daily", "0.7")

    seen = set()
    for page in list(pages)[:SITEMAP_LIMIT]:
        slug = (page.slug or "").strip()
        if not slug or slug.lower() in RESERVED_SLUGS or slug in seen:
            continue
        seen.add(slug)
        avatar = page.avatar_url if (page.avatar_url or "").startswith(("http://", "https://")) else None
        lines += _url_entry(
            base_url, f"/{slug}", _lastmod(page.updated_at, day), "weekly", "0.6",
            image=avatar, image_title=page.title or slug,
        )

    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def generate_etag(content: str) -> str:
    """ETag fort : 16 premiers hex du sha256, entre guillemets."""
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return f'"{digest[:16]}"'


def build_robots_txt(base_url: str = config.BASE_URL) -> str:
    base_url = base_url.rstrip("/")
    disallow = ("/api/", "/admin", "/dashboard", "/auth", "/crm", "/editor")
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in disallow]
    lines += ["", f"Sitemap: {base_url}/sitemap.xml", ""]
    return "\n".join(lines)
