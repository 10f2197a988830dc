"""Renderers — helpers HTML, projection noscript, documents SSR statiques."""
from .html import (
    escape_html,
    escape_xml,
    json_ld_dumps,
    og_locale,
    safe_url,
    hreflang_alternates,
    build_hreflang_links,
)

__all__ = [
    "escape_html",
    "escape_xml",
    "json_ld_dumps",
    "og_locale",
    "safe_url",
    "hreflang_alternates",
    "build_hreflang_links",
]
