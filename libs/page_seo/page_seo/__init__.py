"""
page_seo v1.0 — SEO/AEO des pages link-in-bio construites en blocs.

Usage (pipeline complet):
    >>> from page_seo import build_seo_bundle
    >>> bundle = build_seo_bundle(blocks, slug="anna", language="ru")
    >>> bundle.meta.robots
    'noindex, nofollow'

Usage (head par requête):
    >>> from page_seo import HeadDocument, HeadTagManager
    >>> head = HeadDocument()
    >>> HeadTagManager(head).apply(bundle)
    >>> html_head = head.render()

Usage (documents statiques pour bots):
    >>> from page_seo import should_return_ssr, build_gallery_html
    >>> if should_return_ssr(headers, "/gallery"):
    ...     html = build_gallery_html("en", "https://lnkmx.my", items)
"""

# ── Blocs + i18n ────────────────────────────────────────────────────────────
from .blocks import BaseBlock, GenericBlock, BLOCK_TYPES, parse_block, parse_blocks
from .core.i18n import (
    SUPPORTED_LANGS, DEFAULT_LANG, LocalizedText,
    get_text, normalize_lang, resolve_language, t,
)
from .core.schemas import (
    PageRecord, GalleryItem, SitemapPage,
    Profile, PageFacts, EntityLinks, PageSection, KeyFact,
    QualityGateResult, PageMeta, SchemaGraph, SeoBundle,
)

# ── Pipeline ────────────────────────────────────────────────────────────────
from .extractor import (
    extract_profile_from_blocks, generate_auto_about, extract_location, extract_page_facts,
)
from .quality_gate import evaluate_quality_gate, robots_directive
from .meta import build_title, build_meta_description, generate_page_meta
from .text import strip_markdown_links, normalize_text, truncate_words
from .schema_org import (
    generate_schemas, to_json_ld_graph, generate_source_context, generate_content_hash,
)
from .entities import extract_entity_links
from .anchors import generate_section_anchors, generate_key_facts
from .builder import SeoBuilder, build_seo_bundle

# ── Sorties ─────────────────────────────────────────────────────────────────
from .head import HeadDocument, HeadTagManager, cleanup_selectors
from .renderer.crawler import render_crawler_content
from .renderer.ssr import (
    escape_html, build_hreflang_links, og_locale, json_ld_dumps,
    build_landing_html, build_gallery_html, build_page_html, build_not_found_html,
)
from .bots import is_search_bot, should_return_ssr
from .sitemap import build_sitemap_xml, build_robots_txt, generate_etag

__version__ = "1.0.0"

__all__ = [
    # blocs + i18n
    "BaseBlock", "GenericBlock", "BLOCK_TYPES", "parse_block", "parse_blocks",
    "SUPPORTED_LANGS", "DEFAULT_LANG", "LocalizedText",
    "get_text", "normalize_lang", "resolve_language", "t",
    "PageRecord", "GalleryItem", "SitemapPage",
    "Profile", "PageFacts", "EntityLinks", "PageSection", "KeyFact",
    "QualityGateResult", "PageMeta", "SchemaGraph", "SeoBundle",
    # pipeline
    "extract_profile_from_blocks", "generate_auto_about", "extract_location", "extract_page_facts",
    "evaluate_quality_gate", "robots_directive",
    "build_title", "build_meta_description", "generate_page_meta",
    "strip_markdown_links", "normalize_text", "truncate_words",
    "generate_schemas", "to_json_ld_graph", "generate_source_context", "generate_content_hash",
    "extract_entity_links", "generate_section_anchors", "generate_key_facts",
    "SeoBuilder", "build_seo_bundle",
    # sorties
    "HeadDocument", "HeadTagManager", "cleanup_selectors",
    "render_crawler_content",
    "escape_html", "build_hreflang_links", "og_locale", "json_ld_dumps",
    "build_landing_html", "build_gallery_html", "build_page_html", "build_not_found_html",
    "is_search_bot", "should_return_ssr",
    "build_sitemap_xml", "build_robots_txt", "generate_etag",
]
