"""
Meta tags — title, description, canonical, robots, og:image.

title       : nom (ou @slug) + " | marque", ≤ 60, coupé sur un mot
description : bio ou auto-about, markdown retiré, ≤ 160 avec "..."
canonical   : BASE_URL/slug, sans query ni langue (langues → hreflang)
robots      : index, follow ⇔ quality gate passé
"""
from typing import Any, Iterable, Optional

from . import config
from .core.i18n import DEFAULT_LANG, normalize_lang, t
from .core.schemas import PageMeta, Profile, QualityGateResult
from .extractor import generate_auto_about
from .quality_gate import robots_directive
from .renderer.html import og_locale, safe_url
from .text import normalize_text, strip_markdown_links, truncate, truncate_words

_MIN_TITLE_BASE = 12


def build_meta_description(text: str) -> str:
    """≤ 160 caractères ; au-delà : préfixe nettoyé + "..."."""
    return truncate(text, config.DESCRIPTION_MAX_LENGTH)


def page_url(slug: str) -> str:
    return f"{config.BASE_URL}/{slug}"


def build_title(name: str, slug: str) -> str:
    base = normalize_text(name) or (f"@{slug}" if slug else config.BRAND_NAME)
    suffix = f" | {config.BRAND_NAME}"
    limit = config.TITLE_MAX_LENGTH
    if len(base) + len(suffix) <= limit:
        return base + suffix
    available = limit - len(suffix)
    if available < _MIN_TITLE_BASE:
        return truncate_words(base + suffix, limit)
    return truncate_words(base, available) + suffix


def generate_page_meta(profile: Profile, blocks: Iterable[Any], slug: str,
                       quality_gate: QualityGateResult, language: str = DEFAULT_LANG,
                       niche: Optional[str] = None) -> PageMeta:
    lang = normalize_lang(language)
    source = profile.bio or generate_auto_about(profile, blocks, lang, niche=niche)
    description = build_meta_description(source)
    if len(description) < config.DESCRIPTION_MIN_LENGTH:
        suffix = t("meta.description_suffix", lang, {"site": config.SITE_HOST})
        description = build_meta_description(description + suffix)

    return PageMeta(
        title=build_title(profile.name, slug),
        description=description,
        canonical=page_url(slug),
        robots=robots_directive(quality_gate),
        og_image=safe_url(profile.avatar, ("http", "https")) or config.DEFAULT_OG_IMAGE,
        og_locale=og_locale(lang),
        language=lang,
    )


__all__ = [
    "build_meta_description", "build_title", "generate_page_meta", "page_url",
    "strip_markdown_links", "normalize_text", "truncate",
]
