"""Core module pour page_seo (i18n ; les schémas sont dans core.schemas)."""
from .i18n import (
    SUPPORTED_LANGS,
    DEFAULT_LANG,
    LocalizedText,
    get_text,
    normalize_lang,
    resolve_language,
    t,
    lookup,
    catalog,
    reload_cache,
)

__all__ = [
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
    "LocalizedText",
    "get_text",
    "normalize_lang",
    "resolve_language",
    "t",
    "lookup",
    "catalog",
    "reload_cache",
]
