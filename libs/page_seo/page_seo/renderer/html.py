"""
Helpers HTML partagés — échappement, JSON-LD, hreflang, URLs sûres.

Tout texte interpolé dans un document passe par escape_html ;
les titres et descriptions viennent du contenu utilisateur.
"""
import json
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from ..core.i18n import SUPPORTED_LANGS

SAFE_SCHEMES = ("http", "https", "mailto", "tel")

_OG_LOCALES = {"ru": "ru_RU", "kk": "kk_KZ", "en": "en_US"}


def escape_html(text: Any) -> str:
    """& < > " ' → entités. None → ""."""
    if text is None:
        return ""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def escape_xml(text: Any) -> str:
    if text is None:
        return ""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def json_ld_dumps(data: Any) -> str:
    """
    JSON standard, sûr dans un <script> : < > & encodés en \\u003c etc.
    json.loads() du résultat redonne exactement `data`.
    """
    raw = json.dumps(data, ensure_ascii=False)
    return raw.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def og_locale(lang: str) -> str:
    return _OG_LOCALES.get(lang, "en_US")


def safe_url(url: Optional[str], schemes: Tuple[str, ...] = SAFE_SCHEMES) -> Optional[str]:
    """URL absolue avec un schéma autorisé, sinon None (javascript:, data:, relatif…)."""
    if not url or not isinstance(url, str):
        return None
    candidate = url.strip()
    scheme = urlsplit(candidate).scheme.lower()
    if scheme not in schemes:
        return None
    if scheme in ("http", "https") and not urlsplit(candidate).netloc:
        return None
    return candidate


# ── Hreflang ────────────────────────────────────────────────────────────────

def hreflang_alternates(base_url: str, path: str,
                        languages: Iterable[str] = SUPPORTED_LANGS) -> List[Tuple[str, str]]:
    """[(hreflang, href)] : une entrée par langue supportée + x-default, sans doublon."""
    joiner = "&" if "?" in path else "?"
    seen: List[str] = []
    for lang in languages:
        if lang in SUPPORTED_LANGS and lang not in seen:
            seen.append(lang)
    alternates = [(lang, f"{base_url}{path}{joiner}lang={lang}") for lang in seen]
    alternates.append(("x-default", f"{base_url}{path}"))
    return alternates


def build_hreflang_links(base_url: str, path: str,
                         languages: Iterable[str] = SUPPORTED_LANGS) -> str:
    """Balises <link rel="alternate"> — format unique pour landing, galerie et profils."""
    return "\n  ".join(
        f'<link rel="alternate" hreflang="{lang}" href="{escape_html(href)}">'
        for lang, href in hreflang_alternates(base_url, path, languages)
    )
