"""
i18n — textes multilingues et catalogues de traduction.

LocalizedText : str ou dict {lang: str}.
Chaîne de repli : langue demandée → ru → en → première valeur non vide → "".
Catalogues i18n/{lang}.json : clés pointées "landing.title", "sections.faq"…
Placeholders {site}, {count}, etc. → résolus via context dict
"""
import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

SUPPORTED_LANGS = ("ru", "en", "kk")
DEFAULT_LANG = "ru"
_FALLBACK_CHAIN = ("ru", "en")

LocalizedText = Union[str, Dict[str, str]]

_I18N_CACHE: dict = {}
_I18N_DIR = Path(__file__).parent.parent / "i18n"
_MISSING = object()


def normalize_lang(lang: Optional[str]) -> str:
    """Code langue supporté, sinon ru."""
    if isinstance(lang, str):
        code = lang.strip().lower()[:2]
        if code in SUPPORTED_LANGS:
            return code
    return DEFAULT_LANG


def get_text(value: Any, lang: str = DEFAULT_LANG) -> str:
    """
    Résout un LocalizedText pour une langue. Ne lève jamais.
    "texte" → "texte"
    {"en": "Hi", "ru": "Привет"}, "kk" → "Привет"
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in (lang, *_FALLBACK_CHAIN):
            candidate = value.get(key)
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        for candidate in value.values():
            if isinstance(candidate, str) and candidate.strip():
                return candidate
    return ""


def resolve_language(lang_param: Optional[str], accept_language: Optional[str]) -> str:
    """
    ?lang= prioritaire, puis première langue supportée d'Accept-Language
    (dans l'ordre de l'en-tête), sinon ru.
    "ru-RU,ru;q=0.9,en;q=0.8" → ru ; "kk-KZ,en" → kk
    """
    if isinstance(lang_param, str) and lang_param.strip().lower() in SUPPORTED_LANGS:
        return lang_param.strip().lower()
    for part in (accept_language or "").split(","):
        code = part.split(";", 1)[0].strip().lower()[:2]
        if code in SUPPORTED_LANGS:
            return code
    return DEFAULT_LANG


# ── Catalogues ──────────────────────────────────────────────────────────────

def _load_lang(lang: str) -> dict:
    """Charge le fichier i18n/{lang}.json (lazy, mis en cache)."""
    if lang not in _I18N_CACHE:
        path = _I18N_DIR / f"{lang}.json"
        if path.exists():
            with open(path, encoding="utf-8") as f:
                _I18N_CACHE[lang] = json.load(f)
        else:
            _I18N_CACHE[lang] = {}
    return _I18N_CACHE[lang]


def _walk(catalog: dict, key: str) -> Any:
    node: Any = catalog
    for part in key.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            return _MISSING
    return node


def lookup(key: str, lang: str = DEFAULT_LANG, default: Any = None) -> Any:
    """Nœud brut du catalogue (str, list, dict). Repli sur ru si absent."""
    node = _walk(_load_lang(normalize_lang(lang)), key)
    if node is _MISSING:
        node = _walk(_load_lang(DEFAULT_LANG), key)
    return default if node is _MISSING else node


def catalog(lang: str = DEFAULT_LANG) -> dict:
    """Catalogue complet d'une langue supportée."""
    return _load_lang(normalize_lang(lang))


def resolve_placeholders(text: str, context: Optional[dict] = None) -> str:
    """
    Remplace les placeholders {site}, {count}, etc. par les valeurs du contexte.
    Les placeholders sans correspondance sont laissés intacts.
    """
    if not context or not text:
        return text

    def replacer(match):
        placeholder = match.group(1)
        return str(context.get(placeholder, match.group(0)))

    return re.sub(r"\{(\w+)\}", replacer, text)


def t(key: str, lang: str = DEFAULT_LANG, context: Optional[dict] = None) -> str:
    """
    Pipeline complet : catalogue → placeholders.
    Usage : t("meta.description_suffix", lang="en", context={"site": "lnkmx.my"})
    """
    node = lookup(key, lang, _MISSING)
    if node is _MISSING or not isinstance(node, str):
        return f"[missing:{key}]"
    return resolve_placeholders(node, context)


def reload_cache():
    """Force le rechargement du cache i18n (utile en dev)."""
    _I18N_CACHE.clear()
