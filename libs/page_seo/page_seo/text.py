"""Helpers texte — markdown, espaces, troncature."""
import re

_MD_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_TRIM_TAIL = " \t-|,.;:\u2013\u2014"


def strip_markdown_links(text: str) -> str:
    """[texte](url) → texte"""
    if not text:
        return ""
    return _MD_LINK.sub(r"\1", text)


def normalize_text(text: str) -> str:
    """Espaces multiples / retours ligne → un espace, trim."""
    if not text:
        return ""
    return " ".join(text.split())


def truncate(text: str, max_length: int) -> str:
    """
    Nettoie (markdown, espaces) puis coupe à max_length avec "...".
    Le résultat tronqué est un préfixe du texte nettoyé suivi de "...".
    """
    clean = normalize_text(strip_markdown_links(text or ""))
    if len(clean) <= max_length:
        return clean
    return clean[: max_length - 3].rstrip() + "..."


def truncate_words(text: str, limit: int) -> str:
    """Coupe sur une frontière de mot si possible, sans ellipse."""
    if len(text) <= limit:
        return text
    cut = text[:limit]
    space = cut.rfind(" ")
    if space >= limit // 2:
        cut = cut[:space]
    return cut.rstrip(_TRIM_TAIL) or text[:limit]
