"""
Décision bot / SSR — quel client reçoit le document HTML statique.

Recherche de sous-chaînes insensible à la casse, sans regex sur le user-agent :
les vrais UA embarquent le jeton au milieu d'une longue chaîne.
"""
import re
from typing import Any, Mapping, Optional

SEARCH_ENGINE_BOTS = (
    "googlebot", "google-inspectiontool", "bingbot", "yandex", "baiduspider",
    "duckduckbot", "slurp", "sogou", "exabot", "applebot", "petalbot",
    "seznambot", "ia_archiver",
)
AI_CRAWLERS = (
    "gptbot", "chatgpt-user", "oai-searchbot", "claudebot", "claude-web",
    "anthropic-ai", "perplexitybot", "perplexity", "cohere-ai", "you.com",
    "meta-externalagent", "google-extended", "bytespider", "ccbot",
)
SOCIAL_PREVIEW_BOTS = (
    "facebookexternalhit", "facebot", "twitterbot", "linkedinbot", "pinterest",
    "slackbot", "telegrambot", "whatsapp", "discordbot", "vkshare",
    "skypeuripreview", "embedly", "quora link preview",
)
GENERIC_BOT_INDICATORS = ("bot", "crawler", "spider", "prerender")

BOT_TOKENS = SEARCH_ENGINE_BOTS + AI_CRAWLERS + SOCIAL_PREVIEW_BOTS + GENERIC_BOT_INDICATORS

# Routes de l'application (SPA) jamais servies en SSR
RESERVED_SLUGS = frozenset({
    "admin", "dashboard", "auth", "api", "install", "join", "team", "p", "crm",
    "health", "docs", "pricing", "alternatives", "experts", "terms", "privacy",
    "payment-terms", "login", "signup", "editor",
})

_SLUG_PATH = re.compile(r"/[a-z0-9-]+")


def is_search_bot(user_agent: Optional[str]) -> bool:
    if not user_agent:
        return False
    ua = user_agent.lower()
    return any(token in ua for token in BOT_TOKENS)


def _header(headers: Any, name: str) -> Optional[str]:
    """Lecture insensible à la casse (dict simple ou Headers starlette)."""
    if not isinstance(headers, Mapping):
        return None
    value = headers.get(name)
    if value is not None:
        return value
    for key, val in headers.items():
        if isinstance(key, str) and key.lower() == name:
            return val
    return None


def normalize_path(path: Optional[str]) -> str:
    """Query string et slash final ignorés : "/anna/?lang=en" → "/anna"."""
    clean = (path or "/").split("?", 1)[0].split("#", 1)[0]
    if len(clean) > 1:
        clean = clean.rstrip("/") or "/"
    return clean or "/"


def is_ssr_path(path: Optional[str]) -> bool:
    """/, /gallery ou un slug d'un seul segment hors routes réservées."""
    clean = normalize_path(path)
    if clean in ("/", "/gallery"):
        return True
    if not _SLUG_PATH.fullmatch(clean):
        return False
    return clean[1:] not in RESERVED_SLUGS


def should_return_ssr(headers: Any, path: Optional[str]) -> bool:
    """SSR seulement pour un bot connu ET une forme de chemin autorisée."""
    return is_ssr_path(path) and is_search_bot(_header(headers, "user-agent"))
