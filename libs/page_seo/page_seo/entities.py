"""Entity linking — sameAs (profils sociaux) et knowsAbout (services, catégories)."""
from typing import Any, Iterable, List
from urllib.parse import urlsplit

from .blocks import CatalogBlock, LinkBlock, PricingBlock, SocialsBlock, parse_blocks
from .core.i18n import DEFAULT_LANG, get_text
from .core.schemas import EntityLinks
from .renderer.html import safe_url
from .text import normalize_text

SOCIAL_PLATFORMS = {
    "linkedin":  "linkedin.com",
    "github":    "github.com",
    "twitter":   "twitter.com",
    "x":         "x.com",
    "instagram": "instagram.com",
    "facebook":  "facebook.com",
    "youtube":   "youtube.com",
    "tiktok":    "tiktok.com",
    "vk":        "vk.com",
    "telegram":  "t.me",
    "behance":   "behance.net",
    "dribbble":  "dribbble.com",
    "medium":    "medium.com",
    "pinterest": "pinterest.com",
    "twitch":    "twitch.tv",
    "spotify":   "spotify.com",
}

MAX_KNOWS_ABOUT_SERVICES   = 5
MAX_KNOWS_ABOUT_CATEGORIES = 3


def normalize_url(url: str) -> str:
    """Domaine en minuscules, slash final retiré, query/fragment ignorés."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc.lower()}{parts.path.rstrip('/')}"


def is_social_url(url: str) -> bool:
    host = urlsplit(url.lower()).netloc
    if host.startswith("www."):
        host = host[4:]
    return any(host == domain or host.endswith("." + domain) for domain in SOCIAL_PLATFORMS.values())


def _topic(value: Any, language: str) -> str:
    name = normalize_text(get_text(value, language))
    return name if 2 < len(name) < 50 else ""


def extract_entity_links(blocks: Iterable[Any], language: str = DEFAULT_LANG) -> EntityLinks:
    parsed = parse_blocks(blocks)
    same_as: List[str] = []
    knows_about: List[str] = []

    for block in (b for b in parsed if isinstance(b, SocialsBlock)):
        for platform in block.platforms:
            url = safe_url(platform.url, ("http", "https"))
            if url:
                same_as.append(normalize_url(url))

    # Liens classiques : seulement les plateformes sociales connues
    for block in (b for b in parsed if isinstance(b, LinkBlock)):
        url = safe_url(block.url, ("http", "https"))
        if url and is_social_url(url):
            same_as.append(normalize_url(url))

    for block in (b for b in parsed if isinstance(b, PricingBlock)):
        for item in block.items[:MAX_KNOWS_ABOUT_SERVICES]:
            topic = _topic(item.name, language)
            if topic:
                knows_about.append(topic)

    for block in (b for b in parsed if isinstance(b, CatalogBlock)):
        for category in block.categories[:MAX_KNOWS_ABOUT_CATEGORIES]:
            topic = _topic(category.name, language)
            if topic:
                knows_about.append(topic)

    return EntityLinks(
        same_as=list(dict.fromkeys(same_as)),
        knows_about=list(dict.fromkeys(knows_about)),
    )
