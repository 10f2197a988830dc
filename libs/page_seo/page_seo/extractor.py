"""
Extracteur profil/contenu — séquence de blocs → Profile + PageFacts.

Fonctions pures : même séquence + même langue → même résultat.
Contenu absent ou mal formé → valeurs vides, jamais d'exception.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from . import config
from .blocks import (
    AvatarBlock, BaseBlock, BookingBlock, EventBlock, FAQBlock, LinkBlock,
    MapBlock, MessengerBlock, PricingBlock, ProfileBlock, SocialsBlock, TextBlock,
    parse_blocks,
)
from .core.i18n import DEFAULT_LANG, get_text, t
from .core.schemas import EventFact, FaqEntry, LinkFact, PageFacts, Profile, ServiceFact
from .entities import is_social_url
from .renderer.html import safe_url
from .text import normalize_text

log = logging.getLogger(__name__)

COMMERCIAL_TYPES = ("product", "catalog")
BUSINESS_INDICATORS = (
    "studio", "студия", "салон", "salon", "shop", "магазин",
    "agency", "агентство", "company", "компания", "store", "clinic", "клиника",
)


def _first(blocks: List[BaseBlock], cls):
    return next((b for b in blocks if isinstance(b, cls)), None)


def _has_type(blocks: List[BaseBlock], *types: str) -> bool:
    return any(b.type in types for b in blocks)


def _handle_from_url(url: Optional[str]) -> str:
    """https://instagram.com/anna.k/ → anna.k"""
    if not url:
        return ""
    path = urlsplit(url).path.strip("/")
    if not path:
        return ""
    return path.split("/")[-1].lstrip("@")


def iso_date(value: Any) -> Optional[str]:
    """Date ISO 8601 normalisée, ou None si illisible."""
    if isinstance(value, datetime):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).isoformat()
    except ValueError:
        log.debug("Date illisible ignorée : %r", value)
        return None


# ── Profil ──────────────────────────────────────────────────────────────────

def extract_location(blocks: Iterable[Any], fallback: Optional[str] = None,
                     language: str = DEFAULT_LANG) -> Optional[str]:
    """Première adresse trouvée (carte, puis événement hors ligne), sinon fallback."""
    parsed = parse_blocks(blocks)
    for block in parsed:
        if isinstance(block, MapBlock):
            address = normalize_text(get_text(block.address, language))
            if address:
                return address
    for block in parsed:
        if isinstance(block, EventBlock) and not block.is_online and block.location_value:
            return normalize_text(block.location_value)
    return fallback or None


def extract_profile_from_blocks(blocks: Iterable[Any], language: str = DEFAULT_LANG) -> Profile:
    """
    Profil normalisé depuis les blocs.

    Ordre : bloc profile → bloc avatar → identité partielle depuis les réseaux sociaux.
    Séquence vide → profil avec nom et bio vides.
    """
    parsed = parse_blocks(blocks)
    name = bio = ""
    avatar: Optional[str] = None

    profile_block = _first(parsed, ProfileBlock)
    if profile_block:
        name = normalize_text(get_text(profile_block.name, language))
        bio = normalize_text(get_text(profile_block.bio, language))
        avatar = safe_url(profile_block.avatar, ("http", "https"))

    avatar_block = _first(parsed, AvatarBlock)
    if avatar_block:
        if not name:
            name = normalize_text(get_text(avatar_block.name, language))
            bio = bio or normalize_text(get_text(avatar_block.subtitle, language))
        avatar = avatar or safe_url(avatar_block.image_url, ("http", "https"))

    same_as: List[str] = []
    for socials in (b for b in parsed if isinstance(b, SocialsBlock)):
        for platform in socials.platforms:
            url = safe_url(platform.url, ("http", "https"))
            if url and url not in same_as:
                same_as.append(url)

    if not name:
        socials_block = _first(parsed, SocialsBlock)
        if socials_block:
            name = normalize_text(get_text(socials_block.title, language))
        if not name and same_as:
            handle = _handle_from_url(same_as[0])
            name = f"@{handle}" if handle else ""
    if not name:
        # Lien simple vers un réseau social : son handle sert d'identité
        for link in (b for b in parsed if isinstance(b, LinkBlock)):
            url = safe_url(link.url, ("http", "https"))
            handle = _handle_from_url(url) if url and is_social_url(url) else ""
            if handle:
                name = f"@{handle}"
                break

    entity_type = "Person"
    commercial = _has_type(parsed, *COMMERCIAL_TYPES) or (
        _has_type(parsed, "pricing") and _has_type(parsed, "booking")
    )
    if commercial and any(word in name.lower() for word in BUSINESS_INDICATORS):
        entity_type = "Organization"

    return Profile(
        name=name,
        bio=bio,
        avatar=avatar,
        type=entity_type,
        location=extract_location(parsed, language=language),
        same_as=same_as,
    )


def generate_auto_about(profile: Profile, blocks: Iterable[Any],
                        language: str = DEFAULT_LANG, niche: Optional[str] = None) -> str:
    """
    Phrase descriptive de repli quand la bio est vide.
    Déterministe : aucune dépendance à l'heure ni au hasard.
    """
    parsed = parse_blocks(blocks)
    parts = [profile.name or t("about.profile_fallback", language, {"brand": config.BRAND_NAME})]

    if niche:
        parts.append(normalize_text(niche))

    if _has_type(parsed, "pricing", "booking"):
        parts.append(t("about.services_booking", language))
    elif _has_type(parsed, *COMMERCIAL_TYPES):
        parts.append(t("about.products_services", language))
    elif _has_type(parsed, "event"):
        parts.append(t("about.events", language))

    if profile.location:
        parts.append(profile.location)

    if _has_type(parsed, "messenger") or profile.same_as:
        parts.append(t("about.contacts", language))

    return " • ".join(p for p in parts if p)


# ── Faits de page ───────────────────────────────────────────────────────────

def _faq_entries(blocks: List[BaseBlock], language: str) -> List[FaqEntry]:
    entries = []
    for block in (b for b in blocks if isinstance(b, FAQBlock)):
        for item in block.items:
            question = normalize_text(get_text(item.question, language))
            if question:
                entries.append(FaqEntry(question=question,
                                        answer=normalize_text(get_text(item.answer, language))))
    return entries


def _event_facts(blocks: List[BaseBlock], language: str) -> List[EventFact]:
    events = []
    for block in (b for b in blocks if isinstance(b, EventBlock)):
        title = normalize_text(get_text(block.title, language))
        if not block.is_listed or not title:
            continue
        location = block.location_value
        if block.is_online:
            location = safe_url(location, ("http", "https"))
        events.append(EventFact(
            title=title,
            description=normalize_text(get_text(block.description, language)),
            start_date=iso_date(block.start_at),
            end_date=iso_date(block.end_at),
            location=location,
            online=block.is_online,
            image=safe_url(block.cover_url, ("http", "https")),
            price=block.price if block.is_paid else None,
            currency=(block.currency or config.DEFAULT_CURRENCY) if block.is_paid else None,
        ))
    return events


def _service_facts(blocks: List[BaseBlock], language: str) -> List[ServiceFact]:
    services = []
    for block in (b for b in blocks if isinstance(b, PricingBlock)):
        for item in block.items:
            name = normalize_text(get_text(item.name, language))
            if not name:
                continue
            services.append(ServiceFact(
                name=name,
                description=normalize_text(get_text(item.description, language)),
                price=item.price,
                currency=item.currency or block.currency or config.DEFAULT_CURRENCY,
                service_type=item.service_type if item.service_type != "other" else None,
            ))
    return services


def extract_page_facts(blocks: Iterable[Any], language: str = DEFAULT_LANG,
                       profile: Optional[Profile] = None) -> PageFacts:
    """Tous les faits citables d'une page : FAQ, événements, services, liens, textes."""
    parsed = parse_blocks(blocks)
    profile = profile or extract_profile_from_blocks(parsed, language)

    links = []
    for block in (b for b in parsed if isinstance(b, LinkBlock)):
        url = safe_url(block.url)
        if url:
            title = normalize_text(get_text(block.title, language)) or url
            links.append(LinkFact(title=title, url=url))

    socials = []
    for block in (b for b in parsed if isinstance(b, SocialsBlock)):
        for platform in block.platforms:
            url = safe_url(platform.url, ("http", "https"))
            if url:
                socials.append(LinkFact(title=platform.name or url, url=url))

    texts = [
        normalize_text(get_text(b.content, language))
        for b in parsed if isinstance(b, TextBlock)
    ]

    return PageFacts(
        profile=profile,
        faq=_faq_entries(parsed, language),
        events=_event_facts(parsed, language),
        services=_service_facts(parsed, language),
        links=links,
        socials=socials,
        texts=[text for text in texts if text],
        has_booking=any(isinstance(b, BookingBlock) for b in parsed),
    )


def has_contact(blocks: Iterable[Any]) -> bool:
    """Au moins un moyen de contact sortant : lien, bouton, réseau social, messagerie."""
    for block in parse_blocks(blocks):
        if isinstance(block, LinkBlock) and block.url:
            return True
        if isinstance(block, SocialsBlock) and any(p.url for p in block.platforms):
            return True
        if isinstance(block, MessengerBlock) and any(m.username for m in block.messengers):
            return True
    return False
