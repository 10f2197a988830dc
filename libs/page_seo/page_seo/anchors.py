"""
Ancres de section stables (#about, #faq…) + faits clés pour la citabilité IA.
"""
from typing import Any, Iterable, List, Optional

from . import config
from .blocks import parse_blocks
from .core.i18n import DEFAULT_LANG, t
from .core.schemas import KeyFact, PageFacts, PageSection, Profile
from .extractor import extract_page_facts

# type de bloc → ancre de section
SECTION_ANCHORS = {
    "profile":     "about",
    "avatar":      "about",
    "text":        "about",
    "socials":     "contacts",
    "messenger":   "contacts",
    "link":        "contacts",
    "button":      "contacts",
    "faq":         "faq",
    "pricing":     "pricing",
    "booking":     "services",
    "product":     "projects",
    "catalog":     "projects",
    "event":       "events",
    "testimonial": "testimonials",
}


def generate_section_anchors(blocks: Iterable[Any], language: str = DEFAULT_LANG) -> List[PageSection]:
    """Une section par ancre, dans l'ordre de première apparition."""
    sections: List[PageSection] = []
    used = set()
    for block in parse_blocks(blocks):
        anchor = SECTION_ANCHORS.get(block.type)
        if anchor and anchor not in used:
            used.add(anchor)
            sections.append(PageSection(id=block.id, anchor=anchor,
                                        label=t(f"sections.{anchor}", language)))
    return sections


def _format_price(price) -> str:
    if isinstance(price, float) and not price.is_integer():
        return f"{price:.2f}"
    return str(int(price))


def generate_key_facts(profile: Profile, blocks: Iterable[Any], language: str = DEFAULT_LANG,
                       niche: Optional[str] = None,
                       facts: Optional[PageFacts] = None) -> List[KeyFact]:
    """Faits atomiques citables (max 8) : identité, lieu, services, contact."""
    facts = facts or extract_page_facts(blocks, language, profile=profile)
    out: List[KeyFact] = []

    def add(category, key, value, prop=None):
        out.append(KeyFact(category=category, label=t(f"facts.{key}", language),
                           value=value, schema_property=prop))

    if profile.name:
        add("identity", "name", profile.name, "name")
    if niche:
        add("identity", "role", niche, "jobTitle")
    if profile.location:
        add("location", "location", profile.location, "address")

    if facts.services:
        add("services", "services", ", ".join(s.name for s in facts.services[:3]), "makesOffer")
        if len(facts.services) > 3:
            add("services", "services_count", str(len(facts.services)))
        priced = [s for s in facts.services if s.price is not None]
        if priced:
            cheapest = min(priced, key=lambda s: s.price)
            add("services", "price_from", f"{_format_price(cheapest.price)} {cheapest.currency}")

    if facts.has_booking:
        add("features", "booking", t("facts.available", language))
    if facts.events:
        add("features", "events_count", str(len(facts.events)))
    if facts.faq:
        add("features", "faq_count", str(len(facts.faq)))
    if facts.socials:
        add("social", "socials", ", ".join(dict.fromkeys(s.title for s in facts.socials)), "sameAs")

    return out[: config.MAX_KEY_FACTS]
