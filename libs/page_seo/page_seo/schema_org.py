"""
Schema.org JSON-LD — WebPage, Person/Organization, BreadcrumbList,
FAQPage, Event[], Service[] + source context.

Chaque partie porte son propre @context (une balise <script> par partie).
Les parties optionnelles sans données restent à None : jamais d'objet ou de liste vide.
"""
import hashlib
import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from . import config
from .anchors import generate_section_anchors
from .blocks import parse_blocks
from .core.i18n import DEFAULT_LANG, normalize_lang
from .core.schemas import EventFact, PageFacts, PageMeta, Profile, SchemaGraph, ServiceFact
from .entities import extract_entity_links
from .extractor import extract_page_facts, iso_date

SCHEMA_CONTEXT = "https://schema.org"
EVENT_SCHEDULED = "https://schema.org/EventScheduled"
ONLINE_ATTENDANCE = "https://schema.org/OnlineEventAttendanceMode"
OFFLINE_ATTENDANCE = "https://schema.org/OfflineEventAttendanceMode"


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Retire les clés None / chaînes vides / listes vides."""
    return {k: v for k, v in data.items() if v not in (None, "", [], {})}


def _organizer(profile: Profile, name: str, url: str) -> Dict[str, Any]:
    return {"@type": profile.type, "name": name, "url": url}


def _event_schema(event: EventFact, profile: Profile, name: str, url: str) -> Dict[str, Any]:
    if event.online:
        location = _compact({"@type": "VirtualLocation", "url": event.location})
    else:
        location = _compact({"@type": "Place", "name": event.location, "address": event.location})
    offers = None
    if event.price is not None:
        offers = {
            "@type": "Offer",
            "price": event.price,
            "priceCurrency": event.currency or config.DEFAULT_CURRENCY,
            "availability": "https://schema.org/InStock",
        }
    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Event",
        "name": event.title,
        "description": event.description,
        "startDate": event.start_date,
        "endDate": event.end_date,
        "eventStatus": EVENT_SCHEDULED,
        "eventAttendanceMode": ONLINE_ATTENDANCE if event.online else OFFLINE_ATTENDANCE,
        "location": location if event.location else None,
        "image": event.image,
        "organizer": _organizer(profile, name, url),
        "offers": offers,
    })


def _service_schema(service: ServiceFact, profile: Profile, name: str) -> Dict[str, Any]:
    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Service",
        "name": service.name,
        "description": service.description,
        "serviceType": service.service_type,
        "provider": {"@type": profile.type, "name": name},
        "offers": _compact({
            "@type": "Offer",
            "price": service.price,
            "priceCurrency": service.currency,
        }),
    })


def generate_schemas(profile: Profile, blocks: Iterable[Any], slug: str, meta: PageMeta,
                     language: str = DEFAULT_LANG,
                     updated_at: Optional[Union[str, datetime]] = None,
                     facts: Optional[PageFacts] = None) -> SchemaGraph:
    """
    Graphe JSON-LD complet d'une page.

    FAQ, événements et services ne dépendent pas du quality gate :
    une page noindex garde des données structurées bien formées.
    """
    lang = normalize_lang(language)
    parsed = parse_blocks(blocks)
    facts = facts or extract_page_facts(parsed, lang, profile=profile)
    entity = extract_entity_links(parsed, lang)
    url = meta.canonical
    name = profile.name or f"@{slug}"

    main_entity = _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": profile.type,
        "@id": f"{url}#main",
        "name": name,
        "url": url,
        "description": profile.bio,
        "image": profile.avatar,
        "address": profile.location,
        "sameAs": list(dict.fromkeys(profile.same_as + entity.same_as)),
        "knowsAbout": entity.knows_about,
    })

    sections = generate_section_anchors(parsed, lang)
    web_page = _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "WebPage",
        "@id": f"{url}#webpage",
        "name": meta.title,
        "description": meta.description,
        "url": url,
        "inLanguage": lang,
        "dateModified": iso_date(updated_at),
        "mainEntity": {"@id": f"{url}#main"},
        "isPartOf": {"@type": "WebSite", "name": config.BRAND_NAME, "url": config.BASE_URL},
        "hasPart": [
            {"@type": "WebPageElement", "@id": f"{url}#{s.anchor}", "name": s.label}
            for s in sections
        ],
    })

    breadcrumb = {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": config.BRAND_NAME, "item": config.BASE_URL},
            {"@type": "ListItem", "position": 2, "name": name, "item": url},
        ],
    }

    faq = None
    if facts.faq:
        faq = {
            "@context": SCHEMA_CONTEXT,
            "@type": "FAQPage",
            "@id": f"{url}#faq",
            "mainEntity": [
                {
                    "@type": "Question",
                    "name": entry.question,
                    "acceptedAnswer": {"@type": "Answer", "text": entry.answer},
                }
                for entry in facts.faq
            ],
        }

    # Un Event sans startDate est invalide pour schema.org : il reste dans le noscript
    events = [
        _event_schema(e, profile, name, url)
        for e in [e for e in facts.events if e.start_date][: config.MAX_INDEXED_SCHEMAS]
    ]
    services = [
        _service_schema(s, profile, name)
        for s in facts.services[: config.MAX_INDEXED_SCHEMAS]
    ]

    return SchemaGraph(
        web_page=web_page,
        main_entity=main_entity,
        breadcrumb=breadcrumb,
        faq=faq,
        events=events or None,
        services=services or None,
    )


def to_json_ld_graph(schemas: SchemaGraph) -> Dict[str, Any]:
    """Toutes les parties dans un seul document @graph."""
    parts: List[Dict[str, Any]] = [schemas.web_page, schemas.main_entity, schemas.breadcrumb]
    if schemas.faq:
        parts.append(schemas.faq)
    parts.extend(schemas.events or [])
    parts.extend(schemas.services or [])
    return {
        "@context": SCHEMA_CONTEXT,
        "@graph": [{k: v for k, v in part.items() if k != "@context"} for part in parts],
    }


# ── Source context ──────────────────────────────────────────────────────────

def generate_content_hash(blocks: Iterable[Any]) -> str:
    """Empreinte courte du contenu (provenance opaque, pas une clé de cache)."""
    payload = [b.model_dump(mode="json", exclude_none=True) for b in parse_blocks(blocks)]
    canonical = json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:12]


def generate_source_context(slug: str, updated_at: Optional[Union[str, datetime]] = None,
                            content_hash: Optional[str] = None) -> str:
    """slug=<slug>; updated_at=<ISO>; content_hash=<h> — parties absentes omises."""
    parts = [f"slug={slug}"]
    updated = iso_date(updated_at)
    if updated:
        parts.append(f"updated_at={updated}")
    if content_hash:
        parts.append(f"content_hash={content_hash}")
    return "; ".join(parts)
