"""
Schémas Pydantic de page_seo.

Entrées (PageRecord, GalleryItem) fournies par le stockage externe, en lecture seule.
Sorties dérivées (Profile → QualityGateResult → PageMeta → SchemaGraph → SeoBundle)
recalculées à chaque rendu, jamais persistées.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, SerializeAsAny, field_validator

from ..blocks import BaseBlock, parse_blocks


# ── Entrées ─────────────────────────────────────────────────────────────────

class PageRecord(BaseModel):
    """Page publiée telle que lue depuis le stockage."""
    slug: str
    title: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    niche: Optional[str] = None
    blocks: List[SerializeAsAny[BaseBlock]] = Field(default_factory=list)
    updated_at: Optional[datetime] = None
    is_new_account: bool = False

    @field_validator("blocks", mode="before")
    @classmethod
    def _blocks(cls, v):
        return parse_blocks(v)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _updated_at(cls, v):
        # Date illisible → None plutôt qu'une erreur
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        return v


class GalleryItem(BaseModel):
    slug: str
    title: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    niche: Optional[str] = None


class SitemapPage(BaseModel):
    """Page publiée telle que listée dans le sitemap."""
    slug: str
    title: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[datetime] = None


# ── Faits extraits des blocs ────────────────────────────────────────────────

class Profile(BaseModel):
    name: str = ""
    bio: str = ""
    avatar: Optional[str] = None
    type: Literal["Person", "Organization"] = "Person"
    location: Optional[str] = None
    same_as: List[str] = Field(default_factory=list)


class FaqEntry(BaseModel):
    question: str
    answer: str = ""


class EventFact(BaseModel):
    title: str
    description: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[str] = None
    online: bool = False
    image: Optional[str] = None
    price: Optional[Union[int, float]] = None
    currency: Optional[str] = None


class ServiceFact(BaseModel):
    name: str
    description: str = ""
    price: Optional[Union[int, float]] = None
    currency: str
    service_type: Optional[str] = None


class LinkFact(BaseModel):
    title: str
    url: str


class PageFacts(BaseModel):
    profile: Profile
    faq: List[FaqEntry] = Field(default_factory=list)
    events: List[EventFact] = Field(default_factory=list)
    services: List[ServiceFact] = Field(default_factory=list)
    links: List[LinkFact] = Field(default_factory=list)
    socials: List[LinkFact] = Field(default_factory=list)
    texts: List[str] = Field(default_factory=list)
    has_booking: bool = False


class EntityLinks(BaseModel):
    same_as: List[str] = Field(default_factory=list)
    knows_about: List[str] = Field(default_factory=list)


class PageSection(BaseModel):
    id: Optional[str] = None
    anchor: str
    label: str


class KeyFact(BaseModel):
    category: Literal["identity", "services", "location", "contact", "features", "social"]
    label: str
    value: str
    schema_property: Optional[str] = None


# ── Sorties dérivées ────────────────────────────────────────────────────────

class QualityGateResult(BaseModel):
    score: int = Field(ge=0, le=100)
    passed: bool
    reasons: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class PageMeta(BaseModel):
    title: str
    description: str
    canonical: str
    robots: str
    og_image: str
    og_locale: str
    language: str


class SchemaGraph(BaseModel):
    """Parties JSON-LD ; les parties optionnelles absentes valent None (omises au dump)."""
    web_page: Dict[str, Any]
    main_entity: Dict[str, Any]
    breadcrumb: Dict[str, Any]
    faq: Optional[Dict[str, Any]] = None
    events: Optional[List[Dict[str, Any]]] = None
    services: Optional[List[Dict[str, Any]]] = None


class SeoBundle(BaseModel):
    slug: str
    language: str
    profile: Profile
    quality_gate: QualityGateResult
    meta: PageMeta
    schemas: SchemaGraph
    summary: str
    source_context: str
    sections: List[PageSection] = Field(default_factory=list)
    key_facts: List[KeyFact] = Field(default_factory=list)
