"""
Blocs — exports publics + registry par `type` + normalisation à la frontière.

Un bloc brut vient du stockage sous l'une des deux formes :
  {"id", "type", "content": {...}}   (ligne de la table blocks)
  {"id", "type", ...champs}          (état éditeur, déjà aplati)
parse_block() accepte les deux et ne lève jamais.
"""
import logging
from collections.abc import Iterable
from typing import Any, List, Optional

from pydantic import ValidationError

from ..core.i18n import SUPPORTED_LANGS
from .base import BaseBlock, GenericBlock
from .profile import ProfileBlock, AvatarBlock
from .links import LinkBlock, ButtonBlock, SocialsBlock, SocialPlatform, MessengerBlock, MessengerItem
from .content import (
    TextBlock, VideoBlock, CountdownBlock, SeparatorBlock,
    CarouselBlock, TestimonialBlock, MapBlock,
)
from .commerce import (
    ProductBlock, PricingBlock, PricingItem,
    CatalogBlock, CatalogCategory, CatalogItem, BookingBlock,
)
from .faq import FAQBlock, FAQItem
from .event import EventBlock

log = logging.getLogger(__name__)

# ── Registry des blocs ──────────────────────────────────────────────────────
_BLOCK_REGISTRY: dict = {
    "profile":     ProfileBlock,
    "avatar":      AvatarBlock,
    "link":        LinkBlock,
    "button":      ButtonBlock,
    "socials":     SocialsBlock,
    "messenger":   MessengerBlock,
    "text":        TextBlock,
    "video":       VideoBlock,
    "countdown":   CountdownBlock,
    "separator":   SeparatorBlock,
    "carousel":    CarouselBlock,
    "testimonial": TestimonialBlock,
    "map":         MapBlock,
    "product":     ProductBlock,
    "pricing":     PricingBlock,
    "catalog":     CatalogBlock,
    "booking":     BookingBlock,
    "faq":         FAQBlock,
    "event":       EventBlock,
}

BLOCK_TYPES = tuple(_BLOCK_REGISTRY)


def _is_localized_record(value: dict) -> bool:
    return bool(value) and all(key in SUPPORTED_LANGS for key in value)


def _flatten(raw: dict, btype: str) -> dict:
    """Fusionne le payload `content` dans le bloc (hors texte multilingue du bloc text)."""
    payload = raw.get("content")
    if not isinstance(payload, dict):
        return dict(raw)
    if btype == "text" and _is_localized_record(payload):
        return dict(raw)
    data = {k: v for k, v in raw.items() if k != "content"}
    data.update({k: v for k, v in payload.items() if k not in ("id", "type")})
    return data


def parse_block(raw: Any) -> BaseBlock:
    """Instancie un bloc depuis sa forme brute ; type inconnu ou invalide → GenericBlock."""
    if isinstance(raw, BaseBlock):
        return raw
    if not isinstance(raw, dict):
        log.debug("Bloc non-objet ignoré : %r", type(raw).__name__)
        return GenericBlock()

    btype = raw.get("type")
    if not isinstance(btype, str) or not btype.strip():
        btype = "unknown"
    btype = btype.strip()
    data = _flatten(raw, btype)
    data["type"] = btype

    block_cls = _BLOCK_REGISTRY.get(btype)
    if block_cls is None:
        log.debug("Bloc inconnu normalisé : %r", btype)
        return GenericBlock.model_validate({"type": btype, "id": raw.get("id")})
    try:
        return block_cls.model_validate(data)
    except ValidationError as e:
        log.warning("Bloc %r invalide, normalisé en GenericBlock : %s", btype, e)
        return GenericBlock.model_validate({"type": btype, "id": raw.get("id")})


def parse_blocks(raw_blocks: Optional[Iterable[Any]]) -> List[BaseBlock]:
    """Séquence ordonnée de blocs ; None ou non-itérable → []."""
    if not isinstance(raw_blocks, Iterable) or isinstance(raw_blocks, (str, bytes, dict)):
        return []
    return [parse_block(raw) for raw in raw_blocks if raw is not None]


__all__ = [
    "BaseBlock", "GenericBlock",
    "ProfileBlock", "AvatarBlock",
    "LinkBlock", "ButtonBlock", "SocialsBlock", "SocialPlatform", "MessengerBlock", "MessengerItem",
    "TextBlock", "VideoBlock", "CountdownBlock", "SeparatorBlock",
    "CarouselBlock", "TestimonialBlock", "MapBlock",
    "ProductBlock", "PricingBlock", "PricingItem",
    "CatalogBlock", "CatalogCategory", "CatalogItem", "BookingBlock",
    "FAQBlock", "FAQItem",
    "EventBlock",
    "BLOCK_TYPES", "parse_block", "parse_blocks",
]
