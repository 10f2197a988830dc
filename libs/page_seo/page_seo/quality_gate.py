"""
Module QUALITY GATE
Décide si une page est assez riche pour être indexée → robots index/noindex.

Score /100 :
  +20 nom (≥ 2 caractères)
  +30 bio ≥ 50 caractères  (+15 si bio plus courte mais non vide)
  +20 ≥ 3 blocs
  +20 lien sortant ou contact (link, button, socials, messenger)
  +10 bloc à valeur (faq, pricing, event, product, catalog, testimonial, booking)
  -30 domaine bloqué (critique : échec forcé)
Seuil : 60 ; comptes récents : 45.
"""
import logging
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from . import config
from .blocks import LinkBlock, parse_blocks
from .core.schemas import QualityGateResult
from .extractor import has_contact

log = logging.getLogger(__name__)

SCORE_NAME      = 20
SCORE_BIO_FULL  = 30
SCORE_BIO_SHORT = 15
SCORE_BLOCKS    = 20
SCORE_CONTACT   = 20
SCORE_VALUE     = 10
PENALTY_BLOCKED = 30

MIN_NAME_LENGTH = 2
MIN_BIO_LENGTH  = 50
MIN_BLOCKS      = 3

VALUE_TYPES = ("faq", "pricing", "event", "product", "catalog", "testimonial", "booking")
BLOCKED_DOMAINS = (
    "bit.ly", "tinyurl.com", "goo.gl",   # raccourcisseurs
    "casino", "poker", "betting",        # jeux d'argent
    "adult", "xxx", "porn",              # contenu adulte
)
CRITICAL_REASONS = ("blocked_domain",)


def _blocked_urls(blocks) -> List[str]:
    hits = []
    for block in (b for b in blocks if isinstance(b, LinkBlock)):
        if not block.url:
            continue
        host = (urlsplit(block.url.lower()).netloc or block.url.lower())
        if any(domain in host for domain in BLOCKED_DOMAINS):
            hits.append(block.url)
    return hits


def pass_threshold(is_new_account: bool) -> int:
    return config.NEW_ACCOUNT_PASS_THRESHOLD if is_new_account else config.QUALITY_PASS_THRESHOLD


def evaluate_quality_gate(blocks: Iterable[Any], name: Optional[str] = None,
                          bio: Optional[str] = None,
                          is_new_account: bool = False) -> QualityGateResult:
    """
    Évalue la page. Pure, déterministe, sans mémoïsation nécessaire.

    Args:
        blocks: séquence de blocs (bruts ou parsés)
        name: nom du profil extrait
        bio: bio / texte « à propos »
        is_new_account: compte récent → seuil de grâce plus bas

    Returns:
        QualityGateResult (score borné 0..100, passed, reasons, suggestions)
    """
    parsed = parse_blocks(blocks)
    name = (name or "").strip()
    bio = (bio or "").strip()
    score = 0
    reasons: List[str] = []
    suggestions: List[str] = []

    if len(name) >= MIN_NAME_LENGTH:
        score += SCORE_NAME
    else:
        reasons.append("missing_name")
        suggestions.append("Add your name or business name")

    if len(bio) >= MIN_BIO_LENGTH:
        score += SCORE_BIO_FULL
    elif bio:
        score += SCORE_BIO_SHORT
        reasons.append("short_bio")
        suggestions.append("Expand your bio for better SEO")
    else:
        reasons.append("missing_bio")
        suggestions.append("Add a description of who you are or what you offer")

    if len(parsed) >= MIN_BLOCKS:
        score += SCORE_BLOCKS
    else:
        reasons.append("insufficient_blocks")
        suggestions.append(f"Add at least {MIN_BLOCKS} content blocks")

    if has_contact(parsed):
        score += SCORE_CONTACT
    else:
        reasons.append("no_contact")
        suggestions.append("Add a link, social profile or messenger contact")

    if any(b.type in VALUE_TYPES for b in parsed):
        score += SCORE_VALUE

    blocked = _blocked_urls(parsed)
    if blocked:
        log.info("Quality gate : domaine bloqué détecté (%s)", blocked[0])
        reasons.append("blocked_domain")
        score -= PENALTY_BLOCKED

    score = max(0, min(100, score))
    critical = any(r in CRITICAL_REASONS for r in reasons)
    passed = score >= pass_threshold(is_new_account) and not critical

    return QualityGateResult(
        score=score,
        passed=passed,
        reasons=reasons,
        suggestions=[] if passed else suggestions,
    )


def robots_directive(gate: QualityGateResult) -> str:
    """index, follow ⇔ gate.passed ; aucun état intermédiaire."""
    return config.ROBOTS_INDEX if gate.passed else config.ROBOTS_NOINDEX
