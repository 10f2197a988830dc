"""
API publique de page_seo — pipeline complet d'une page.

extracteur → quality gate → meta → schémas → source context
Le profil est calculé avant tout le reste ; rien n'est mémoïsé.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from .anchors import generate_key_facts, generate_section_anchors
from .core.i18n import DEFAULT_LANG, normalize_lang
from .core.schemas import PageRecord, Profile, SeoBundle
from .extractor import extract_page_facts, extract_profile_from_blocks, generate_auto_about
from .meta import generate_page_meta
from .quality_gate import evaluate_quality_gate
from .renderer.html import safe_url
from .schema_org import generate_content_hash, generate_schemas, generate_source_context
from .text import normalize_text

log = logging.getLogger(__name__)


class SeoBuilder:
    """
    Builder SEO d'une page link-in-bio.

    Usage:
        >>> builder = SeoBuilder()
        >>> bundle = builder.build(record, language="en")
        >>> bundle.meta.robots
        'index, follow'
    """

    def profile_for(self, record: PageRecord, language: str) -> Profile:
        """Profil des blocs, complété par les champs de la page (titre, description, avatar)."""
        profile = extract_profile_from_blocks(record.blocks, language)
        updates = {}
        if not profile.name and record.title:
            updates["name"] = normalize_text(record.title)
        if not profile.bio and record.description:
            updates["bio"] = normalize_text(record.description)
        if not profile.avatar:
            avatar = safe_url(record.avatar_url, ("http", "https"))
            if avatar:
                updates["avatar"] = avatar
        return profile.model_copy(update=updates) if updates else profile

    def build(self, record: PageRecord, language: str = DEFAULT_LANG) -> SeoBundle:
        """
        Calcule le bundle SEO complet d'une page.

        Args:
            record: page lue depuis le stockage
            language: langue de sortie (ru, en, kk ; inconnue → ru)

        Returns:
            SeoBundle recalculable à l'identique depuis les mêmes entrées
        """
        lang = normalize_lang(language)
        blocks = record.blocks
        profile = self.profile_for(record, lang)
        facts = extract_page_facts(blocks, lang, profile=profile)

        gate = evaluate_quality_gate(blocks, name=profile.name, bio=profile.bio,
                                     is_new_account=record.is_new_account)
        if not gate.passed:
            log.debug("Page %r non indexable (score %d : %s)",
                      record.slug, gate.score, ", ".join(gate.reasons))

        meta = generate_page_meta(profile, blocks, record.slug, gate, lang, niche=record.niche)
        schemas = generate_schemas(profile, blocks, record.slug, meta, lang,
                                   updated_at=record.updated_at, facts=facts)
        context = generate_source_context(record.slug, record.updated_at,
                                          generate_content_hash(blocks))

        return SeoBundle(
            slug=record.slug,
            language=lang,
            profile=profile,
            quality_gate=gate,
            meta=meta,
            schemas=schemas,
            summary=profile.bio or generate_auto_about(profile, blocks, lang, niche=record.niche),
            source_context=context,
            sections=generate_section_anchors(blocks, lang),
            key_facts=generate_key_facts(profile, blocks, lang, niche=record.niche, facts=facts),
        )


# Fonction raccourcie pour usage direct
def build_seo_bundle(blocks: Iterable[Any], slug: str, language: str = DEFAULT_LANG,
                     updated_at: Optional[Union[str, datetime]] = None,
                     is_new_account: bool = False) -> SeoBundle:
    """Bundle SEO depuis une simple séquence de blocs (aperçu éditeur, tests)."""
    record = PageRecord(slug=slug, blocks=list(blocks or []),
                        updated_at=updated_at, is_new_account=is_new_account)
    return SeoBuilder().build(record, language)
