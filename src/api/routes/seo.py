"""
API SEO pour le SPA — bundle JSON, fragment <head>, fragment <noscript>, aperçu éditeur.

GET  /api/seo/{slug}?lang=       → SeoBundle (meta, schémas, quality gate…)
GET  /api/seo/{slug}/head        → balises du <head> calculées pour la requête
GET  /api/seo/{slug}/noscript    → projection sémantique pour clients sans JS
POST /api/seo/preview            → bundle d'une page non enregistrée
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_seo import (
    HeadDocument, HeadTagManager, PageRecord, SeoBuilder, SeoBundle,
    render_crawler_content, resolve_language,
)

from ...database import db_get_page, get_db, page_record

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/seo", tags=["SEO"])


def _record_or_404(db: Session, slug: str) -> PageRecord:
    page = db_get_page(db, slug)
    if not page:
        raise HTTPException(404, "Page introuvable")
    return page_record(page)


def _dump(bundle: SeoBundle) -> dict:
    # Parties de schéma absentes (faq, events, services) omises, pas null
    return bundle.model_dump(mode="json", exclude_none=True)


@router.post("/preview")
def api_seo_preview(record: PageRecord, lang: Optional[str] = Query(None),
                    accept_language: Optional[str] = Header(None)):
    """Aperçu éditeur : même pipeline que la page publiée, rien n'est enregistré."""
    language = resolve_language(lang, accept_language)
    return _dump(SeoBuilder().build(record, language))


@router.get("/{slug}")
def api_seo_bundle(slug: str, lang: Optional[str] = Query(None),
                   accept_language: Optional[str] = Header(None),
                   db: Session = Depends(get_db)):
    record = _record_or_404(db, slug)
    language = resolve_language(lang, accept_language)
    return _dump(SeoBuilder().build(record, language))


@router.get("/{slug}/head", response_class=HTMLResponse)
def api_seo_head(slug: str, lang: Optional[str] = Query(None),
                 accept_language: Optional[str] = Header(None),
                 db: Session = Depends(get_db)):
    record = _record_or_404(db, slug)
    bundle = SeoBuilder().build(record, resolve_language(lang, accept_language))
    head = HeadDocument()
    if not HeadTagManager(head).apply(bundle):
        raise HTTPException(500, "Head indisponible")
    return HTMLResponse(head.render(), headers={"Content-Language": head.lang})


@router.get("/{slug}/noscript", response_class=HTMLResponse)
def api_seo_noscript(slug: str, lang: Optional[str] = Query(None),
                     accept_language: Optional[str] = Header(None),
                     db: Session = Depends(get_db)):
    record = _record_or_404(db, slug)
    language = resolve_language(lang, accept_language)
    html = render_crawler_content(record.blocks, record.slug, record.updated_at,
                                  language, niche=record.niche)
    return HTMLResponse(html)
