"""
Point d'entrée SSR — documents HTML statiques pour les bots, shell SPA pour les humains.

GET /            → landing
GET /gallery     → galerie (?niche=)
GET /{slug}      → page profil publiée, sinon document 404 (noindex)

Routeur enregistré en dernier : /{slug} ne doit masquer aucune autre route.
"""
import logging, os
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_seo import (
    build_gallery_html, build_landing_html, build_not_found_html, build_page_html,
    SeoBuilder, resolve_language, should_return_ssr,
)
from page_seo.config import BASE_URL, ROBOTS_INDEX, ROBOTS_NOINDEX, SSR_CACHE_CONTROL

from ...database import db_get_page, db_list_gallery, gallery_items, get_db, page_record

log = logging.getLogger(__name__)

router = APIRouter(tags=["SSR"])

SPA_INDEX = os.getenv("SPA_INDEX", str(Path(__file__).parent.parent.parent.parent / "dist" / "index.html"))

_SPA_FALLBACK = """<!DOCTYPE html>
<html lang="ru">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>lnkmx</title>
</head>
<body>
  <div id="root"></div>
</body>
</html>"""


def spa_shell() -> HTMLResponse:
    """index.html du SPA (build front), sinon un shell minimal."""
    path = Path(SPA_INDEX)
    html = path.read_text(encoding="utf-8") if path.is_file() else _SPA_FALLBACK
    return HTMLResponse(html, headers={"Vary": "User-Agent"})


def ssr_response(html: str, robots: str = ROBOTS_INDEX, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(html, status_code=status_code, headers={
        "X-Robots-Tag": robots,
        "Vary": "User-Agent",
        "Cache-Control": SSR_CACHE_CONTROL if status_code == 200 else "no-cache",
    })


def _language(request: Request) -> str:
    return resolve_language(request.query_params.get("lang"), request.headers.get("accept-language"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def ssr_landing(request: Request):
    if not should_return_ssr(request.headers, request.url.path):
        return spa_shell()
    return ssr_response(build_landing_html(_language(request), BASE_URL))


@router.get("/gallery", response_class=HTMLResponse, include_in_schema=False)
def ssr_gallery(request: Request, niche: Optional[str] = Query(None), db: Session = Depends(get_db)):
    if not should_return_ssr(request.headers, request.url.path):
        return spa_shell()
    items = gallery_items(db_list_gallery(db, niche=niche))
    return ssr_response(build_gallery_html(_language(request), BASE_URL, items, niche=niche))


@router.get("/{slug}", response_class=HTMLResponse, include_in_schema=False)
def ssr_page(slug: str, request: Request, db: Session = Depends(get_db)):
    if not should_return_ssr(request.headers, request.url.path):
        return spa_shell()
    lang = _language(request)
    page = db_get_page(db, slug.lower())
    if not page:
        log.info("SSR : page %r introuvable", slug)
        return ssr_response(build_not_found_html(lang, BASE_URL), ROBOTS_NOINDEX, status_code=404)
    record = page_record(page)
    bundle = SeoBuilder().build(record, lang)
    return ssr_response(build_page_html(record, lang, bundle=bundle), bundle.meta.robots)
