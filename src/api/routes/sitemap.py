"""
GET /sitemap.xml — pages statiques + niches + pages publiées (ETag / 304)
GET /robots.txt
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.orm import Session

from page_seo import build_robots_txt, build_sitemap_xml, generate_etag
from page_seo.config import BASE_URL, SSR_CACHE_CONTROL

from ...database import db_list_published, get_db, sitemap_pages

log = logging.getLogger(__name__)

router = APIRouter(tags=["Sitemap"])


@router.get("/sitemap.xml")
def sitemap_xml(if_none_match: Optional[str] = Header(None), db: Session = Depends(get_db)):
    pages = sitemap_pages(db_list_published(db))
    xml = build_sitemap_xml(pages, BASE_URL)
    etag = generate_etag(xml)
    if if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag, "Cache-Control": SSR_CACHE_CONTROL})
    log.info("Sitemap généré — %d pages publiées", len(pages))
    return Response(
        xml,
        media_type="application/xml; charset=utf-8",
        headers={
            "ETag": etag,
            "Cache-Control": SSR_CACHE_CONTROL,
            "X-Content-Type-Options": "nosniff",
        },
    )


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt():
    return PlainTextResponse(build_robots_txt(BASE_URL))
