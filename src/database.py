"""SQLite — init + session + helpers de lecture des pages publiées"""
import json, os
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from page_seo import GalleryItem, PageRecord, SitemapPage
from page_seo.config import GALLERY_LIMIT, NEW_ACCOUNT_DAYS

from .models import Base, BlockDB, PageDB

DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR.mkdir(exist_ok=True)

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "lnkmx_seo.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jo(s: str) -> dict:
    try:
        data = json.loads(s or "{}")
    except (ValueError, TypeError):
        return {}
    return data if isinstance(data, dict) else {}

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Pages ──
def db_create_page(db: Session, obj: PageDB) -> PageDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_page(db: Session, slug: str, published_only: bool = True) -> Optional[PageDB]:
    q = db.query(PageDB).filter_by(slug=slug)
    if published_only:
        q = q.filter_by(is_published=True)
    return q.first()

def db_list_published(db: Session, limit: int = 10000) -> List[PageDB]:
    return (db.query(PageDB).filter_by(is_published=True)
            .order_by(PageDB.updated_at.desc()).limit(limit).all())

def db_list_gallery(db: Session, niche: Optional[str] = None, limit: int = GALLERY_LIMIT) -> List[PageDB]:
    q = db.query(PageDB).filter_by(is_published=True)
    if niche:
        q = q.filter_by(niche=niche)
    return q.order_by(PageDB.likes.desc(), PageDB.updated_at.desc()).limit(limit).all()


# ── Blocks ──
def db_add_block(db: Session, page: PageDB, block_type: str, content: dict,
                 title: Optional[str] = None, position: Optional[int] = None) -> BlockDB:
    if position is None:
        position = len(page.blocks)
    obj = BlockDB(page_id=page.id, type=block_type, title=title, content=jd(content), position=position)
    db.add(obj); db.commit(); db.refresh(obj); db.refresh(page); return obj


# ── Conversion vers page_seo ──
def raw_block(block: BlockDB) -> dict:
    """Ligne blocks → bloc brut {id, type, title, content} (normalisé par page_seo)."""
    raw = {"id": block.id, "type": block.type, "content": jo(block.content)}
    if block.title:
        raw["title"] = block.title
    return raw

def is_new_account(page: PageDB, now: Optional[datetime] = None) -> bool:
    created = page.account_created_at or page.created_at
    if not created:
        return False
    return (now or datetime.utcnow()) - created < timedelta(days=NEW_ACCOUNT_DAYS)

def page_record(page: PageDB, now: Optional[datetime] = None) -> PageRecord:
    return PageRecord(
        slug=page.slug,
        title=page.title,
        description=page.description,
        avatar_url=page.avatar_url,
        niche=page.niche,
        blocks=[raw_block(b) for b in sorted(page.blocks, key=lambda b: b.position)],
        updated_at=page.updated_at,
        is_new_account=is_new_account(page, now),
    )

def gallery_items(pages: List[PageDB]) -> List[GalleryItem]:
    return [
        GalleryItem(slug=p.slug, title=p.title, description=p.description,
                    avatar_url=p.avatar_url, niche=p.niche)
        for p in pages
    ]

def sitemap_pages(pages: List[PageDB]) -> List[SitemapPage]:
    return [
        SitemapPage(slug=p.slug, title=p.title, avatar_url=p.avatar_url, updated_at=p.updated_at)
        for p in pages if p.slug
    ]
