"""
Tests stockage — pages publiées, blocs ordonnés, conversion vers page_seo
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.models import Base, BlockDB, PageDB
from src.database import (
    db_add_block, db_create_page, db_get_page, db_list_gallery, db_list_published,
    gallery_items, is_new_account, jo, page_record, raw_block, sitemap_pages,
)


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def db():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


def _page(db, slug, published=True, **kw) -> PageDB:
    return db_create_page(db, PageDB(slug=slug, is_published=published, **kw))


# ── Pages ─────────────────────────────────────────────────────────────────

class TestPages:
    def test_get_published_only(self, db):
        _page(db, "anna")
        _page(db, "draft", published=False)
        assert db_get_page(db, "anna").slug == "anna"
        assert db_get_page(db, "draft") is None
        assert db_get_page(db, "draft", published_only=False).slug == "draft"

    def test_list_published_newest_first(self, db):
        now = datetime(2026, 3, 1)
        _page(db, "old", updated_at=now - timedelta(days=10))
        _page(db, "new", updated_at=now)
        _page(db, "hidden", published=False)
        assert [p.slug for p in db_list_published(db)] == ["new", "old"]

    def test_gallery_by_likes_and_niche(self, db):
        _page(db, "a", likes=3, niche="beauty")
        _page(db, "b", likes=10, niche="beauty")
        _page(db, "c", likes=50, niche="fitness")
        assert [p.slug for p in db_list_gallery(db)] == ["c", "b", "a"]
        assert [p.slug for p in db_list_gallery(db, niche="beauty")] == ["b", "a"]

    def test_gallery_limit(self, db):
        for i in range(15):
            _page(db, f"user{i}")
        assert len(db_list_gallery(db)) == 10


# ── Blocs ─────────────────────────────────────────────────────────────────

class TestBlocks:
    def test_blocks_appended_in_order(self, db):
        page = _page(db, "anna")
        db_add_block(db, page, "profile", {"name": "Анна"})
        db_add_block(db, page, "faq", {"items": [{"question": "Q?", "answer": "A"}]})
        assert [b.type for b in page.blocks] == ["profile", "faq"]
        assert [b.position for b in page.blocks] == [0, 1]

    def test_explicit_position(self, db):
        page = _page(db, "anna")
        db_add_block(db, page, "faq", {}, position=5)
        db_add_block(db, page, "profile", {"name": "Анна"}, position=0)
        assert [b.type for b in page.blocks] == ["profile", "faq"]

    def test_raw_block_shape(self, db):
        page = _page(db, "anna")
        block = db_add_block(db, page, "link", {"url": "https://a.kz"}, title="Site")
        raw = raw_block(block)
        assert raw["type"] == "link"
        assert raw["content"] == {"url": "https://a.kz"}
        assert raw["title"] == "Site"

    def test_corrupted_content_is_empty(self):
        assert jo("{pas du json") == {}
        assert jo("[1, 2]") == {}
        assert jo(None) == {}


# ── Conversion ────────────────────────────────────────────────────────────

class TestConversion:
    def test_page_record(self, db):
        page = _page(db, "anna", title="Анна Фото", niche="photo",
                     updated_at=datetime(2026, 2, 1, 10, 0))
        db_add_block(db, page, "profile", {"name": "Анна"})
        db_add_block(db, page, "link", {"title": "Site", "url": "https://a.kz"})
        record = page_record(page)
        assert record.slug == "anna"
        assert record.niche == "photo"
        assert [b.type for b in record.blocks] == ["profile", "link"]
        assert record.blocks[1].url == "https://a.kz"
        assert record.updated_at == datetime(2026, 2, 1, 10, 0)

    def test_new_account_window(self, db):
        now = datetime(2026, 3, 1)
        fresh = _page(db, "fresh", account_created_at=now - timedelta(days=3))
        old = _page(db, "old", account_created_at=now - timedelta(days=60))
        assert is_new_account(fresh, now) is True
        assert is_new_account(old, now) is False
        assert page_record(old, now).is_new_account is False

    def test_gallery_and_sitemap_items(self, db):
        _page(db, "anna", title="Анна", avatar_url="https://cdn/a.jpg")
        pages = db_list_published(db)
        assert gallery_items(pages)[0].title == "Анна"
        assert sitemap_pages(pages)[0].avatar_url == "https://cdn/a.jpg"

    def test_block_type_kept_in_storage(self, db):
        page = _page(db, "anna")
        db_add_block(db, page, "hologram", {"x": 1})
        stored = db.query(BlockDB).filter_by(page_id=page.id).one()
        assert stored.type == "hologram"
        assert page_record(page).blocks[0].type == "hologram"
