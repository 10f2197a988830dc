"""Tests projection noscript — sections, microdata, échappement, URLs sûres."""
import html

from page_seo import config
from page_seo.core.i18n import reload_cache
from page_seo.renderer.crawler import render_crawler_content


def setup_function():
    reload_cache()


BLOCKS = [
    {"type": "profile", "name": "Анна", "bio": "Фотограф в Алматы", "avatar": "https://cdn.lnkmx.my/a.jpg"},
    {"type": "text", "content": "Снимаю свадьбы и портреты"},
    {"type": "pricing", "currency": "KZT", "items": [{"name": "Портрет", "price": 15000}]},
    {"type": "event", "title": "Фотопрогулка", "startAt": "2026-06-01T09:00:00",
     "locationType": "offline", "locationValue": "Кок-Тобе"},
    {"type": "faq", "items": [{"question": "Цена?", "answer": "От 15 000"}]},
    {"type": "link", "title": "Портфолио", "url": "https://anna.kz"},
    {"type": "socials", "platforms": [{"name": "Instagram", "url": "https://instagram.com/anna"}]},
]


# ── Structure ────────────────────────────────────────────────────────────────

def test_wrapped_in_noscript_by_default():
    out = render_crawler_content(BLOCKS, "anna")
    assert out.startswith("<noscript>")
    assert out.endswith("</noscript>")


def test_unwrapped_article():
    out = render_crawler_content(BLOCKS, "anna", wrap=False)
    assert out.startswith('<article class="crawler-content" itemscope itemtype="https://schema.org/Person">')


def test_header_and_sections_present():
    out = render_crawler_content(BLOCKS, "anna", language="en", niche="Photographer")
    assert '<h1 itemprop="name">Анна</h1>' in out
    assert '<p itemprop="jobTitle" class="role">Photographer</p>' in out
    for anchor in ("about", "answer", "key-facts", "services", "events", "faq", "contacts", "socials"):
        assert f'id="{anchor}"' in out
    assert "<h2>FAQ</h2>" in out


def test_microdata():
    out = render_crawler_content(BLOCKS, "anna")
    assert 'itemtype="https://schema.org/Service"' in out
    assert '<span itemprop="price">15000</span>' in out
    assert '<meta itemprop="priceCurrency" content="KZT">' in out
    assert 'itemtype="https://schema.org/FAQPage"' in out
    assert '<time itemprop="startDate" datetime="2026-06-01T09:00:00">2026-06-01</time>' in out
    assert '<address itemprop="location">Кок-Тобе</address>' in out
    assert '<link itemprop="sameAs" href="https://instagram.com/anna">' in out


def test_undated_event_still_listed():
    out = render_crawler_content([{"type": "event", "title": "Без даты", "startAt": "2026-13-45"}], "anna")
    assert '<h3 itemprop="name">Без даты</h3>' in out
    assert 'itemprop="startDate"' not in out


def test_missing_sections_omitted():
    out = render_crawler_content([{"type": "profile", "name": "Анна", "bio": "Фотограф"}], "anna")
    for anchor in ("faq", "events", "services", "contacts", "socials", "expertise"):
        assert f'id="{anchor}"' not in out


def test_empty_page_uses_slug_fallback():
    out = render_crawler_content([], "anna", language="en")
    assert '<h1 itemprop="name">Page @anna</h1>' in out


def test_footer_source_context():
    out = render_crawler_content(BLOCKS, "anna", updated_at="2026-01-01T00:00:00Z")
    assert "slug=anna; updated_at=2026-01-01T00:00:00+00:00; content_hash=" in out
    assert f'href="{config.BASE_URL}/anna"' in out


# ── Sécurité ─────────────────────────────────────────────────────────────────

def test_user_content_is_escaped():
    hostile = '<script>alert("x")</script>'
    out = render_crawler_content([
        {"type": "profile", "name": hostile, "bio": hostile},
        {"type": "faq", "items": [{"question": hostile, "answer": hostile}]},
    ], "anna")
    assert "<script>" not in out
    assert html.escape(hostile, quote=True).replace("&#x27;", "&#039;") in out


def test_unsafe_hrefs_dropped():
    out = render_crawler_content([
        {"type": "link", "title": "js", "url": "javascript:alert(1)"},
        {"type": "link", "title": "mail", "url": "mailto:anna@anna.kz"},
    ], "anna")
    assert "javascript:" not in out
    assert 'href="mailto:anna@anna.kz"' in out


def test_deterministic():
    assert render_crawler_content(BLOCKS, "anna") == render_crawler_content(BLOCKS, "anna")
