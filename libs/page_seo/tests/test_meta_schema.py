"""Tests meta + Schema.org — title, description, canonical, JSON-LD, source context."""
import json

from page_seo import config
from page_seo.anchors import generate_key_facts, generate_section_anchors
from page_seo.core.i18n import reload_cache
from page_seo.core.schemas import QualityGateResult
from page_seo.entities import extract_entity_links, is_social_url, normalize_url
from page_seo.extractor import extract_profile_from_blocks
from page_seo.meta import build_meta_description, build_title, generate_page_meta
from page_seo.renderer.html import json_ld_dumps
from page_seo.schema_org import (
    generate_content_hash, generate_schemas, generate_source_context, to_json_ld_graph,
)


def setup_function():
    reload_cache()


PASSED = QualityGateResult(score=100, passed=True)
FAILED = QualityGateResult(score=30, passed=False, reasons=["missing_bio"])

BLOCKS = [
    {"id": "p1", "type": "profile", "name": "Анна", "bio": "Фотограф. [Портфолио](https://anna.kz) и съёмки в Алматы",
     "avatar": "https://cdn.lnkmx.my/anna.jpg"},
    {"id": "s1", "type": "socials", "platforms": [{"name": "Instagram", "url": "https://www.Instagram.com/anna/"}]},
    {"id": "l1", "type": "link", "title": "GitHub", "url": "https://github.com/anna"},
    {"id": "pr1", "type": "pricing", "currency": "KZT", "items": [
        {"name": "Портретная съёмка", "price": 15000},
        {"name": "Свадьба", "price": "120000"},
    ]},
    {"id": "f1", "type": "faq", "items": [{"question": "Сколько стоит?", "answer": "От 15 000 ₸"}]},
    {"id": "e1", "type": "event", "title": "Фотопрогулка", "startAt": "2026-06-01T09:00:00",
     "locationType": "offline", "locationValue": "Алматы, Кок-Тобе", "isPaid": True, "price": 5000},
]


def _meta(blocks=BLOCKS, gate=PASSED, lang="ru", slug="anna"):
    profile = extract_profile_from_blocks(blocks, lang)
    return profile, generate_page_meta(profile, blocks, slug, gate, lang)


# ── Meta ─────────────────────────────────────────────────────────────────────

def test_title_with_brand_suffix():
    assert build_title("Анна", "anna") == "Анна | lnkmx"


def test_title_falls_back_to_slug():
    assert build_title("", "anna") == "@anna | lnkmx"


def test_long_title_bounded():
    title = build_title("Анна " * 30, "anna")
    assert len(title) <= config.TITLE_MAX_LENGTH
    assert title.endswith("| lnkmx")


def test_description_strips_markdown_and_is_bounded():
    _, meta = _meta()
    assert "](" not in meta.description
    assert "Портфолио" in meta.description
    assert len(meta.description) <= 160


def test_long_description_is_prefix_plus_ellipsis():
    bio = "Фотограф " * 40
    out = build_meta_description(bio)
    assert len(out) <= 160
    assert out.endswith("...")
    assert " ".join(bio.split()).startswith(out[:-3])


def test_short_description_gets_site_suffix():
    _, meta = _meta([{"type": "profile", "name": "Анна", "bio": "Фотограф"}], lang="en")
    assert meta.description.startswith("Фотограф - Mini-site on lnkmx.my")


def test_empty_bio_uses_auto_about():
    _, meta = _meta([{"type": "profile", "name": "Anna"}, {"type": "event", "title": "Walk"}], lang="en")
    assert meta.description.startswith("Anna • Events")


def test_canonical_and_robots():
    _, meta = _meta(gate=FAILED)
    assert meta.canonical == f"{config.BASE_URL}/anna"
    assert "?" not in meta.canonical
    assert meta.robots == "noindex, nofollow"
    _, meta = _meta(gate=PASSED)
    assert meta.robots == "index, follow"


def test_og_image_and_locale():
    _, meta = _meta(lang="kk")
    assert meta.og_image == "https://cdn.lnkmx.my/anna.jpg"
    assert meta.og_locale == "kk_KZ"
    _, meta = _meta([{"type": "profile", "name": "A"}], lang="en")
    assert meta.og_image == config.DEFAULT_OG_IMAGE


def test_meta_is_deterministic():
    assert _meta()[1] == _meta()[1]


# ── Entités + ancres ─────────────────────────────────────────────────────────

def test_entity_links_normalized_and_deduplicated():
    blocks = BLOCKS + [{"type": "link", "url": "https://www.instagram.com/anna"}]
    entity = extract_entity_links(blocks)
    assert entity.same_as == ["https://www.instagram.com/anna", "https://github.com/anna"]
    assert entity.knows_about == ["Портретная съёмка", "Свадьба"]


def test_is_social_url():
    assert is_social_url("https://t.me/anna")
    assert is_social_url("https://m.youtube.com/@anna")
    assert not is_social_url("https://anna.kz")
    assert normalize_url("https://GitHub.com/anna/?tab=repos") == "https://github.com/anna"


def test_section_anchors_first_occurrence():
    sections = generate_section_anchors(BLOCKS, "en")
    assert [s.anchor for s in sections] == ["about", "contacts", "pricing", "faq", "events"]
    assert sections[0].id == "p1"
    assert sections[3].label == "FAQ"


def test_key_facts():
    profile = extract_profile_from_blocks(BLOCKS, "en")
    facts = generate_key_facts(profile, BLOCKS, "en", niche="Фотограф")
    by_label = {f.label: f.value for f in facts}
    assert by_label["Name"] == "Анна"
    assert by_label["Specialization"] == "Фотограф"
    assert by_label["Prices from"] == "15000 KZT"
    assert len(facts) <= config.MAX_KEY_FACTS


# ── Schema.org ───────────────────────────────────────────────────────────────

def _schemas(blocks=BLOCKS, gate=PASSED, **kwargs):
    profile, meta = _meta(blocks, gate)
    return generate_schemas(profile, blocks, "anna", meta, "ru", **kwargs)


def test_main_entity():
    main = _schemas().main_entity
    assert main["@type"] == "Person"
    assert main["@id"] == f"{config.BASE_URL}/anna#main"
    assert main["name"] == "Анна"
    assert "https://github.com/anna" in main["sameAs"]
    assert main["knowsAbout"] == ["Портретная съёмка", "Свадьба"]


def test_web_page_links_to_main_entity():
    schemas = _schemas(updated_at="2026-02-01T12:00:00Z")
    page = schemas.web_page
    assert page["mainEntity"] == {"@id": schemas.main_entity["@id"]}
    assert page["dateModified"] == "2026-02-01T12:00:00+00:00"
    assert page["inLanguage"] == "ru"
    assert {"@type": "WebPageElement", "@id": f"{config.BASE_URL}/anna#faq",
            "name": "Вопросы и ответы"} in page["hasPart"]


def test_web_page_without_date_omits_field():
    assert "dateModified" not in _schemas().web_page


def test_breadcrumb():
    items = _schemas().breadcrumb["itemListElement"]
    assert [i["position"] for i in items] == [1, 2]
    assert items[1]["item"] == f"{config.BASE_URL}/anna"


def test_faq_schema_present_with_faq_block():
    faq = _schemas().faq
    assert faq["@type"] == "FAQPage"
    assert faq["mainEntity"][0]["acceptedAnswer"]["text"] == "От 15 000 ₸"


def test_faq_schema_omitted_without_faq_block():
    blocks = [b for b in BLOCKS if b["type"] != "faq"]
    schemas = _schemas(blocks)
    assert schemas.faq is None
    assert "faq" not in schemas.model_dump(exclude_none=True)


def test_faq_schema_kept_on_noindex_page():
    assert _schemas(gate=FAILED).faq is not None


def test_event_schema():
    event = _schemas().events[0]
    assert event["@type"] == "Event"
    assert event["startDate"] == "2026-06-01T09:00:00"
    assert event["location"] == {"@type": "Place", "name": "Алматы, Кок-Тобе", "address": "Алматы, Кок-Тобе"}
    assert event["offers"]["price"] == 5000
    assert event["eventAttendanceMode"].endswith("OfflineEventAttendanceMode")


def test_event_without_start_date_has_no_schema():
    blocks = BLOCKS + [
        {"type": "event", "title": "Без даты", "startAt": "2026-13-45"},
        {"type": "event", "title": "Тоже без даты"},
    ]
    events = _schemas(blocks).events
    assert [e["name"] for e in events] == ["Фотопрогулка"]
    assert all("startDate" in e for e in events)


def test_service_schemas():
    services = _schemas().services
    assert [s["name"] for s in services] == ["Портретная съёмка", "Свадьба"]
    assert services[1]["offers"] == {"@type": "Offer", "price": 120000, "priceCurrency": "KZT"}


def test_empty_optional_parts_are_none():
    schemas = _schemas([{"type": "profile", "name": "Анна"}])
    assert schemas.events is None
    assert schemas.services is None


def test_services_capped():
    blocks = [{"type": "pricing", "items": [{"name": f"Услуга {i}"} for i in range(30)]}]
    assert len(_schemas(blocks).services) == config.MAX_INDEXED_SCHEMAS


def test_json_ld_round_trip():
    schemas = _schemas()
    for part in (schemas.web_page, schemas.main_entity, schemas.faq):
        assert json.loads(json_ld_dumps(part)) == part


def test_json_ld_dump_is_script_safe():
    out = json_ld_dumps({"name": "</script><b>&"})
    assert "</script>" not in out
    assert json.loads(out) == {"name": "</script><b>&"}


def test_graph_has_single_context():
    graph = to_json_ld_graph(_schemas())
    assert graph["@context"] == "https://schema.org"
    assert all("@context" not in part for part in graph["@graph"])
    assert len(graph["@graph"]) == 3 + 1 + 1 + 2


# ── Source context ───────────────────────────────────────────────────────────

def test_source_context_parts():
    assert generate_source_context("anna") == "slug=anna"
    assert generate_source_context("anna", "2026-01-01T00:00:00Z", "abc123") == \
        "slug=anna; updated_at=2026-01-01T00:00:00+00:00; content_hash=abc123"


def test_content_hash_stable_and_sensitive():
    h = generate_content_hash(BLOCKS)
    assert len(h) == 12
    assert generate_content_hash(BLOCKS) == h
    assert generate_content_hash(BLOCKS[:-1]) != h
