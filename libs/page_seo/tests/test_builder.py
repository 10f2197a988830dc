"""Tests pipeline complet — SeoBuilder, build_seo_bundle, cas de bout en bout."""
from page_seo import (
    SeoBuilder, build_seo_bundle, config, evaluate_quality_gate,
    extract_profile_from_blocks, generate_page_meta, generate_schemas,
)
from page_seo.core.i18n import reload_cache
from page_seo.core.schemas import PageRecord


def setup_function():
    reload_cache()


ANNA_FAQ_ONLY = [
    {"type": "profile", "content": {"name": "Анна", "bio": ""}},
    {"type": "faq", "content": {"items": [{"question": "Сколько стоит съёмка?", "answer": "От 15 000 ₸"}]}},
]


# ── Bout en bout ─────────────────────────────────────────────────────────────

def test_name_and_faq_only_is_noindex_but_keeps_faq():
    bundle = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "ru")
    assert bundle.quality_gate.passed is False
    assert bundle.meta.robots == "noindex, nofollow"
    assert bundle.schemas.faq is not None
    assert bundle.schemas.faq["mainEntity"][0]["name"] == "Сколько стоит съёмка?"


def test_bundle_is_reproducible():
    first = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "ru", updated_at="2026-01-01T00:00:00Z")
    second = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "ru", updated_at="2026-01-01T00:00:00Z")
    assert first == second


def test_summary_falls_back_to_auto_about():
    bundle = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "ru")
    assert bundle.summary.startswith("Анна")


def test_source_context_has_slug_date_and_hash():
    bundle = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "ru", updated_at="2026-01-01T00:00:00Z")
    parts = bundle.source_context.split("; ")
    assert parts[0] == "slug=anna"
    assert parts[1] == "updated_at=2026-01-01T00:00:00+00:00"
    assert parts[2].startswith("content_hash=")


def test_unknown_language_normalized():
    bundle = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "de")
    assert bundle.language == "ru"
    assert bundle.meta.og_locale == "ru_RU"


def test_sections_and_key_facts_filled():
    bundle = build_seo_bundle(ANNA_FAQ_ONLY, "anna", "en")
    assert [s.anchor for s in bundle.sections] == ["about", "faq"]
    assert any(f.label == "Name" and f.value == "Анна" for f in bundle.key_facts)


def test_empty_page():
    bundle = build_seo_bundle([], "anna", "en")
    assert bundle.profile.name == ""
    assert bundle.meta.title == "@anna | lnkmx"
    assert bundle.quality_gate.score == 0
    assert bundle.schemas.faq is None


# ── Enregistrement de page ───────────────────────────────────────────────────

def test_record_fields_complete_missing_profile():
    record = PageRecord(slug="anna", title="Анна Фото", description="Свадебный фотограф",
                        avatar_url="https://cdn.lnkmx.my/a.jpg", blocks=[{"type": "link", "url": "https://a.kz"}])
    profile = SeoBuilder().profile_for(record, "ru")
    assert profile.name == "Анна Фото"
    assert profile.bio == "Свадебный фотограф"
    assert profile.avatar == "https://cdn.lnkmx.my/a.jpg"


def test_blocks_win_over_record_fields():
    record = PageRecord(slug="anna", title="Autre", blocks=[{"type": "profile", "name": "Анна"}])
    assert SeoBuilder().profile_for(record, "ru").name == "Анна"


def test_new_account_grace():
    blocks = [{"type": "profile", "name": "Анна", "bio": "Фотограф"},
              {"type": "text", "content": "a"}, {"type": "text", "content": "b"}]
    assert build_seo_bundle(blocks, "anna").meta.robots == config.ROBOTS_NOINDEX
    assert build_seo_bundle(blocks, "anna", is_new_account=True).meta.robots == config.ROBOTS_INDEX


def test_record_with_invalid_date():
    record = PageRecord(slug="anna", blocks=ANNA_FAQ_ONLY, updated_at="hier")
    bundle = SeoBuilder().build(record, "ru")
    assert record.updated_at is None
    assert bundle.source_context.count(";") == 1


def test_bundle_serializes_without_empty_parts():
    data = build_seo_bundle(ANNA_FAQ_ONLY, "anna").model_dump(mode="json", exclude_none=True)
    assert "events" not in data["schemas"]
    assert "services" not in data["schemas"]
    assert data["schemas"]["faq"]["@type"] == "FAQPage"


def test_flat_blocks_gate_and_schemas_are_independent():
    blocks = [
        {"type": "profile", "name": "Анна", "bio": ""},
        {"type": "faq", "items": [{"question": "Q1", "answer": "A1"}]},
    ]
    profile = extract_profile_from_blocks(blocks)
    gate = evaluate_quality_gate(blocks, name=profile.name, bio=profile.bio, is_new_account=False)
    meta = generate_page_meta(profile, blocks, "anna", gate)
    schemas = generate_schemas(profile, blocks, "anna", meta)
    assert meta.robots == "noindex, nofollow"
    assert schemas.faq["mainEntity"] == [
        {"@type": "Question", "name": "Q1", "acceptedAnswer": {"@type": "Answer", "text": "A1"}},
    ]
