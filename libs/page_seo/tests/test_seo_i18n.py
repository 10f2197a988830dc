"""Tests i18n + texte — repli des langues, catalogues, placeholders, troncature."""
import html

import pytest
from page_seo.core.i18n import (
    catalog, get_text, lookup, normalize_lang, reload_cache, resolve_language,
    resolve_placeholders, t,
)
from page_seo.text import normalize_text, strip_markdown_links, truncate, truncate_words


def setup_function():
    reload_cache()


# ── get_text ─────────────────────────────────────────────────────────────────

def test_plain_string_passthrough():
    assert get_text("Привет", "en") == "Привет"


def test_requested_language_wins():
    assert get_text({"ru": "Привет", "en": "Hi"}, "en") == "Hi"


def test_missing_language_falls_back_to_ru():
    assert get_text({"en": "Hi", "ru": "Привет"}, "kk") == "Привет"


def test_missing_ru_falls_back_to_en():
    assert get_text({"en": "Hi"}, "kk") == "Hi"


def test_falls_back_to_first_non_empty_value():
    assert get_text({"de": "Hallo"}, "ru") == "Hallo"


def test_blank_values_are_skipped():
    assert get_text({"ru": "   ", "en": "Hi"}, "ru") == "Hi"


@pytest.mark.parametrize("value", [None, 42, [], {}, {"ru": 3}])
def test_malformed_values_resolve_to_empty(value):
    assert get_text(value, "ru") == ""


# ── Langues ──────────────────────────────────────────────────────────────────

def test_normalize_lang():
    assert normalize_lang("EN") == "en"
    assert normalize_lang("kk-KZ") == "kk"
    assert normalize_lang("de") == "ru"
    assert normalize_lang(None) == "ru"


def test_query_param_wins_over_header():
    assert resolve_language("kk", "en-US,en;q=0.9") == "kk"


def test_accept_language_order_is_respected():
    assert resolve_language(None, "ru-RU,ru;q=0.9,en;q=0.8") == "ru"
    assert resolve_language(None, "kk-KZ,en;q=0.5") == "kk"
    assert resolve_language(None, "de-DE,en;q=0.7") == "en"


def test_unsupported_query_param_uses_header():
    assert resolve_language("fr", "en") == "en"


def test_default_language():
    assert resolve_language(None, None) == "ru"
    assert resolve_language("", "de") == "ru"


# ── Catalogues ───────────────────────────────────────────────────────────────

def test_catalogs_share_the_same_sections():
    ru = catalog("ru")
    for lang in ("en", "kk"):
        assert set(catalog(lang)) == set(ru)
        assert set(catalog(lang)["sections"]) == set(ru["sections"])


def test_t_resolves_key_per_language():
    assert t("sections.faq", "en") == "FAQ"
    assert t("sections.faq", "ru") == "Вопросы и ответы"


def test_t_missing_key_placeholder():
    assert t("sections.inexistant", "en") == "[missing:sections.inexistant]"


def test_t_with_placeholders():
    assert t("crawler.page_fallback", "en", {"slug": "anna"}) == "Page @anna"


def test_lookup_returns_raw_nodes():
    faq = lookup("landing.faq", "en")
    assert isinstance(faq, list) and faq
    assert {"q", "a"} <= set(faq[0])


def test_lookup_default_when_missing():
    assert lookup("landing.nope", "en", default={}) == {}


def test_unknown_placeholder_left_intact():
    assert resolve_placeholders("{site} / {other}", {"site": "lnkmx.my"}) == "lnkmx.my / {other}"


# ── Texte ────────────────────────────────────────────────────────────────────

def test_strip_markdown_links():
    assert strip_markdown_links("Voir [mon site](https://a.b) ici") == "Voir mon site ici"


def test_normalize_text_collapses_whitespace():
    assert normalize_text("  a \n\n b\t c ") == "a b c"


def test_truncate_short_text_unchanged():
    assert truncate("Короткий текст", 160) == "Короткий текст"


def test_truncate_long_text_is_prefix_plus_ellipsis():
    text = "слово " * 60
    clean = normalize_text(text)
    out = truncate(text, 160)
    assert len(out) <= 160
    assert out.endswith("...")
    assert clean.startswith(out[:-3])


def test_truncate_words_prefers_word_boundary():
    assert truncate_words("Anna Kuznetsova Photographer", 20) == "Anna Kuznetsova"


def test_escaping_survives_unescape():
    from page_seo.renderer.html import escape_html
    raw = "<script>alert('x')</script> & \"q\""
    escaped = escape_html(raw)
    assert "<" not in escaped and '"' not in escaped
    assert html.unescape(escaped) == raw
