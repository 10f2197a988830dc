"""Tests décision bot / SSR — user-agents, formes de chemin, routes réservées."""
import pytest
from page_seo.bots import RESERVED_SLUGS, is_search_bot, is_ssr_path, normalize_path, should_return_ssr

CHROME = ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
          "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36")
GOOGLEBOT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"


# ── User-agents ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("ua", [
    GOOGLEBOT,
    "GPTBot/1.0",
    "Mozilla/5.0 AppleWebKit/537.36 (KHTML, like Gecko; compatible; ClaudeBot/1.0; +claudebot@anthropic.com)",
    "Mozilla/5.0 (compatible; YandexBot/3.0; +http://yandex.com/bots)",
    "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)",
    "TelegramBot (like TwitterBot)",
    "PerplexityBot/1.0",
    "SomeRandomCrawler/2.0",
])
def test_known_bots(ua):
    assert is_search_bot(ua) is True


@pytest.mark.parametrize("ua", [
    CHROME,
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0",
    "Mozilla/5.0 Chrome",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148",
    "",
    None,
])
def test_browsers_are_not_bots(ua):
    assert is_search_bot(ua) is False


def test_case_insensitive():
    assert is_search_bot("GOOGLEBOT") is True


# ── Chemins ──────────────────────────────────────────────────────────────────

def test_normalize_path():
    assert normalize_path("/anna/?lang=en") == "/anna"
    assert normalize_path("/anna#faq") == "/anna"
    assert normalize_path("") == "/"
    assert normalize_path(None) == "/"
    assert normalize_path("/") == "/"


@pytest.mark.parametrize("path", ["/", "/gallery", "/gallery?niche=beauty", "/anna", "/anna-k-2", "/anna/"])
def test_ssr_paths(path):
    assert is_ssr_path(path) is True


@pytest.mark.parametrize("path", [
    "/dashboard", "/admin", "/api", "/auth", "/pricing", "/editor",
    "/anna/edit", "/api/seo/anna", "/Anna", "/anna_k", "/sitemap.xml",
])
def test_non_ssr_paths(path):
    assert is_ssr_path(path) is False


def test_reserved_slugs_cover_app_routes():
    assert {"dashboard", "admin", "auth", "api", "crm"} <= RESERVED_SLUGS


# ── Décision ─────────────────────────────────────────────────────────────────

def test_bot_on_gallery_gets_ssr():
    assert should_return_ssr({"user-agent": "Googlebot"}, "/gallery") is True


def test_bot_on_dashboard_gets_spa():
    assert should_return_ssr({"user-agent": "Googlebot"}, "/dashboard") is False


def test_browser_on_root_gets_spa():
    assert should_return_ssr({"user-agent": CHROME}, "/") is False
    assert should_return_ssr({"user-agent": "Mozilla/5.0 Chrome"}, "/") is False


def test_header_lookup_is_case_insensitive():
    assert should_return_ssr({"User-Agent": GOOGLEBOT}, "/anna") is True


def test_missing_or_invalid_headers():
    assert should_return_ssr({}, "/anna") is False
    assert should_return_ssr(None, "/anna") is False
