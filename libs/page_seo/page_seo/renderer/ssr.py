"""
Documents SSR statiques pour les bots — landing, galerie, page profil, 404.

Chaque builder renvoie un document complet (doctype → </html>).
Textes : catalogues i18n par langue, repli ru.
Tout texte interpolé passe par escape_html, y compris les titres de la galerie.
JSON-LD : un seul <script type="application/ld+json"> avec @graph.
"""
import logging
from typing import Any, Iterable, List, Optional
from urllib.parse import quote

from .. import config
from ..builder import SeoBuilder
from ..core.i18n import lookup, normalize_lang, t
from ..core.schemas import GalleryItem, PageRecord, SeoBundle
from ..head import HeadDocument, HeadTagManager
from ..text import truncate
from .crawler import render_crawler_content
from .html import build_hreflang_links, escape_html, json_ld_dumps, og_locale, safe_url

log = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"

_LANDING_CSS = """
    body { font-family: system-ui, -apple-system, sans-serif; margin: 0; color: #111; background: #fff; line-height: 1.6; }
    main { max-width: 800px; margin: 0 auto; padding: 32px 20px; }
    h1 { font-size: 2rem; margin-bottom: 0.5rem; line-height: 1.2; }
    h2 { margin-top: 2rem; font-size: 1.4rem; color: #333; }
    ul { padding-left: 1.2rem; }
    li { margin-bottom: 0.5rem; }
    .answer-block { background: #f8f9fa; border-left: 4px solid #0f62fe; padding: 16px; margin: 1.5rem 0; border-radius: 0 8px 8px 0; }
    .key-facts { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 12px; margin: 1rem 0; }
    .key-fact { background: #f0f4f8; padding: 12px; border-radius: 8px; font-size: 0.95rem; }
    .faq dt { font-weight: 600; margin-top: 1rem; }
    .faq dd { margin-left: 0; margin-bottom: 0.5rem; color: #555; }
    .cta { margin-top: 1.5rem; }
    .cta a { display: inline-block; padding: 14px 24px; border-radius: 999px; background: #0f62fe; color: #fff; text-decoration: none; font-weight: 600; }
    footer { margin-top: 3rem; padding-top: 1.5rem; border-top: 1px solid #eee; text-align: center; color: #666; }
"""

_GALLERY_CSS = """
    body { font-family: system-ui, -apple-system, sans-serif; margin: 0; color: #111; background: #fff; line-height: 1.6; }
    main { max-width: 960px; margin: 0 auto; padding: 32px 20px; }
    h1 { font-size: 2rem; margin-bottom: 0.5rem; }
    h2 { margin-top: 2rem; font-size: 1.3rem; }
    ul { padding-left: 1.2rem; }
    .answer-block { background: #f8f9fa; border-left: 4px solid #0f62fe; padding: 16px; margin: 1.5rem 0; border-radius: 0 8px 8px 0; }
    .key-facts { display: flex; flex-wrap: wrap; gap: 8px; margin: 1rem 0; }
    .key-fact { background: #e8f0fe; padding: 8px 12px; border-radius: 20px; font-size: 0.9rem; }
    .grid { display: grid; gap: 16px; grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); margin-top: 1.5rem; }
    .card { border: 1px solid #e5e7eb; border-radius: 12px; padding: 16px; background: #fff; }
    .card h3 { margin: 0 0 8px; font-size: 1.1rem; }
    .card p { margin: 0; color: #666; font-size: 0.9rem; }
    .card a { color: #0f62fe; text-decoration: none; font-weight: 600; }
    .card img { width: 48px; height: 48px; border-radius: 50%; object-fit: cover; margin-bottom: 8px; }
    .niche-tag { display: inline-block; background: #f0f4f8; padding: 4px 10px; border-radius: 12px; font-size: 0.8rem; color: #555; margin-top: 8px; }
    footer { margin-top: 3rem; padding-top: 1.5rem; border-top: 1px solid #eee; text-align: center; color: #666; }
"""

_PAGE_CSS = """
    body { font-family: Inter, -apple-system, sans-serif; padding: 20px; max-width: 800px; margin: 0 auto; line-height: 1.6; }
    h1 { font-size: 1.75rem; margin-bottom: 0.5rem; }
    h2 { font-size: 1.25rem; margin-top: 1.5rem; border-bottom: 1px solid #eee; padding-bottom: 0.5rem; }
    .role { color: #666; font-size: 1rem; margin-bottom: 1rem; }
    header img { width: 96px; height: 96px; border-radius: 50%; margin-bottom: 1rem; }
    ul { padding-left: 1.5rem; }
    li { margin-bottom: 0.5rem; }
    a { color: #0066cc; text-decoration: none; }
    dt { font-weight: 500; margin-top: 1rem; }
    dd { color: #444; margin-left: 1rem; }
    footer { margin-top: 2rem; padding-top: 1rem; border-top: 1px solid #eee; font-size: 0.875rem; color: #666; }
"""


def _list_items(values: Iterable[Any]) -> str:
    return "".join(f"<li>{escape_html(v)}</li>" for v in values)


def _key_facts(values: Iterable[Any], tag: str) -> str:
    return "".join(f'<{tag} class="key-fact">✓ {escape_html(v)}</{tag}>' for v in values)


def _social_meta(title: str, description: str, url: str, lang: str, og_type: str = "website") -> str:
    """OG + Twitter communs aux documents statiques."""
    return f"""<meta property="og:type" content="{og_type}">
  <meta property="og:title" content="{escape_html(title)}">
  <meta property="og:description" content="{escape_html(description)}">
  <meta property="og:url" content="{escape_html(url)}">
  <meta property="og:image" content="{escape_html(config.DEFAULT_OG_IMAGE)}">
  <meta property="og:locale" content="{og_locale(lang)}">
  <meta property="og:site_name" content="{escape_html(config.BRAND_NAME)}">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="{escape_html(title)}">
  <meta name="twitter:description" content="{escape_html(description)}">
  <meta name="twitter:image" content="{escape_html(config.DEFAULT_OG_IMAGE)}">
  <meta name="twitter:site" content="{escape_html(config.TWITTER_SITE)}">"""


# ── Landing ─────────────────────────────────────────────────────────────────

def build_landing_html(lang: str, base_url: str = config.BASE_URL) -> str:
    """Landing : WebSite + Organization + SoftwareApplication + FAQPage."""
    lang = normalize_lang(lang)
    base_url = base_url.rstrip("/")
    c = lookup("landing", lang, {})
    home = f"{base_url}/"

    json_ld = {
        "@context": SCHEMA_CONTEXT,
        "@graph": [
            {
                "@type": "WebSite",
                "@id": f"{base_url}/#website",
                "name": config.BRAND_NAME,
                "url": home,
                "inLanguage": lang,
                "potentialAction": {
                    "@type": "SearchAction",
                    "target": f"{base_url}/{{username}}",
                    "query-input": "required name=username",
                },
            },
            {
                "@type": "Organization",
                "@id": f"{base_url}/#organization",
                "name": config.BRAND_NAME,
                "url": home,
                "logo": f"{base_url}/favicon.jpg",
                "areaServed": c.get("where_list", []),
                "sameAs": ["https://t.me/lnkmx_app"],
            },
            {
                "@type": "SoftwareApplication",
                "@id": f"{base_url}/#software",
                "name": c.get("h1", config.BRAND_NAME),
                "applicationCategory": "BusinessApplication",
                "operatingSystem": "Web",
                "description": c.get("description", ""),
                "featureList": c.get("key_facts", []),
                "offers": [
                    {"@type": "Offer", "name": "Free", "price": "0", "priceCurrency": "USD"},
                    {"@type": "Offer", "name": "Pro", "price": "5", "priceCurrency": "USD"},
                ],
            },
            {
                "@type": "FAQPage",
                "@id": f"{base_url}/#faq",
                "mainEntity": [
                    {"@type": "Question", "name": item["q"],
                     "acceptedAnswer": {"@type": "Answer", "text": item["a"]}}
                    for item in c.get("faq", [])
                ],
            },
        ],
    }

    answers = "".join(
        f"<dt>{escape_html(item['q'])}</dt><dd>{escape_html(item['a'])}</dd>"
        for item in c.get("answers", [])
    )
    faq = "".join(
        f'<div itemscope itemprop="mainEntity" itemtype="https://schema.org/Question">'
        f'<dt itemprop="name">{escape_html(item["q"])}</dt>'
        f'<dd itemscope itemprop="acceptedAnswer" itemtype="https://schema.org/Answer">'
        f'<span itemprop="text">{escape_html(item["a"])}</span></dd></div>'
        for item in c.get("faq", [])
    )
    title = c.get("title", config.DEFAULT_TITLE)
    description = c.get("description", "")

    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape_html(title)}</title>
  <meta name="description" content="{escape_html(description)}">
  <meta name="robots" content="index, follow, max-image-preview:large, max-snippet:-1">
  <link rel="canonical" href="{escape_html(home)}">
  {build_hreflang_links(base_url, "/")}
  {_social_meta(title, description, home, lang)}
  <meta name="ai-summary" content="{escape_html(c.get("answer_block", ""))}">
  <script type="application/ld+json">{json_ld_dumps(json_ld)}</script>
  <style>{_LANDING_CSS}  </style>
</head>
<body>
  <main>
    <header>
      <h1>{escape_html(c.get("h1", ""))}</h1>
      <p>{escape_html(c.get("subtitle", ""))}</p>
      <div class="cta"><a href="{escape_html(base_url)}/auth">{escape_html(c.get("cta", ""))}</a></div>
    </header>
    <section class="answer-block" aria-label="{escape_html(t("common.summary_label", lang))}">
      <p><strong>{escape_html(t("common.summary_label", lang))}:</strong> {escape_html(c.get("answer_block", ""))}</p>
    </section>
    <section aria-label="{escape_html(c.get("key_facts_title", ""))}">
      <h2>{escape_html(c.get("key_facts_title", ""))}</h2>
      <div class="key-facts">{_key_facts(c.get("key_facts", []), "div")}</div>
    </section>
    <section>
      <h2>{escape_html(c.get("about_title", ""))}</h2>
      <p>{escape_html(c.get("about_body", ""))}</p>
    </section>
    <section>
      <h2>{escape_html(c.get("for_title", ""))}</h2>
      <ul>{_list_items(c.get("for_list", []))}</ul>
    </section>
    <section>
      <h2>{escape_html(c.get("where_title", ""))}</h2>
      <ul>{_list_items(c.get("where_list", []))}</ul>
    </section>
    <section>
      <h2>{escape_html(c.get("answers_title", ""))}</h2>
      <dl class="faq">{answers}</dl>
    </section>
    <section id="faq" itemscope itemtype="https://schema.org/FAQPage">
      <h2>{escape_html(c.get("faq_title", ""))}</h2>
      <dl class="faq">{faq}</dl>
    </section>
    <footer>
      <p><a href="{escape_html(home)}">{escape_html(config.SITE_HOST)}</a></p>
      <p><small>{escape_html(t("common.footer_tagline", lang))}</small></p>
    </footer>
  </main>
</body>
</html>"""


# ── Galerie ─────────────────────────────────────────────────────────────────

def _gallery_items(items: Optional[Iterable[Any]]) -> List[GalleryItem]:
    out = []
    for item in items or []:
        out.append(item if isinstance(item, GalleryItem) else GalleryItem.model_validate(item))
        if len(out) >= config.GALLERY_LIMIT:
            break
    return out


def build_gallery_html(lang: str, base_url: str = config.BASE_URL,
                       items: Optional[Iterable[Any]] = None, niche: Optional[str] = None) -> str:
    """
    Galerie : CollectionPage + ItemList.
    Grille visible et ItemList bornées à la même limite (GALLERY_LIMIT).
    """
    lang = normalize_lang(lang)
    base_url = base_url.rstrip("/")
    c = lookup("gallery", lang, {})
    shown = _gallery_items(items)

    path = f"/gallery?niche={quote(niche, safe='')}" if niche else "/gallery"
    canonical = f"{base_url}{path}"
    title = f"{c.get('title', '')} - {niche}" if niche else c.get("title", "")
    description = c.get("description", "")

    json_ld = {
        "@context": SCHEMA_CONTEXT,
        "@graph": [
            {
                "@type": "CollectionPage",
                "@id": canonical,
                "name": title,
                "description": description,
                "url": canonical,
                "inLanguage": lang,
                "isPartOf": {"@id": f"{base_url}/#website"},
            },
            {
                "@type": "ItemList",
                "@id": f"{canonical}#itemlist",
                "numberOfItems": len(shown),
                "itemListElement": [
                    {
                        "@type": "ListItem",
                        "position": i + 1,
                        "url": f"{base_url}/{item.slug}",
                        "name": item.title or item.slug,
                        "image": safe_url(item.avatar_url, ("http", "https")) or config.DEFAULT_OG_IMAGE,
                    }
                    for i, item in enumerate(shown)
                ],
            },
        ],
    }

    cards = []
    for item in shown:
        name = item.title or f"@{item.slug}"
        avatar = safe_url(item.avatar_url, ("http", "https"))
        card = ['<article class="card" itemscope itemtype="https://schema.org/Person">']
        if avatar:
            card.append(f'<img src="{escape_html(avatar)}" alt="{escape_html(name)}" loading="lazy" itemprop="image">')
        card.append(f'<h3 itemprop="name"><a href="{escape_html(base_url)}/{escape_html(quote(item.slug))}" '
                    f'itemprop="url">{escape_html(name)}</a></h3>')
        card.append(f'<p itemprop="description">{escape_html(truncate(item.description or "", config.GALLERY_CARD_TEXT))}</p>')
        if item.niche:
            card.append(f'<span class="niche-tag">{escape_html(item.niche)}</span>')
        card.append("</article>")
        cards.append("".join(card))

    h1 = escape_html(c.get("h1", ""))
    if niche:
        h1 += f" - {escape_html(niche)}"

    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape_html(title)}</title>
  <meta name="description" content="{escape_html(description)}">
  <meta name="robots" content="index, follow">
  <link rel="canonical" href="{escape_html(canonical)}">
  {build_hreflang_links(base_url, path)}
  {_social_meta(title, description, canonical, lang)}
  <meta name="ai-summary" content="{escape_html(c.get("answer_block", ""))}">
  <script type="application/ld+json">{json_ld_dumps(json_ld)}</script>
  <style>{_GALLERY_CSS}  </style>
</head>
<body>
  <main>
    <header>
      <h1>{h1}</h1>
      <p>{escape_html(c.get("subtitle", ""))}</p>
    </header>
    <section class="answer-block" aria-label="{escape_html(t("common.summary_label", lang))}">
      <p><strong>{escape_html(t("common.summary_label", lang))}:</strong> {escape_html(c.get("answer_block", ""))}</p>
    </section>
    <section aria-label="{escape_html(c.get("key_facts_title", ""))}">
      <h2>{escape_html(c.get("key_facts_title", ""))}</h2>
      <div class="key-facts">{_key_facts(c.get("key_facts", []), "span")}</div>
    </section>
    <section>
      <h2>{escape_html(c.get("highlights_title", ""))}</h2>
      <ul>{_list_items(c.get("highlights", []))}</ul>
    </section>
    <section>
      <h2>{escape_html(c.get("location_title", ""))}</h2>
      <p>{escape_html(c.get("location_body", ""))}</p>
    </section>
    <section aria-label="{escape_html(c.get("top_profiles_title", ""))}">
      <h2>{escape_html(c.get("top_profiles_title", ""))}</h2>
      <div class="grid">
        {"".join(cards)}
      </div>
    </section>
    <footer>
      <p><a href="{escape_html(base_url)}/">{escape_html(config.SITE_HOST)}</a></p>
    </footer>
  </main>
</body>
</html>"""


# ── Page profil ─────────────────────────────────────────────────────────────

def build_page_html(record: PageRecord, lang: str, bundle: Optional[SeoBundle] = None) -> str:
    """
    Document complet d'une page profil : head calculé par le pipeline
    dans un HeadDocument propre à la requête, corps = projection sémantique.
    """
    lang = normalize_lang(lang)
    bundle = bundle or SeoBuilder().build(record, lang)
    head = HeadDocument()
    if not HeadTagManager(head).apply(bundle):
        log.warning("SSR %r : head partiel", record.slug)
    body = render_crawler_content(record.blocks, record.slug, record.updated_at,
                                  lang, wrap=False, niche=record.niche)
    return f"""<!DOCTYPE html>
<html lang="{escape_html(head.lang)}">
<head>
{head.render()}
  <style>{_PAGE_CSS}  </style>
</head>
<body>
{body}
</body>
</html>"""


def build_not_found_html(lang: str, base_url: str = config.BASE_URL) -> str:
    """Document 404 (noindex)."""
    lang = normalize_lang(lang)
    base_url = base_url.rstrip("/")
    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape_html(t("not_found.title", lang, {"brand": config.BRAND_NAME}))}</title>
  <meta name="robots" content="{config.ROBOTS_NOINDEX}">
  <meta name="description" content="{escape_html(t("not_found.body", lang))}">
</head>
<body>
  <h1>{escape_html(t("not_found.h1", lang))}</h1>
  <p>{escape_html(t("not_found.body", lang))}</p>
  <a href="{escape_html(base_url)}/">{escape_html(t("not_found.back", lang))}</a>
</body>
</html>"""


__all__ = [
    "escape_html", "build_hreflang_links", "og_locale", "json_ld_dumps",
    "build_landing_html", "build_gallery_html", "build_page_html", "build_not_found_html",
]
