"""
Projection <noscript> — les faits de la page en HTML sémantique pour les clients sans JS.

Sections absentes (pas de FAQ, pas d'événement…) → omises, jamais de titre vide.
Toute interpolation passe par escape_html ; href limités à http/https/mailto/tel.
"""
from datetime import datetime
from typing import Any, Iterable, List, Optional, Union

from .. import config
from ..anchors import generate_key_facts
from ..blocks import parse_blocks
from ..core.i18n import DEFAULT_LANG, normalize_lang, t
from ..entities import extract_entity_links
from ..extractor import extract_page_facts, extract_profile_from_blocks, generate_auto_about
from ..schema_org import generate_content_hash, generate_source_context
from .html import escape_html, safe_url

_MD = "https://schema.org/"


def _price(value) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    return str(int(value))


def _section(anchor: Optional[str], label: str, body: List[str], attrs: str = "") -> List[str]:
    id_attr = f' id="{anchor}"' if anchor else ""
    return [
        f'<section{id_attr} aria-label="{escape_html(label)}"{attrs}>',
        f"<h2>{escape_html(label)}</h2>",
        *body,
        "</section>",
    ]


def render_crawler_content(blocks: Iterable[Any], slug: str,
                           updated_at: Optional[Union[str, datetime]] = None,
                           language: str = DEFAULT_LANG, wrap: bool = True,
                           niche: Optional[str] = None) -> str:
    """
    Article sémantique : H1, résumé, faits clés, textes, expertise, services,
    événements, FAQ, liens, réseaux sociaux, pied source-context.
    """
    lang = normalize_lang(language)
    parsed = parse_blocks(blocks)
    profile = extract_profile_from_blocks(parsed, lang)
    facts = extract_page_facts(parsed, lang, profile=profile)
    entity = extract_entity_links(parsed, lang)
    key_facts = generate_key_facts(profile, parsed, lang, niche=niche, facts=facts)
    summary = profile.bio or generate_auto_about(profile, parsed, lang, niche=niche)
    page_url = f"{config.BASE_URL}/{slug}"
    context = generate_source_context(slug, updated_at, generate_content_hash(parsed))

    out = [f'<article class="crawler-content" itemscope itemtype="{_MD}{profile.type}">']

    # ── En-tête ──
    name = profile.name or t("crawler.page_fallback", lang, {"slug": slug})
    out.append('<header id="about">')
    out.append(f'<h1 itemprop="name">{escape_html(name)}</h1>')
    if niche:
        out.append(f'<p itemprop="jobTitle" class="role">{escape_html(niche)}</p>')
    avatar = safe_url(profile.avatar, ("http", "https"))
    if avatar:
        out.append(f'<img src="{escape_html(avatar)}" alt="{escape_html(name)}" '
                   f'itemprop="image" width="96" height="96" loading="eager">')
    out.append(f'<link itemprop="url" href="{escape_html(page_url)}">')
    for url in entity.same_as:
        out.append(f'<link itemprop="sameAs" href="{escape_html(url)}">')
    out.append("</header>")

    if summary:
        out += _section("answer", t("sections.answer", lang),
                        [f'<p itemprop="description" class="answer-summary">{escape_html(summary)}</p>'])

    if key_facts:
        items = []
        for fact in key_facts:
            prop = f' itemprop="{fact.schema_property}"' if fact.schema_property else ""
            items.append(f"<li><strong>{escape_html(fact.label)}:</strong> "
                         f"<span{prop}>{escape_html(fact.value)}</span></li>")
        out += _section("key-facts", t("sections.key_facts", lang), ["<ul>", *items, "</ul>"])

    if facts.texts:
        out += _section(None, t("sections.about", lang),
                        [f"<p>{escape_html(text)}</p>" for text in facts.texts])

    if entity.knows_about:
        items = [f'<li itemprop="knowsAbout">{escape_html(topic)}</li>' for topic in entity.knows_about]
        out += _section("expertise", t("sections.expertise", lang), ["<ul>", *items, "</ul>"])

    # ── Services ──
    if facts.services:
        items = []
        for service in facts.services:
            li = [f'<li itemscope itemtype="{_MD}Service">',
                  f'<h3 itemprop="name">{escape_html(service.name)}</h3>']
            if service.description:
                li.append(f'<p itemprop="description">{escape_html(service.description)}</p>')
            li.append(f'<span itemprop="offers" itemscope itemtype="{_MD}Offer">')
            if service.price is not None:
                li.append(f'<span itemprop="price">{_price(service.price)}</span>')
            li.append(f'<meta itemprop="priceCurrency" content="{escape_html(service.currency)}">')
            li += ["</span>", "</li>"]
            items.append("".join(li))
        out += _section("services", t("sections.services", lang), ["<ul>", *items, "</ul>"])

    # ── Événements ──
    if facts.events:
        articles = []
        for event in facts.events:
            art = [f'<article itemscope itemtype="{_MD}Event">',
                   f'<h3 itemprop="name">{escape_html(event.title)}</h3>']
            if event.description:
                art.append(f'<p itemprop="description">{escape_html(event.description)}</p>')
            if event.start_date:
                art.append(f'<time itemprop="startDate" datetime="{escape_html(event.start_date)}">'
                           f"{escape_html(event.start_date[:10])}</time>")
            if event.location:
                art.append(f'<address itemprop="location">{escape_html(event.location)}</address>')
            art.append("</article>")
            articles.append("".join(art))
        out += _section("events", t("sections.events", lang), articles)

    # ── FAQ ──
    if facts.faq:
        entries = [
            f'<div itemscope itemprop="mainEntity" itemtype="{_MD}Question">'
            f'<dt itemprop="name">{escape_html(entry.question)}</dt>'
            f'<dd itemscope itemprop="acceptedAnswer" itemtype="{_MD}Answer">'
            f'<span itemprop="text">{escape_html(entry.answer)}</span></dd></div>'
            for entry in facts.faq
        ]
        out += _section("faq", t("sections.faq", lang), ["<dl>", *entries, "</dl>"],
                        attrs=f' itemscope itemtype="{_MD}FAQPage"')

    if facts.links:
        items = [f'<li><a href="{escape_html(link.url)}" rel="noopener noreferrer">'
                 f"{escape_html(link.title)}</a></li>" for link in facts.links]
        out += _section("contacts", t("sections.contacts", lang), ["<ul>", *items, "</ul>"])

    if facts.socials:
        items = [f'<li><a href="{escape_html(link.url)}" rel="noopener noreferrer me" itemprop="sameAs">'
                 f"{escape_html(link.title)}</a></li>" for link in facts.socials]
        out += _section("socials", t("sections.socials", lang), ["<ul>", *items, "</ul>"])

    out += [
        "<footer>",
        f"<small>{escape_html(context)}</small>",
        f'<p><a href="{escape_html(page_url)}" itemprop="url">'
        f"{escape_html(config.SITE_HOST)}/{escape_html(slug)}</a></p>",
        f"<p>{escape_html(t('crawler.created_on', lang, {'site': config.SITE_HOST}))}</p>",
        "</footer>",
        "</article>",
    ]

    html = "\n".join(out)
    return f"<noscript>\n{html}\n</noscript>" if wrap else html
