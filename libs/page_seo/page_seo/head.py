"""
Gestionnaire du <head> — seul composant qui écrit dans l'en-tête du document.

Pas de document global : chaque requête (ou chaque rendu) possède son propre
HeadDocument, que HeadTagManager remplit puis nettoie.

Clés stables, façon sélecteur CSS :
  meta[name="description"]            meta[property="og:title"]
  link[rel="canonical"]               link[rel="alternate"][hreflang="kk"]
  script#schema-faq
apply() recherche la clé avant de créer : ré-appliquer ne duplique rien.
"""
import logging
from typing import Dict, List, Optional

from . import config
from .core.i18n import DEFAULT_LANG, SUPPORTED_LANGS, t
from .core.schemas import SeoBundle
from .renderer.html import escape_html, hreflang_alternates, json_ld_dumps

log = logging.getLogger(__name__)

SCRIPT_WEBPAGE    = "schema-webpage"
SCRIPT_MAIN       = "schema-main"
SCRIPT_BREADCRUMB = "schema-breadcrumb"
SCRIPT_FAQ        = "schema-faq"
SCRIPT_EVENT      = "schema-event-{}"
SCRIPT_SERVICE    = "schema-service-{}"


class HeadElement:
    """Un élément <meta>/<link>/<script> du head."""

    def __init__(self, tag: str, attrs: Dict[str, str], text: Optional[str] = None):
        self.tag = tag
        self.attrs = dict(attrs)
        self.text = text

    def render(self) -> str:
        attrs = "".join(f' {k}="{escape_html(v)}"' for k, v in self.attrs.items())
        if self.tag == "script":
            # JSON-LD déjà sûr pour <script> (json_ld_dumps)
            return f"<script{attrs}>{self.text or ''}</script>"
        return f"<{self.tag}{attrs}>"

    def __repr__(self):
        return f"HeadElement({self.tag!r}, {self.attrs!r})"


class HeadDocument:
    """
    Tampon <head> isolé par requête.

    Les éléments sont indexés par clé stable et gardent leur ordre d'insertion.
    """

    def __init__(self, title: str = config.DEFAULT_TITLE, lang: str = DEFAULT_LANG):
        self.title = title
        self.lang = lang
        self._elements: Dict[str, HeadElement] = {}

    # ── Accès par sélecteur ──────────────────────────────────────────────────

    @staticmethod
    def _matches(key: str, selector: str) -> bool:
        # link[rel="alternate"] couvre aussi link[rel="alternate"][hreflang="ru"]
        return key == selector or key.startswith(selector + "[")

    def query(self, selector: str) -> Optional[HeadElement]:
        return self._elements.get(selector)

    def query_all(self, selector: str) -> List[HeadElement]:
        return [el for key, el in self._elements.items() if self._matches(key, selector)]

    def keys(self) -> List[str]:
        return list(self._elements)

    def upsert(self, key: str, tag: str, attrs: Dict[str, str],
               text: Optional[str] = None) -> HeadElement:
        element = self._elements.get(key)
        if element is None:
            element = HeadElement(tag, attrs, text)
            self._elements[key] = element
        else:
            element.attrs.update(attrs)
            element.text = text
        return element

    def remove(self, selector: str) -> int:
        """Supprime tout ce que couvre le sélecteur ; renvoie le nombre d'éléments retirés."""
        doomed = [key for key in self._elements if self._matches(key, selector)]
        for key in doomed:
            del self._elements[key]
        return len(doomed)

    def __len__(self):
        return len(self._elements)

    # ── Sérialisation ────────────────────────────────────────────────────────

    def render(self, indent: str = "  ") -> str:
        """Contenu HTML du <head> (charset, viewport, title, éléments gérés)."""
        lines = [
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(self.title)}</title>",
        ]
        lines.extend(el.render() for el in self._elements.values())
        return "\n".join(indent + line for line in lines)


# ── Sélecteurs de nettoyage ─────────────────────────────────────────────────

_META_NAMES = (
    "description", "robots", "googlebot",
    "twitter:card", "twitter:title", "twitter:description", "twitter:image", "twitter:site",
    "page-quality-score", "ai-summary", "source-context",
)
_META_PROPERTIES = (
    "og:type", "og:title", "og:description", "og:url", "og:site_name",
    "og:image", "og:image:alt", "og:locale",
)


def meta_key(name: str) -> str:
    return f'meta[name="{name}"]'


def property_key(prop: str) -> str:
    return f'meta[property="{prop}"]'


def alternate_key(hreflang: str) -> str:
    return f'link[rel="alternate"][hreflang="{hreflang}"]'


def script_key(script_id: str) -> str:
    return f"script#{script_id}"


def cleanup_selectors(max_indexed: int = config.MAX_INDEXED_SCHEMAS) -> List[str]:
    """Liste exhaustive de ce que apply() peut créer ; événements/services bornés."""
    selectors = [meta_key(n) for n in _META_NAMES]
    selectors += [property_key(p) for p in _META_PROPERTIES]
    selectors += ['link[rel="canonical"]', 'link[rel="alternate"]']
    selectors += [script_key(s) for s in (SCRIPT_WEBPAGE, SCRIPT_MAIN, SCRIPT_BREADCRUMB, SCRIPT_FAQ)]
    selectors += [script_key(SCRIPT_EVENT.format(i)) for i in range(max_indexed)]
    selectors += [script_key(SCRIPT_SERVICE.format(i)) for i in range(max_indexed)]
    return selectors


class HeadTagManager:
    """
    Crée ou met à jour l'ensemble énumérable des balises d'une page.

    Usage:
        >>> head = HeadDocument()
        >>> manager = HeadTagManager(head)
        >>> manager.apply(bundle)
        >>> head.render()
        >>> manager.teardown()
    """

    def __init__(self, document: HeadDocument):
        self.document = document

    def _meta(self, name: str, content: str):
        self.document.upsert(meta_key(name), "meta", {"name": name, "content": content})

    def _property(self, prop: str, content: str):
        self.document.upsert(property_key(prop), "meta", {"property": prop, "content": content})

    def _script(self, script_id: str, data: dict):
        self.document.upsert(
            script_key(script_id), "script",
            {"type": "application/ld+json", "id": script_id},
            json_ld_dumps(data),
        )

    def _write(self, bundle: SeoBundle):
        meta = bundle.meta
        doc = self.document
        doc.title = meta.title
        doc.lang = meta.language

        self._meta("description", meta.description)
        self._meta("robots", meta.robots)
        self._meta("googlebot", meta.robots)

        self._property("og:type", "profile")
        self._property("og:title", meta.title)
        self._property("og:description", meta.description)
        self._property("og:url", meta.canonical)
        self._property("og:site_name", config.BRAND_NAME)
        self._property("og:locale", meta.og_locale)
        self._property("og:image", meta.og_image)
        self._property("og:image:alt", t("meta.image_alt", meta.language,
                                         {"name": bundle.profile.name or bundle.slug}))

        self._meta("twitter:card", "summary_large_image")
        self._meta("twitter:title", meta.title)
        self._meta("twitter:description", meta.description)
        self._meta("twitter:image", meta.og_image)
        self._meta("twitter:site", config.TWITTER_SITE)

        doc.upsert('link[rel="canonical"]', "link", {"rel": "canonical", "href": meta.canonical})
        base, path = config.BASE_URL, meta.canonical[len(config.BASE_URL):]
        for hreflang, href in hreflang_alternates(base, path, SUPPORTED_LANGS):
            doc.upsert(alternate_key(hreflang), "link",
                       {"rel": "alternate", "hreflang": hreflang, "href": href})

        schemas = bundle.schemas
        wanted = {
            script_key(SCRIPT_WEBPAGE): schemas.web_page,
            script_key(SCRIPT_MAIN): schemas.main_entity,
            script_key(SCRIPT_BREADCRUMB): schemas.breadcrumb,
        }
        if schemas.faq:
            wanted[script_key(SCRIPT_FAQ)] = schemas.faq
        for i, event in enumerate((schemas.events or [])[: config.MAX_INDEXED_SCHEMAS]):
            wanted[script_key(SCRIPT_EVENT.format(i))] = event
        for i, service in enumerate((schemas.services or [])[: config.MAX_INDEXED_SCHEMAS]):
            wanted[script_key(SCRIPT_SERVICE.format(i))] = service

        # Scripts d'un bundle précédent absents du nouveau → retirés
        for key in doc.keys():
            if key.startswith("script#") and key not in wanted:
                doc.remove(key)
        for key, data in wanted.items():
            self._script(key[len("script#"):], data)

        self._meta("page-quality-score", str(bundle.quality_gate.score))
        if bundle.summary:
            self._meta("ai-summary", bundle.summary)
        else:
            doc.remove(meta_key("ai-summary"))
        self._meta("source-context", bundle.source_context)

    def apply(self, bundle: SeoBundle) -> bool:
        """
        Applique le bundle en une passe synchrone.
        Un échec est journalisé et isolé : le rendu de la page continue.
        """
        try:
            self._write(bundle)
        except Exception as e:
            log.warning("Head : application impossible pour %r : %s", bundle.slug, e)
            return False
        return True

    def teardown(self):
        """Retire tout ce que apply() a pu créer et restaure titre et langue par défaut."""
        removed = sum(self.document.remove(sel) for sel in cleanup_selectors())
        self.document.title = config.DEFAULT_TITLE
        self.document.lang = DEFAULT_LANG
        log.debug("Head : %d balises retirées", removed)
        return removed
