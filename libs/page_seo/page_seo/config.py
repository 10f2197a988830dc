"""
Configuration page_seo — constantes lues depuis l'environnement.

Les seuils du quality gate sont fixés ici une fois pour toutes ;
les surcharger via l'environnement reste possible pour un déploiement donné.
"""
import os
from urllib.parse import urlsplit

BASE_URL         = os.getenv("SEO_BASE_URL", "https://lnkmx.my").rstrip("/")
SITE_HOST        = urlsplit(BASE_URL).netloc or BASE_URL
BRAND_NAME       = os.getenv("SEO_BRAND_NAME", "lnkmx")
DEFAULT_OG_IMAGE = os.getenv("SEO_DEFAULT_OG_IMAGE", f"{BASE_URL}/og-image.png")
TWITTER_SITE     = os.getenv("SEO_TWITTER_SITE", "@lnkmx_app")
DEFAULT_CURRENCY = os.getenv("SEO_DEFAULT_CURRENCY", "KZT")
DEFAULT_TITLE    = os.getenv("SEO_DEFAULT_TITLE", "lnkmx - AI Bio Page Builder")

# ── Quality gate ────────────────────────────────────────────────────────────
QUALITY_PASS_THRESHOLD = int(os.getenv("SEO_QUALITY_THRESHOLD", "60"))
# Le seuil de grâce ne peut jamais dépasser le seuil standard
NEW_ACCOUNT_PASS_THRESHOLD = min(
    int(os.getenv("SEO_NEW_ACCOUNT_THRESHOLD", "45")), QUALITY_PASS_THRESHOLD
)
NEW_ACCOUNT_DAYS = int(os.getenv("SEO_NEW_ACCOUNT_DAYS", "14"))

# ── Limites de texte ────────────────────────────────────────────────────────
TITLE_MAX_LENGTH       = 60
DESCRIPTION_MAX_LENGTH = 160
DESCRIPTION_MIN_LENGTH = 100
GALLERY_CARD_TEXT      = 100

# ── Bornes ──────────────────────────────────────────────────────────────────
GALLERY_LIMIT       = 10
MAX_INDEXED_SCHEMAS = 20   # events/services émis en head, et bornes du nettoyage
MAX_KEY_FACTS       = 8

ROBOTS_INDEX   = "index, follow"
ROBOTS_NOINDEX = "noindex, nofollow"

SSR_CACHE_CONTROL = "public, max-age=3600, stale-while-revalidate=86400"
