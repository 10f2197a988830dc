"""
LNKMX SEO — FastAPI app
Démarrer : uvicorn src.api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import page_seo

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="LNKMX SEO — pages link-in-bio", version=page_seo.__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from ..database import init_db, DB_PATH
    init_db()
    log.info("DB initialisée (SQLite) — %s", DB_PATH)
    log.info("SEO base URL : %s", page_seo.config.BASE_URL)


@app.get("/health")
def health():
    return {"status": "ok", "service": "lnkmx_seo", "version": page_seo.__version__}


# ── Routes ──
from .routes import seo, sitemap, ssr

app.include_router(seo.router)
app.include_router(sitemap.router)
# En dernier : /{slug} attrape tout chemin à un segment
app.include_router(ssr.router)
