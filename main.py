from dotenv import load_dotenv

load_dotenv()

import hmac
import os
import traceback
from typing import Any, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chat_agent import ChatAgent
from context_store import ContextStore
from crawl_light import scrape_root
from errors import AuthError, FetchError, ServiceError, ValidationError
from llm import router as chat_router
from log_helper import log
from site_cache import SITE_URL, SiteCache

PORT = int(os.getenv("PORT", "3001"))
HOST = os.getenv("HOST", "0.0.0.0")
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


class ContextIn(BaseModel):
    context: Optional[str] = None


def require_admin(request: Request) -> None:
    expected = request.app.state.admin_token or ""
    token = request.headers.get("x-admin-token") or ""
    if not expected or not token or not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError("Unauthorized")


def create_app(site_cache: Optional[SiteCache] = None,
               context_store: Optional[ContextStore] = None,
               completions: Any = None,
               admin_token: Optional[str] = ADMIN_TOKEN,
               site_url: str = SITE_URL) -> FastAPI:
    app = FastAPI(title="Store Chat API", version="1.0.0")
    app.add_middleware(CORSMiddleware, allow_origins=CORS_ORIGINS, allow_methods=["*"], allow_headers=["*"])

    site_cache = site_cache or SiteCache(base_url=site_url)
    context_store = context_store or ContextStore()
    context_store.load()

    app.state.site_cache = site_cache
    app.state.context_store = context_store
    app.state.chat_agent = ChatAgent(site_cache, context_store, completions)
    app.state.admin_token = admin_token
    app.state.site_url = site_url

    app.include_router(chat_router)

    @app.exception_handler(ServiceError)
    def service_error(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": str(exc.errors())[:300]})

    @app.exception_handler(Exception)
    def unhandled(request: Request, exc: Exception):
        log("error", "unhandled_error", path=request.url.path, error=repr(exc)[:300],
            trace=traceback.format_exc()[-1500:])
        return JSONResponse(status_code=500, content={"error": "Server error", "details": str(exc)})

    @app.get("/healthz")
    def health():
        return {"ok": True, "site_cache": {"updated_at": site_cache.updated_at or None,
                                           "stale": site_cache.is_stale()}}

    @app.post("/api/context", dependencies=[Depends(require_admin)])
    def update_context(body: ContextIn):
        if not body.context:
            raise ValidationError("Missing context")
        context_store.update(body.context)
        return {"message": "Context updated."}

    @app.post("/api/refresh-site-cache", dependencies=[Depends(require_admin)])
    def refresh_site_cache():
        if not site_cache.refresh():
            raise FetchError("Site cache refresh failed", details=site_cache.last_error)
        return {"message": "Site cache refreshed."}

    @app.get("/api/site-cache", dependencies=[Depends(require_admin)])
    def site_cache_status():
        return site_cache.status()

    @app.get("/api/scrape")
    def scrape():
        return scrape_root(site_url)

    paths = sorted([getattr(r, "path", "") for r in app.routes])
    log("info", "startup_routes", paths=paths)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
