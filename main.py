"""
HTTP adapter for the URL Shortener Platform.

Responsibilities:
    - Expose REST endpoints for shortening and expanding URLs
    - Redirect browsers from a short code to the long URL
    - Translate core errors into HTTP status codes

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - Store, oracle and strategy come from config unless a service is injected.
    - ShorteningService owns dedupe, generation and persistence; routes stay thin.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from shortener_platform.errors import GenerationExhausted, InvalidURL, StorageError
from shortener_platform.service.shortening_service import ShorteningService


class ShortenRequest(BaseModel):
    """Request payload for shortening a URL."""
    url: str


def create_app(service: Optional[ShorteningService] = None) -> FastAPI:
    """
    Build and configure a new FastAPI app instance.

    Args:
        service (Optional[ShorteningService]): Pre-wired service. When omitted,
            a fresh one is built from configuration, so every app gets its own
            isolated in-memory state.

    Returns:
        FastAPI: A fully configured application instance.
    """
    app = FastAPI(
        title="URL Shortener",
        description="Maps long URLs to short codes and back",
        docs_url="/docs",
    )
    log = logging.getLogger("shortener")

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    shortener = service if service is not None else ShorteningService()
    log.info(
        "Shortener ready: storage=%s strategy=%s",
        type(shortener.storage).__name__,
        type(shortener.strategy).__name__,
    )
    app.state.shortener = shortener

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post("/shorten")
    def shorten(req: ShortenRequest) -> Dict[str, Any]:
        """
        Create (or return the existing) short code for a URL.

        Raises:
            HTTPException: 400 on an invalid URL, 503 when no code can be generated.
        """
        try:
            code = shortener.shorten(req.url)
        except InvalidURL as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except (GenerationExhausted, StorageError) as exc:
            raise HTTPException(status_code=503, detail=str(exc))

        return {
            "short_code": code,
            "short_url": shortener.short_url(code),
            "long_url": req.url,
        }

    @app.get("/expand/{short_code}")
    def expand(short_code: str) -> Dict[str, Any]:
        long_url = shortener.expand(short_code)
        if long_url is None:
            raise HTTPException(status_code=404, detail="Short code not found")
        return {"short_code": short_code, "long_url": long_url}

    @app.get("/{short_code}")
    def redirect(short_code: str, request: Request) -> Response:
        """
        Resolve a short code.

        Browsers (Accept: text/html) get a 302 to the long URL; API clients
        get the long URL as JSON.
        """
        long_url = shortener.expand(short_code)
        if long_url is None:
            raise HTTPException(status_code=404, detail="Short code not found")

        accept = request.headers.get("accept", "").lower()
        if "text/html" in accept:
            return RedirectResponse(url=long_url, status_code=302)
        return JSONResponse({"long_url": long_url})

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
