from __future__ import annotations

import traceback
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.database import Database
from starlette.exceptions import HTTPException as StarletteHTTPException

from showroom import __version__
from showroom.auth import bootstrap_admin_if_needed
from showroom.config import Config, load_config
from showroom.db import create_client, init_db
from showroom.errors import ShowroomError
from showroom.uploads.storage import URL_PREFIX, ensure_dirs
from showroom.util.time import utcnow_iso

from . import auth, banners, brands, cars, rentals, upload
from .deps import ok


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


# -----------------------------
# Error envelope
# -----------------------------


def _error_body(message: str, errors: Optional[List[Dict[str, Any]]] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body


def _field_path(loc: Any) -> str:
    # ("body", "specifications", "seating") -> "specifications.seating"
    parts = [str(p) for p in (loc or ()) if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


async def _handle_showroom_error(request: Request, exc: ShowroomError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.errors),
        headers=exc.headers,
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_path(e.get("loc")), "message": str(e.get("msg") or "Invalid value")} for e in exc.errors()]
    return JSONResponse(status_code=400, content=_error_body("Validation errors", errors))


async def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = str(exc.detail or "")
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message or "Request failed"),
        headers=getattr(exc, "headers", None),
    )


def _unhandled_error_handler(cfg: Config):
    async def _handle(request: Request, exc: Exception) -> JSONResponse:
        _debug(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
        _debug(traceback.format_exc())
        extra: Dict[str, Any] = {}
        if cfg.is_development:
            extra["error"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=_error_body("Server error", **extra))

    return _handle


# -----------------------------
# App factory
# -----------------------------


def create_app(cfg: Config | None = None, db: Database | None = None) -> FastAPI:
    """Build the API application.

    `cfg` and the database handle live on `app.state` for the process lifetime and
    reach handlers through the `get_cfg` / `get_db` dependencies. When `db` is not
    injected, a MongoClient is opened at startup and closed at shutdown.
    """

    cfg = cfg or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = None
        if app.state.db is None:
            client = create_client(cfg.MONGODB_URI)
            app.state.db = client[cfg.MONGODB_DB]
            _debug(f"Connected to MongoDB database {cfg.MONGODB_DB}")

        init_db(app.state.db)
        ensure_dirs(cfg.UPLOAD_DIR)

        if cfg.BOOTSTRAP_ADMIN:
            boot = bootstrap_admin_if_needed(app.state.db, cfg)
            if boot:
                _debug(f"Bootstrapped admin user: email={boot.get('email')} role={boot.get('role')}")

        try:
            yield
        finally:
            if client is not None:
                client.close()
                app.state.db = None
                _debug("MongoDB connection closed")

    app = FastAPI(title="Car Showroom API", version=__version__, lifespan=lifespan)
    app.state.cfg = cfg
    app.state.db = db

    origins = cfg.cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
            allow_headers=["Content-Type", "Authorization"],
        )

    app.add_exception_handler(ShowroomError, _handle_showroom_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _unhandled_error_handler(cfg))

    prefix = (cfg.API_PREFIX or "").rstrip("/")
    for module in (auth, banners, brands, cars, rentals, upload):
        app.include_router(module.router, prefix=prefix)

    @app.get(f"{prefix}/health")
    def health() -> Dict[str, Any]:
        return {"status": "OK", "message": "Car Showroom API is running", "timestamp": utcnow_iso()}

    @app.get("/")
    def root() -> Dict[str, Any]:
        return ok(
            message="Welcome to Car Showroom API",
            version=__version__,
            endpoints={
                "health": f"{prefix}/health",
                "auth": f"{prefix}/auth",
                "banners": f"{prefix}/banners",
                "brands": f"{prefix}/brands",
                "cars": f"{prefix}/cars",
                "rentals": f"{prefix}/rentals",
                "upload": f"{prefix}/upload",
            },
        )

    # The directory is created at startup, so don't require it at import time.
    app.mount(URL_PREFIX, StaticFiles(directory=cfg.UPLOAD_DIR, check_dir=False), name="uploads")

    return app


app = create_app()
