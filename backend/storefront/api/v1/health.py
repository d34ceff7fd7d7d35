"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text

from storefront.api.deps import json_response, session_cache, timing
from storefront.core.extensions import CACHE_KEY, db

bp = Blueprint("health", __name__)


def _cache_status() -> str:
    if current_app.extensions.get(CACHE_KEY) is None:
        return "unconfigured"
    return "ok" if session_cache().ping() else "fail"


@bp.get("/health")
@timing
def healthcheck():
    """Return database and session cache health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    cache_status = _cache_status()
    healthy = db_status == "ok" and cache_status != "fail"
    payload = {
        "status": "ok" if healthy else "degraded",
        "db": db_status,
        "cache": cache_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if healthy else 503)
