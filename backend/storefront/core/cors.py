"""Cross-origin access for the SPA calling ``/api/*`` with cookies."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def init_app(app: Flask) -> None:
    """Apply ``CORS_ORIGINS`` (comma separated) to the API routes.

    Session cookies need ``Access-Control-Allow-Credentials``, which browsers
    ignore with a wildcard origin, so credentials are only enabled for an
    explicit list.
    """
    origins = _parse_origins(app.config.get("CORS_ORIGINS", ""))
    explicit = bool(origins) and origins != ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": origins if explicit else "*"}},
        supports_credentials=explicit,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
