"""Global Flask extension instances and external collaborator lifecycle."""

from __future__ import annotations

import logging
from typing import Any

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

CACHE_KEY = "storefront.cache"
IMAGE_STORAGE_KEY = "storefront.image_storage"
IDENTITY_PROVIDER_KEY = "storefront.identity_provider"


def init_app(
    app: Flask,
    *,
    cache_client: Any | None = None,
    image_storage: Any | None = None,
    identity_provider: Any | None = None,
) -> None:
    """Initialize Flask extensions and connect external collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances.
    cache_client:
        Redis-compatible client. When omitted, one is built from
        ``REDIS_URL`` and pinged; no URL leaves the cache unconfigured.
    image_storage:
        Object implementing :class:`~storefront.services._shared.ports.ImageStorage`.
        Defaults to the Cloudinary adapter built from config.
    identity_provider:
        Object implementing :class:`~storefront.services._shared.ports.IdentityProvider`.
        Defaults to the Google OAuth client built from config.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from storefront import models as _models  # noqa: F401

    migrate.init_app(app, db)

    # Only access tokens are verified by flask-jwt-extended
    app.config["JWT_SECRET_KEY"] = app.config["ACCESS_TOKEN_SECRET"]
    jwt.init_app(app)
    limiter.init_app(app)

    if cache_client is None:
        cache_client = _connect_redis(app.config.get("REDIS_URL"))
    app.extensions[CACHE_KEY] = cache_client

    if image_storage is None:
        from storefront.infra.cloudinary.cloudinary_image_storage import (
            CloudinaryImageStorage,
        )

        image_storage = CloudinaryImageStorage.from_config(app.config)
    app.extensions[IMAGE_STORAGE_KEY] = image_storage

    if identity_provider is None:
        from storefront.infra.google.google_oauth_client import GoogleOAuthClient

        identity_provider = GoogleOAuthClient.from_config(app.config)
    app.extensions[IDENTITY_PROVIDER_KEY] = identity_provider


def _connect_redis(redis_url: str | None) -> redis.Redis | None:
    """Open and ping a Redis connection; ``None`` when no URL is configured."""
    if not redis_url:
        log.warning("REDIS_URL is not set; session cache is unavailable")
        return None
    client = redis.Redis.from_url(redis_url, decode_responses=True)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    return client


def get_cache_client(app: Flask | None = None) -> Any:
    """Return the initialized cache client."""
    client = (app or current_app).extensions.get(CACHE_KEY)
    if client is None:
        raise RuntimeError("Cache client is not initialized. Set REDIS_URL or inject one.")
    return client


def get_image_storage(app: Flask | None = None) -> Any:
    """Return the configured image storage adapter."""
    return (app or current_app).extensions[IMAGE_STORAGE_KEY]


def get_identity_provider(app: Flask | None = None) -> Any:
    """Return the configured federated identity provider."""
    return (app or current_app).extensions[IDENTITY_PROVIDER_KEY]


def shutdown(app: Flask) -> None:
    """Close collaborator connections opened by :func:`init_app`."""
    client = app.extensions.pop(CACHE_KEY, None)
    if client is not None and hasattr(client, "close"):
        try:
            client.close()
        except RedisError:
            log.warning("Error while closing the cache client", exc_info=True)
