"""Application factory wiring Flask extensions, collaborators and blueprints."""

from __future__ import annotations

import atexit
from typing import Any

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from storefront.core.config import BaseConfig, get_config
from storefront.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    cache_client: Any | None = None,
    image_storage: Any | None = None,
    identity_provider: Any | None = None,
) -> Flask:
    """Build and configure the Flask application.

    Parameters
    ----------
    config:
        Config class, object or import string. Defaults to the class selected
        by ``APP_ENV``.
    cache_client, image_storage, identity_provider:
        Pre-built collaborators. Anything omitted is built from config; a cache
        client built here is closed when the process exits.
    """

    app = Flask(__name__)
    app.config.from_object(get_config() if config is None else config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("USE_PROXYFIX"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    from storefront.core import extensions

    extensions.init_app(
        app,
        cache_client=cache_client,
        image_storage=image_storage,
        identity_provider=identity_provider,
    )
    if cache_client is None:
        atexit.register(extensions.shutdown, app)

    init_logging(app)

    from storefront.core import cors

    cors.init_app(app)

    from storefront.core import errors

    errors.init_app(app)

    from storefront.api import init_app as init_api

    init_api(app)

    from storefront import cli as app_cli

    app_cli.init_app(app)

    return app
