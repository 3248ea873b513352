"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied on top of the environment's config
            (used by the test-suite).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from inventory_manager.config import get_config
    from inventory_manager.db import init_db
    from inventory_manager.error_handlers import register_error_handlers
    from inventory_manager.logging_config import configure_logging
    from inventory_manager.routes.categories import categories_bp
    from inventory_manager.routes.health import health_bp
    from inventory_manager.routes.items import items_bp
    from inventory_manager.routes.web import web_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(web_bp)
    app.register_blueprint(items_bp, url_prefix="/inventory")
    app.register_blueprint(categories_bp, url_prefix="/inventory")

    return app
