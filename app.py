"""
BoothOrderWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Validates the Supabase backend settings (fail-fast)
2. Builds the pricing engine from the configured price table
3. Creates the order and profile services
4. Registers route blueprints
5. Sets up error handlers and context processors

ARCHITECTURE:
    Startup
    ├── SupabaseManager.initialize() (settings check)
    └── PricingEngine (one price table for every order)

    Each request
    ├── Own supabase client (tokens from the cookie session)
    ├── AccessGuard (session, then profile role)
    └── OrderService / ProfileService

The only state shared between requests is the order form in-flight registry.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, url_for
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.exceptions import BackendUnavailableError, ConfigurationError
from core.supabase_manager import SupabaseManager
from modules.pricing import PricingEngine, PriceTable, DEFAULT_PRICE_TABLE
from services.order_service import OrderService
from services.profile_service import ProfileService
from routes import register_blueprints
from routes.guards import AUTH_SESSION_KEY


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """Directory containing app.py (where .env and relative price tables live)."""
    return Path(__file__).parent


def _load_price_table(path: str) -> PriceTable:
    """Price table from PRICE_TABLE_PATH, or the built-in one."""
    if not path:
        return DEFAULT_PRICE_TABLE

    table_path = Path(path)
    if not table_path.is_absolute():
        table_path = _get_base_path() / table_path

    table = PriceTable.from_file(table_path)
    logger.info(
        f"Loaded price table {table_path}: {len(table.products)} products, "
        f"{len(table.turnarounds)} turnaround tiers"
    )
    return table


def create_app(
    config_object: str = "config.Config",
    supabase_manager: Optional[SupabaseManager] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If the backend is not configured or the price table cannot
    be loaded, the app will not start.

    Args:
        config_object: Import path of the config class
        supabase_manager: Pre-built manager (tests inject one with a fake client)

    Returns:
        Configured Flask application

    Raises:
        BackendUnavailableError: If SUPABASE_URL/SUPABASE_KEY are missing
        ConfigurationError: If PRICE_TABLE_PATH points to an invalid table
    """
    # Load .env from the app directory, then the working directory
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    # Create Flask app
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting BoothOrderWeb in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # CORE INITIALIZATION (FAIL-FAST)
    # =========================================================================

    if supabase_manager is None:
        supabase_manager = SupabaseManager(
            app.config.get("SUPABASE_URL"),
            app.config.get("SUPABASE_KEY"),
        )

    try:
        supabase_manager.initialize()
        price_table = _load_price_table(app.config.get("PRICE_TABLE_PATH", ""))
    except (BackendUnavailableError, ConfigurationError) as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    app.config["SUPABASE_MANAGER"] = supabase_manager

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    pricing_engine = PricingEngine(price_table, strict=app.config.get("PRICING_STRICT", True))
    app.config["PRICING_ENGINE"] = pricing_engine
    logger.info(f"Pricing engine ready (strict={pricing_engine.strict})")

    app.config["ORDER_SERVICE"] = OrderService(
        pricing_engine,
        required_role=app.config.get("CLIENT_ROLE", "client"),
    )
    app.config["PROFILE_SERVICE"] = ProfileService()

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # CONTEXT PROCESSORS
    # =========================================================================

    @app.context_processor
    def inject_auth_flag():
        """Let templates show sign-out/profile links without a backend call."""
        from flask import session
        return {"signed_in": bool(session.get(AUTH_SESSION_KEY))}

    @app.template_filter("money")
    def money_filter(value):
        try:
            return f"${float(value):,.2f}"
        except (TypeError, ValueError):
            return value

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(404)
    def handle_not_found(e):
        flash("Page not found.", "warning")
        return redirect(url_for("main.index"))

    @app.errorhandler(Exception)
    def handle_server_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.error(f"500 error: {e}", exc_info=True)
        flash("An unexpected error occurred. Please try again.", "error")
        return redirect(url_for("main.index"))

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
