"""
API routes (AJAX endpoints).

Handles:
- /api/quote - Price preview for the order form
- /health - Health check endpoint
"""

from collections.abc import Mapping

from flask import Blueprint, current_app, jsonify, request

from core.exceptions import ConfigurationError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/api/quote", methods=["POST"])
def quote():
    """
    Price an order without submitting it.

    Body (JSON or form): software_type, turnaround_time, has_darkroom_file

    Returns:
        200 {"price", "product", "turnaround", "addon_applied"}
        400 {"error"} for values outside the price table or a non-object body
    """
    data = request.get_json(silent=True)
    if data is None:
        data = request.form
    elif not isinstance(data, Mapping):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    engine = current_app.config["PRICING_ENGINE"]

    addon = data.get("has_darkroom_file", False)
    if isinstance(addon, str):
        addon = addon.lower() in ("1", "true", "on", "yes")

    try:
        result = engine.quote(
            str(data.get("software_type", "")),
            str(data.get("turnaround_time", "")),
            bool(addon),
        )
    except ConfigurationError as e:
        return jsonify({"error": e.message}), 400

    return jsonify(result)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    manager = current_app.config.get("SUPABASE_MANAGER")
    if manager and manager.is_initialized:
        health_status["checks"]["backend"] = "configured"
    else:
        health_status["checks"]["backend"] = "not_configured"
        health_status["status"] = "degraded"

    engine = current_app.config.get("PRICING_ENGINE")
    if engine:
        health_status["checks"]["pricing"] = "strict" if engine.strict else "lenient"
    else:
        health_status["checks"]["pricing"] = "unavailable"
        health_status["status"] = "degraded"

    return jsonify(health_status)
