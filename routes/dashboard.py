"""
Client dashboard route.

Lists the orders the backend returns for the signed-in client.
"""

from flask import Blueprint, current_app, flash, g, render_template

from core.exceptions import PersistenceError
from logging_config import get_logger
from .guards import client_required, get_backend


# Module logger
logger = get_logger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/client-dashboard", methods=["GET"])
@client_required
def client_dashboard():
    """Display the client's orders, newest first."""
    try:
        orders = get_backend().list_orders()
    except PersistenceError as e:
        logger.error(f"Failed to load orders: {e}", exc_info=True)
        flash("Failed to load your orders. Please try again.", "error")
        orders = []

    engine = current_app.config["PRICING_ENGINE"]
    return render_template(
        "client_dashboard.html",
        orders=orders,
        profile=g.access.profile,
        product_labels=dict(engine.table.product_choices()),
        turnaround_labels=dict(engine.table.turnaround_choices()),
    )
