"""
New order route.

Renders the order form and hands submissions to OrderService, which
validates, prices (PricingEngine only) and persists them.
"""

from uuid import uuid4

from flask import (
    Blueprint,
    current_app,
    flash,
    g,
    redirect,
    render_template,
    request,
    url_for,
)

from core.exceptions import AuthorizationError
from models.submission import SubmissionState
from logging_config import get_logger
from .guards import client_required, get_backend


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__)


def _render_form(form_id: str, values: dict = None, errors: dict = None, status: int = 200):
    engine = current_app.config["PRICING_ENGINE"]
    return render_template(
        "new_order.html",
        form_id=form_id,
        values=values or {},
        errors=errors or {},
        products=engine.table.product_choices(),
        turnarounds=engine.table.turnaround_choices(),
        addon_products=[
            key for key, rule in engine.table.products.items() if rule.addon_eligible
        ],
    ), status


@orders_bp.route("/orders/new", methods=["GET", "POST"])
@client_required
def new_order():
    """
    Handle the new order form.

    GET: Display an empty form with a fresh form_id
    POST: Submit via OrderService; redirect to the dashboard on success
    """
    if request.method == "GET":
        return _render_form(uuid4().hex)

    form_id = request.form.get("form_id") or uuid4().hex
    order_service = current_app.config["ORDER_SERVICE"]

    try:
        result = order_service.submit(get_backend(), request.form, form_id, g.access)
    except AuthorizationError as e:
        logger.info(f"Order submission refused: {e.reason}")
        return redirect(url_for("main.index"))

    if result.state == SubmissionState.SUCCEEDED:
        flash(result.message, "success")
        return redirect(url_for("dashboard.client_dashboard"))

    values = request.form.to_dict()

    if result.state == SubmissionState.INVALID:
        return _render_form(form_id, values, result.field_errors, 400)

    if result.state == SubmissionState.REJECTED:
        flash(result.message, "warning")
        return _render_form(form_id, values, status=409)

    flash(result.message, "error")
    return _render_form(form_id, values, status=502)
