"""
Main routes (landing page, sign-in, sign-out).

The landing page is where guarded views send requests that have no session
or the wrong role.
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.exceptions import AuthorizationError
from modules.sanitize import sanitize_text
from logging_config import get_logger
from .guards import get_backend, store_tokens


# Module logger
logger = get_logger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/", methods=["GET"])
def index():
    """Landing page; shows the sign-in form or links for a signed-in user."""
    auth = get_backend().get_session()
    return render_template("index.html", auth=auth)


@main_bp.route("/login", methods=["POST"])
def login():
    """Sign in with email and password and keep the tokens in the session."""
    email = sanitize_text(request.form.get("email"))
    password = request.form.get("password", "")

    if not email or not password:
        flash("Email and password are required.", "error")
        return redirect(url_for("main.index"))

    try:
        auth = get_backend().sign_in(email, password)
    except AuthorizationError:
        flash("Invalid email or password.", "error")
        return redirect(url_for("main.index"))

    store_tokens(auth.tokens())
    logger.info(f"User {auth.user_id} signed in")
    return redirect(url_for("dashboard.client_dashboard"))


@main_bp.route("/logout", methods=["POST"])
def logout():
    """Sign out and forget the stored tokens."""
    get_backend().sign_out()
    store_tokens(None)
    flash("You have been signed out.", "success")
    return redirect(url_for("main.index"))
