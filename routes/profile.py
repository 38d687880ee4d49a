"""
Profile route.

GET shows the stored profile; POST updates name/email through
ProfileService and redirects back to GET so the page re-reads the
persisted state.
"""

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

from logging_config import get_logger
from .guards import get_backend, login_required


# Module logger
logger = get_logger(__name__)

profile_bp = Blueprint("profile", __name__)

EMAIL_CONFIRMATION_NOTE = "Please check your email to confirm the email change."


@profile_bp.route("/profile", methods=["GET", "POST"])
@login_required
def profile():
    """
    Handle the profile page.

    GET: Display name and email
    POST: Update them (identity provider first when the email changes)
    """
    profile_service = current_app.config["PROFILE_SERVICE"]
    backend = get_backend()
    current = profile_service.get_profile(backend, g.access.auth)

    if request.method == "GET":
        if current is None:
            flash("Your profile could not be loaded.", "warning")
        return render_template("profile.html", profile=current)

    if current is None:
        flash("Failed to update profile.", "error")
        return redirect(url_for("profile.profile"))

    result = profile_service.update_profile(
        backend,
        current.id,
        request.form.get("name", ""),
        request.form.get("email", ""),
        current_email=current.email,
    )

    if result.success:
        message = "Profile updated successfully."
        if result.email_change_requested:
            message = f"{message} {EMAIL_CONFIRMATION_NOTE}"
        flash(message, "success")
    else:
        flash(result.reason, "error")

    return redirect(url_for("profile.profile"))
