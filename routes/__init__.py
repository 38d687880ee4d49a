"""
Flask route blueprints for BoothOrderWeb.

This module contains all route handlers organized by functionality:
- main: Landing page, sign-in, sign-out
- orders: New order form and submission
- dashboard: Client order list
- profile: Profile view and update
- api: AJAX endpoints (price quote, health)

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .orders import orders_bp
from .dashboard import dashboard_bp
from .profile import profile_bp
from .api import api_bp

__all__ = [
    "main_bp",
    "orders_bp",
    "dashboard_bp",
    "profile_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(api_bp)
