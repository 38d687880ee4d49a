"""
Configuration for BoothOrderWeb.

The hosted Supabase backend is required. The application fails fast at
startup if SUPABASE_URL or SUPABASE_KEY is missing.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "booth_order_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # Supabase project (anon key; row level security applies per user)
    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")

    # ==========================================================================
    # Pricing Configuration
    # ==========================================================================
    # PRICE_TABLE_PATH: JSON file with product and turnaround rules.
    #   Empty = built-in table (3d/2d/1d/12h flat fees, darkroom file add-on)
    #
    # PRICING_STRICT: 1 = unknown product/turnaround raises ConfigurationError
    #                 0 = unknown values price as zero (legacy behaviour)
    # ==========================================================================
    PRICE_TABLE_PATH = os.environ.get("PRICE_TABLE_PATH", "")
    PRICING_STRICT = os.environ.get("PRICING_STRICT", "1") == "1"

    # Role allowed to place orders and see the client dashboard
    CLIENT_ROLE = "client"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SUPABASE_URL = "https://test-project.supabase.co"
    SUPABASE_KEY = "test-anon-key"
    PRICE_TABLE_PATH = ""
    PRICING_STRICT = True
