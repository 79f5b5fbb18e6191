"""Testing configuration."""
from datetime import timedelta

from .base import Config


class TestingConfig(Config):
    """Testing configuration class."""

    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'

    # Database (in-memory SQLite for testing)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=30)
    JWT_COOKIE_CSRF_PROTECT = False

    # Rate Limiting (disabled for testing)
    RATELIMIT_ENABLED = False

    QR_TOKEN_STORE = 'memory'

    LOG_LEVEL = 'WARNING'
