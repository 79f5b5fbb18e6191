"""Base configuration shared by every environment."""
import os
from datetime import timedelta


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Session (JWT carried in an HTTP-only cookie, Bearer header also accepted)
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_TOKEN_LOCATION = ['cookies', 'headers']
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)
    JWT_ACCESS_COOKIE_NAME = 'sams_session'
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_COOKIE_SAMESITE = 'Lax'

    # CORS
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]

    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'
    RATELIMIT_DEFAULT = "200 per day;50 per hour"

    # QR tokens
    QR_TOKEN_LIFETIME = timedelta(minutes=5)
    QR_TOKEN_STORE = os.environ.get('QR_TOKEN_STORE', 'memory')  # memory | redis
    REDIS_URL = os.environ.get('REDIS_URL')

    # Pagination
    DEFAULT_ACTIVITY_LIMIT = 20
    MAX_ACTIVITY_LIMIT = 100

    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
