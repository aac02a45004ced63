"""
Configuration settings for Typely
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""

    # Secret used to sign the session cookie
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') or 'typely_secret'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'typely.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions expire a fixed 24 hours after login
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_HTTPONLY = True

    # Password hashing
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:600000'
    MIN_PASSWORD_LENGTH = 6

    # Value applied by the admin "reset password" action
    ADMIN_RESET_PASSWORD = os.environ.get('ADMIN_RESET_PASSWORD') or '123456'

    # Application settings
    SITE_TITLE = 'Typely'
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    SECRET_KEY = 'test-secret'
