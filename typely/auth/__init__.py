"""
Auth Blueprint

Signup, login, logout and password recovery for regular users.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from typely.auth import routes  # noqa: E402, F401
