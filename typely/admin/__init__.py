"""
Admin Blueprint

Moderation console for users, blogs and contact messages. Every route
except the login form requires an admin identity in the session.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from typely.admin import routes  # noqa: E402, F401
