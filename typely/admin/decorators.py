"""
Admin Decorator
"""

from functools import wraps
from flask import g, redirect, url_for
from flask_login import current_user


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    - The role checked is the one copied into the session at admin login
    - Anyone else is sent to /admin/login, with no flash message
    - The admin identity is exposed to the view as ``g.admin``
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not (current_user.is_authenticated and current_user.role == 'admin'):
            return redirect(url_for('admin.admin_login'))
        g.admin = current_user._get_current_object()
        return f(*args, **kwargs)
    return wrapper
