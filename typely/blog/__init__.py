"""
Blog Blueprint

Public pages, the author dashboard and blog CRUD.
"""

from flask import Blueprint

blog_bp = Blueprint('blog', __name__)

from typely.blog import routes  # noqa: E402, F401
