"""
Flask Extensions

Login state lives in the server-side session; Flask-Login only resolves
``current_user`` from the identity copy stored there at login time.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager shared by the public and admin blueprints
login_manager = LoginManager()
