"""
Typely - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, flash, get_flashed_messages, redirect, render_template, url_for
from typely.extensions import db, login_manager
from typely.config import Config
from typely.sessions import MemorySessionStore, ServerSideSessionInterface

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.getLogger('typely').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Sessions are held server-side; the cookie only carries a signed token
    app.session_interface = ServerSideSessionInterface(
        MemorySessionStore(app.config['PERMANENT_SESSION_LIFETIME'])
    )

    # Initialize extensions
    db.init_app(app)
    _init_login_manager(app)

    # Register blueprints
    from typely.auth import auth_bp
    from typely.admin import admin_bp
    from typely.blog import blog_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(blog_bp)

    @app.context_processor
    def inject_flash_messages():
        """Hand this render's pending flash messages to the templates."""
        return dict(
            success_msg=get_flashed_messages(category_filter=['success']),
            error_msg=get_flashed_messages(category_filter=['error']),
            site_title=app.config['SITE_TITLE'],
        )

    _register_error_handlers(app)

    from typely.cli import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and not uri.endswith(':memory:'):
            db_dir = os.path.dirname(uri[len('sqlite:///'):])
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
        db.create_all()

    return app


def _init_login_manager(app):
    from typely.auth.identity import AnonymousVisitor, load_identity

    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.anonymous_user = AnonymousVisitor
    login_manager.user_loader(load_identity)

    @login_manager.unauthorized_handler
    def unauthorized():
        flash('Please login to continue', 'error')
        return redirect(url_for('auth.login'))


def _register_error_handlers(app):
    @app.errorhandler(400)
    def bad_request(e):
        return render_template('error.html', message='Bad request', title='Error'), 400

    @app.errorhandler(404)
    def not_found(e):
        return render_template('404.html', message='Page not found', title='Page Not Found'), 404

    @app.errorhandler(500)
    def server_error(e):
        original = getattr(e, 'original_exception', None)
        if original is not None:
            logger.error('Server error: %s', original, exc_info=original)
        return render_template('error.html', message='Server Error', title='Error'), 500
