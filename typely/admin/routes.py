"""
Admin Routes

Admin login and moderation of users, blogs and contact messages.
Persistence failures answer with a plain-text 500 rather than the shared
error page.
"""

import logging
from functools import wraps

from flask import current_app, g, render_template, request, redirect, url_for
from sqlalchemy.exc import SQLAlchemyError
from typely.admin import admin_bp
from typely.admin.decorators import admin_required
from typely.auth.identity import AuthenticatedUser, start_session, end_session
from typely.blog.services import list_blogs_with_authors, list_contact_messages
from typely.extensions import db
from typely.models import User, Blog, BLOG_STATUS_APPROVED
from typely.services import hash_password, verify_password
from typely.utils import parse_id, fits_id_column

logger = logging.getLogger(__name__)


def plain_server_errors(message='Server error'):
    """Turn database errors raised by an admin view into a plain-text 500."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                logger.exception('Admin view %s failed', f.__name__)
                return message, 500
        return wrapper
    return decorator


def with_id(f):
    """Parse the ``item_id`` URL segment.

    Non-integers answer 400; integers no row can carry answer 404.
    """
    @wraps(f)
    def wrapper(item_id, *args, **kwargs):
        parsed = parse_id(item_id)
        if parsed is None:
            return 'Invalid ID', 400
        if not fits_id_column(parsed):
            return 'Not found', 404
        return f(parsed, *args, **kwargs)
    return wrapper


def _all_users():
    return User.query.order_by(User.id.desc()).all()


@admin_bp.route('/login', methods=['GET', 'POST'])
@plain_server_errors()
def admin_login():
    """Admin login; only accounts whose stored role is 'admin' can pass."""
    if request.method == 'GET':
        return render_template('admin/login.html', error=None)

    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')

    admin = User.query.filter_by(email=email, role='admin').first() if email else None
    if admin is None or not verify_password(password, admin.password_hash):
        logger.warning('Failed admin login for %r', email)
        return render_template('admin/login.html', error='Invalid email or password')

    start_session(AuthenticatedUser.from_user(admin, include_role=True))
    logger.info('Admin %s logged in', admin.username)
    return redirect(url_for('admin.admin_dashboard'))


@admin_bp.route('/logout')
@admin_required
def admin_logout():
    logger.info('Admin %s logged out', g.admin.username)
    end_session()
    return redirect(url_for('admin.admin_login'))


@admin_bp.route('')
@admin_required
@plain_server_errors()
def admin_dashboard():
    """Overview of every user and every blog."""
    return render_template('admin/dashboard.html',
                           admin=g.admin,
                           users=_all_users(),
                           blogs=list_blogs_with_authors())


@admin_bp.route('/messages')
@admin_bp.route('/contact-messages')
@admin_required
@plain_server_errors('Error retrieving messages')
def admin_messages():
    return render_template('admin/messages.html', admin=g.admin, messages=list_contact_messages())


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------

@admin_bp.route('/users')
@admin_required
@plain_server_errors()
def manage_users():
    return render_template('admin/users.html', admin=g.admin, users=_all_users())


@admin_bp.route('/users/delete/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def delete_user(user_id):
    """Delete a regular user together with their blogs. Admins are protected."""
    user = db.session.get(User, user_id)
    if user is None:
        return 'User not found', 404
    if user.is_admin:
        return 'Cannot delete another admin', 403

    username = user.username
    db.session.delete(user)
    db.session.commit()
    logger.info('Admin %s deleted user %s', g.admin.username, username)
    return redirect(url_for('admin.manage_users'))


def _set_role(user_id, role):
    User.query.filter_by(id=user_id).update({User.role: role}, synchronize_session=False)
    db.session.commit()
    logger.info('Admin %s set role of user %s to %s', g.admin.username, user_id, role)


@admin_bp.route('/users/promote/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def promote_user(user_id):
    _set_role(user_id, 'admin')
    return redirect(url_for('admin.manage_users'))


@admin_bp.route('/users/demote/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def demote_user(user_id):
    # No guard against demoting yourself or the last admin
    _set_role(user_id, 'user')
    return redirect(url_for('admin.manage_users'))


@admin_bp.route('/users/reset-password/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def reset_user_password(user_id):
    """Reset a password to the configured default value."""
    hashed = hash_password(current_app.config['ADMIN_RESET_PASSWORD'])
    User.query.filter_by(id=user_id).update({User.password_hash: hashed}, synchronize_session=False)
    db.session.commit()
    logger.info('Admin %s reset the password of user %s', g.admin.username, user_id)
    return redirect(url_for('admin.manage_users'))


# -----------------------------------------------------------------------------
# Blogs
# -----------------------------------------------------------------------------

@admin_bp.route('/blogs')
@admin_required
@plain_server_errors()
def manage_blogs():
    return render_template('admin/blogs.html', admin=g.admin, blogs=list_blogs_with_authors())


@admin_bp.route('/blogs/delete/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def delete_blog(blog_id):
    Blog.query.filter_by(id=blog_id).delete(synchronize_session=False)
    db.session.commit()
    logger.info('Admin %s deleted blog %s', g.admin.username, blog_id)
    return redirect(url_for('admin.manage_blogs'))


@admin_bp.route('/blogs/approve/<item_id>', methods=['POST'])
@admin_required
@with_id
@plain_server_errors()
def approve_blog(blog_id):
    Blog.query.filter_by(id=blog_id).update({Blog.status: BLOG_STATUS_APPROVED}, synchronize_session=False)
    db.session.commit()
    logger.info('Admin %s approved blog %s', g.admin.username, blog_id)
    return redirect(url_for('admin.manage_blogs'))


@admin_bp.route('/blogs/edit/<item_id>', methods=['GET', 'POST'])
@admin_required
@with_id
@plain_server_errors()
def edit_blog(blog_id):
    """Edit any blog regardless of who owns it."""
    blog = db.session.get(Blog, blog_id)
    if blog is None:
        return 'Blog not found', 404

    if request.method == 'GET':
        return render_template('admin/edit_blog.html', admin=g.admin, blog=blog)

    title = request.form.get('title', '').strip()
    content = request.form.get('content', '').strip()
    if not title or not content:
        return 'Title and content are required', 400

    blog.title = title
    blog.content = content
    db.session.commit()
    logger.info('Admin %s edited blog %s', g.admin.username, blog_id)
    return redirect(url_for('admin.manage_blogs'))
