"""
Blog Routes

Home page, author dashboard, blog CRUD and the contact form.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from typely.blog import blog_bp
from typely.blog.services import (
    list_blogs_with_authors,
    get_blog_with_author,
    list_user_blogs,
    get_owned_blog,
    create_blog,
    delete_owned_blog,
    save_contact_message,
)
from typely.extensions import db
from typely.utils import parse_id, fits_id_column

logger = logging.getLogger(__name__)


def _invalid_id():
    return render_template('error.html', message='Invalid blog ID', title='Error'), 400


@blog_bp.route('/')
def index():
    """List every blog with its author, newest first"""
    return render_template('index.html', blogs=list_blogs_with_authors(), title='Home')


@blog_bp.route('/dashboard')
@login_required
def dashboard():
    """Blogs written by the logged in user"""
    blogs = list_user_blogs(current_user.id)
    return render_template('dashboard.html', user_blogs=blogs, title='Dashboard')


@blog_bp.route('/create', methods=['GET', 'POST'])
@login_required
def create():
    if request.method == 'GET':
        return render_template('create.html', title='Create Blog')

    title = request.form.get('title', '').strip()
    content = request.form.get('content', '').strip()

    if not title or not content:
        flash('All fields are required', 'error')
        return redirect(url_for('blog.create'))

    create_blog(current_user.id, title, content)
    flash('Blog created successfully', 'success')
    return redirect(url_for('blog.dashboard'))


@blog_bp.route('/view/<blog_id>')
def view(blog_id):
    blog_id = parse_id(blog_id)
    if blog_id is None:
        return _invalid_id()

    blog = get_blog_with_author(blog_id) if fits_id_column(blog_id) else None
    if blog is None:
        return render_template('404.html', message='Blog not found', title='Page Not Found'), 404

    return render_template('view_blog.html', blog=blog, title=blog.title)


@blog_bp.route('/edit/<blog_id>', methods=['GET', 'POST'])
@login_required
def edit(blog_id):
    """Edit a blog owned by the logged in user.

    A blog that is missing or owned by someone else answers 403 either way.
    """
    parsed_id = parse_id(blog_id)
    if parsed_id is None:
        return _invalid_id()

    if request.method == 'POST':
        title = request.form.get('title', '').strip()
        content = request.form.get('content', '').strip()
        if not title or not content:
            flash('All fields are required', 'error')
            return redirect(url_for('blog.edit', blog_id=parsed_id))

    blog = get_owned_blog(parsed_id, current_user.id) if fits_id_column(parsed_id) else None
    if blog is None:
        return render_template('error.html', message='Not authorized', title='Error'), 403

    if request.method == 'GET':
        return render_template('edit.html', blog=blog, title='Edit Blog')

    blog.title = title
    blog.content = content
    db.session.commit()

    flash('Blog updated successfully', 'success')
    return redirect(url_for('blog.dashboard'))


@blog_bp.route('/delete/<blog_id>', methods=['POST'])
@login_required
def delete(blog_id):
    parsed_id = parse_id(blog_id)
    if parsed_id is None:
        return _invalid_id()

    if fits_id_column(parsed_id):
        delete_owned_blog(parsed_id, current_user.id)
    flash('Blog deleted successfully', 'success')
    return redirect(url_for('blog.dashboard'))


@blog_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact page; POST is the AJAX endpoint and always answers JSON with 200."""
    if request.method == 'GET':
        return render_template('contact.html', title='Contact')

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    name = str(data.get('name') or '').strip()
    email = str(data.get('email') or '').strip()
    message = str(data.get('message') or '').strip()

    if not name or not email or not message:
        return jsonify(success=False, error='All fields are required')

    try:
        save_contact_message(name, email, message)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not store contact message from %s', email)
        return jsonify(success=False, error='Server error while sending message')

    return jsonify(success=True, message='Message sent successfully!')


@blog_bp.route('/about')
def about():
    return render_template('about.html', title='About')
