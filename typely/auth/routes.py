"""
Auth Routes

Signup, login, logout and password recovery for regular users.
"""

import logging

from flask import current_app, render_template, request, redirect, url_for, flash
from flask_login import current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from typely.auth import auth_bp
from typely.auth.identity import AuthenticatedUser, start_session, end_session
from typely.extensions import db
from typely.models import User
from typely.services import hash_password, verify_password

logger = logging.getLogger(__name__)


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """User registration route"""
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('blog.index'))
        return render_template('signup.html', title='Signup', hide_navbar=True)

    username = request.form.get('username', '').strip()
    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')

    if not username or not email or not password:
        flash('All fields are required', 'error')
        return redirect(url_for('auth.signup'))

    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(password) < min_length:
        flash(f'Password must be at least {min_length} characters long', 'error')
        return redirect(url_for('auth.signup'))

    existing = User.query.filter(or_(User.email == email, User.username == username)).first()
    if existing:
        flash('Email or username already exists', 'error')
        return redirect(url_for('auth.signup'))

    new_user = User(username=username, email=email, password_hash=hash_password(password))
    try:
        db.session.add(new_user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.exception('Signup for %s lost a uniqueness race', email)
        flash('Email or username already exists', 'error')
        return redirect(url_for('auth.signup'))

    start_session(AuthenticatedUser.from_user(new_user))
    logger.info('New user %s signed up', new_user.username)
    flash('Signup successful! Welcome!', 'success')
    return redirect(url_for('blog.index'))


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('blog.index'))
        return render_template('login.html', title='Login', hide_navbar=True)

    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')

    if not email or not password:
        flash('All fields are required', 'error')
        return redirect(url_for('auth.login'))

    user = User.query.filter_by(email=email).first()
    if user is None:
        flash('User not found', 'error')
        return redirect(url_for('auth.login'))

    if not verify_password(password, user.password_hash):
        flash('Incorrect password', 'error')
        return redirect(url_for('auth.login'))

    start_session(AuthenticatedUser.from_user(user))
    logger.info('User %s logged in', user.username)
    flash(f'Welcome back, {user.username}!', 'success')
    return redirect(url_for('blog.index'))


@auth_bp.route('/logout')
def logout():
    """User logout route"""
    if current_user.is_authenticated:
        logger.info('User %s logged out', current_user.username)
    end_session()
    return redirect(url_for('auth.login'))


@auth_bp.route('/forgot-password', methods=['GET', 'POST'])
def forgot_password():
    """Overwrite the password of the account registered under an email."""
    if request.method == 'GET':
        return render_template('forgot_password.html', title='Forgot Password', hide_navbar=True)

    email = request.form.get('email', '').strip()
    new_password = request.form.get('newPassword', '')

    if not email or not new_password:
        flash('All fields are required', 'error')
        return redirect(url_for('auth.forgot_password'))

    user = User.query.filter_by(email=email).first()
    if user is None:
        flash('No account found with this email', 'error')
        return redirect(url_for('auth.forgot_password'))

    user.password_hash = hash_password(new_password)
    db.session.commit()
    logger.info('Password reset for %s', user.username)

    flash('Password reset successfully. You can now login.', 'success')
    return redirect(url_for('auth.login'))
