"""
Operator commands

    flask --app app init-db
    flask --app app create-admin --username admin --email admin@example.com
"""

import click
from flask.cli import with_appcontext

from typely.extensions import db
from typely.models import User
from typely.services import hash_password


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create any missing tables."""
    db.create_all()
    click.echo('Database tables created')


@click.command('create-admin')
@click.option('--username', required=True)
@click.option('--email', required=True)
@click.password_option('--password', confirmation_prompt=True)
@with_appcontext
def create_admin_command(username, email, password):
    """Create an admin account, or promote the account registered under EMAIL."""
    user = User.query.filter_by(email=email).first()

    if not user:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role='admin'
        )
        db.session.add(user)
        message = 'New admin user created'
    else:
        user.role = 'admin'
        user.password_hash = hash_password(password)
        message = 'Existing user promoted to admin'

    db.session.commit()
    click.echo(message)


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
