import pytest

from typely import create_app
from typely.config import TestConfig
from typely.extensions import db
from typely.models import User, Blog
from typely.services import hash_password


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def make_user(app):
    """Insert a user straight into the database and return its id."""
    def _make_user(username, password='secret1', role='user', email=None):
        with app.app_context():
            user = User(
                username=username,
                email=email or f'{username}@example.com',
                password_hash=hash_password(password),
                role=role,
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture()
def make_blog(app):
    def _make_blog(user_id, title='A title', content='Some content'):
        with app.app_context():
            blog = Blog(user_id=user_id, title=title, content=content)
            db.session.add(blog)
            db.session.commit()
            return blog.id
    return _make_blog


@pytest.fixture()
def login(client):
    def _login(username, password='secret1'):
        return client.post('/login', data={'email': f'{username}@example.com', 'password': password})
    return _login


@pytest.fixture()
def admin_login(client):
    def _admin_login(username, password='secret1'):
        return client.post('/admin/login', data={'email': f'{username}@example.com', 'password': password})
    return _admin_login
