"""
Request identities

A request is made either by an ``AnonymousVisitor`` or by an
``AuthenticatedUser``. The authenticated identity is a copy of the user row
taken at login and kept in the session; it is not refreshed when the row
changes, so a promoted or demoted user keeps their old role until they log
in again.
"""

from flask import session
from flask_login import AnonymousUserMixin, UserMixin, login_user, logout_user

SESSION_KEY = 'user'


class AnonymousVisitor(AnonymousUserMixin):
    role = None
    username = None

    @property
    def is_admin(self):
        return False


class AuthenticatedUser(UserMixin):

    def __init__(self, id, username, role=None, email=None):
        self.id = id
        self.username = username
        self.role = role
        self.email = email

    @property
    def is_admin(self):
        return self.role == 'admin'

    @classmethod
    def from_user(cls, user, include_role=False):
        """Build an identity from a ``User`` row.

        Public logins only carry id and username; the admin login also
        carries email and role.
        """
        if include_role:
            return cls(user.id, user.username, role=user.role, email=user.email)
        return cls(user.id, user.username)

    @classmethod
    def from_session(cls, data):
        if not data or 'id' not in data:
            return None
        return cls(data['id'], data.get('username'),
                   role=data.get('role'), email=data.get('email'))

    def to_session(self):
        data = {'id': self.id, 'username': self.username}
        if self.role is not None:
            data['role'] = self.role
        if self.email is not None:
            data['email'] = self.email
        return data

    def __repr__(self):
        return f'<AuthenticatedUser {self.username} role={self.role}>'


def load_identity(user_id):
    """Flask-Login user loader reading the identity copy from the session."""
    identity = AuthenticatedUser.from_session(session.get(SESSION_KEY))
    if identity is None or str(identity.id) != str(user_id):
        return None
    return identity


def start_session(identity):
    """Bind ``identity`` to a brand new session token."""
    regenerate = getattr(session, 'regenerate', None)
    if regenerate is not None:
        regenerate()
    session[SESSION_KEY] = identity.to_session()
    login_user(identity)


def end_session():
    """Forget the identity and destroy the session record."""
    logout_user()
    session.clear()
