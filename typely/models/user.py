"""
User Model
"""

from typely.extensions import db


class User(db.Model):
    """Registered account; ``role`` is either 'user' or 'admin'"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    # Only ever holds the hash
    password_hash = db.Column('password', db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='user', server_default='user')

    # Deleting a user removes their blogs
    blogs = db.relationship('Blog', backref='author', lazy=True,
                            cascade='all, delete-orphan')

    @property
    def is_admin(self):
        return self.role == 'admin'

    def __repr__(self):
        return f'<User {self.username}>'
