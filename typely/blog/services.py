"""
Blog Services

Queries shared by the public and admin blog views.
"""

from typely.extensions import db
from typely.models import Blog, User, ContactMessage


def _newest_first(query, model):
    return query.order_by(model.created_at.desc(), model.id.desc())


def list_blogs_with_authors():
    """All blogs whose author still exists, newest first."""
    return _newest_first(Blog.query.join(User, Blog.user_id == User.id), Blog).all()


def get_blog_with_author(blog_id):
    return Blog.query.join(User, Blog.user_id == User.id).filter(Blog.id == blog_id).first()


def list_user_blogs(user_id):
    return _newest_first(Blog.query.filter_by(user_id=user_id), Blog).all()


def get_owned_blog(blog_id, user_id):
    """Return the blog only if ``user_id`` owns it."""
    return Blog.query.filter_by(id=blog_id, user_id=user_id).first()


def create_blog(user_id, title, content):
    blog = Blog(user_id=user_id, title=title, content=content)
    db.session.add(blog)
    db.session.commit()
    return blog


def delete_owned_blog(blog_id, user_id):
    """Delete a blog if ``user_id`` owns it; returns the number of rows removed.

    Ownership is part of the DELETE predicate, so a non-owner simply
    removes nothing.
    """
    deleted = Blog.query.filter_by(id=blog_id, user_id=user_id).delete(synchronize_session=False)
    db.session.commit()
    return deleted


def save_contact_message(name, email, message):
    contact = ContactMessage(name=name, email=email, message=message)
    db.session.add(contact)
    db.session.commit()
    return contact


def list_contact_messages():
    return _newest_first(ContactMessage.query, ContactMessage).all()
