"""
Models Package

Exports all models for easy importing.
"""

from typely.models.user import User
from typely.models.blog import Blog, ContactMessage, BLOG_STATUS_PENDING, BLOG_STATUS_APPROVED

__all__ = ['User', 'Blog', 'ContactMessage', 'BLOG_STATUS_PENDING', 'BLOG_STATUS_APPROVED']
