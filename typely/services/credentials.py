"""
Credential Store

Password hashing on top of werkzeug's salted PBKDF2 helpers. The work
factor is pinned by ``PASSWORD_HASH_METHOD`` so every hash in the database
carries the same cost.
"""

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(plaintext, method=None):
    """Return a salted one-way digest of ``plaintext``.

    Two calls with the same input produce different digests.
    """
    if method is None:
        method = current_app.config['PASSWORD_HASH_METHOD']
    return generate_password_hash(plaintext, method=method)


def verify_password(plaintext, digest):
    """Check ``plaintext`` against a stored digest.

    Malformed digests (empty, truncated, unknown method) verify as False.
    """
    if not digest:
        return False
    try:
        return check_password_hash(digest, plaintext)
    except ValueError:
        return False
