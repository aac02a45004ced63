"""
Services Package

Exports all services for easy importing.
"""

from typely.services.credentials import hash_password, verify_password

__all__ = [
    'hash_password',
    'verify_password',
]
