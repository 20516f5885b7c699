"""
SQLAlchemy models for the client registry.

Exposes `Base`, `now_utc`, and all ORM classes from one place.
"""

from .base import Base, now_utc  # re-export

from .clients import Client, Address
from .contacts import PhoneKind, PhoneNumber, EmailAddress

__all__ = [
    "Base",
    "now_utc",
    "Client",
    "Address",
    "PhoneKind",
    "PhoneNumber",
    "EmailAddress",
]
