"""
Pydantic request/response schemas, re-exported from one place.
"""

from .contacts import (
    PhoneCreate,
    PhoneUpdate,
    Phone,
    EmailCreate,
    EmailUpdate,
    Email,
)
from .clients import (
    AddressBase,
    AddressIn,
    Address,
    ClientBase,
    ClientCreate,
    ClientReplace,
    ClientUpdate,
    Client,
)

__all__ = [
    "PhoneCreate",
    "PhoneUpdate",
    "Phone",
    "EmailCreate",
    "EmailUpdate",
    "Email",
    "AddressBase",
    "AddressIn",
    "Address",
    "ClientBase",
    "ClientCreate",
    "ClientReplace",
    "ClientUpdate",
    "Client",
]
