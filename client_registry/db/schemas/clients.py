from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .contacts import Email, EmailCreate, Phone, PhoneCreate


class AddressBase(BaseModel):
    postal_code: str = Field(..., max_length=9, pattern=r"^\d{5}-?\d{3}$")
    street: str = Field(..., min_length=1, max_length=255)
    complement: Optional[str] = Field(default=None, max_length=255)
    district: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=2, max_length=2)


class AddressIn(AddressBase):
    pass


class Address(AddressBase):
    id: int
    client_id: int
    postal_code_formatted: str
    model_config = ConfigDict(from_attributes=True)


class ClientBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    tax_id: str = Field(..., max_length=14)


class ClientCreate(ClientBase):
    address: Optional[AddressIn] = None
    phones: List[PhoneCreate] = Field(default_factory=list)
    emails: List[EmailCreate] = Field(default_factory=list)


class ClientReplace(ClientCreate):
    """Full update: every collection is replaced by the payload."""


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    tax_id: Optional[str] = Field(default=None, max_length=14)
    address: Optional[AddressIn] = None


class Client(BaseModel):
    id: int
    name: str
    tax_id: str
    tax_id_formatted: str
    address: Optional[Address] = None
    phones: List[Phone] = []
    emails: List[Email] = []
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
