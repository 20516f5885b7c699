from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from client_registry.db.models.contacts import PhoneKind
from client_registry.utils.formatting import only_digits

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _check_phone_digits(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if len(only_digits(value)) not in (10, 11):
        raise ValueError("phone number must have 10 or 11 digits")
    return value


class PhoneCreate(BaseModel):
    number: str = Field(..., max_length=20)
    kind: PhoneKind = PhoneKind.MOBILE
    principal: bool = False

    @field_validator("number")
    @classmethod
    def _validate_number(cls, v: str) -> str:
        return _check_phone_digits(v)


class PhoneUpdate(BaseModel):
    number: Optional[str] = Field(default=None, max_length=20)
    kind: Optional[PhoneKind] = None
    principal: Optional[bool] = None

    @field_validator("number")
    @classmethod
    def _validate_number(cls, v: Optional[str]) -> Optional[str]:
        return _check_phone_digits(v)


class Phone(BaseModel):
    id: int
    client_id: int
    digits: str
    formatted: str
    kind: PhoneKind
    is_principal: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class EmailCreate(BaseModel):
    address: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    principal: bool = False


class EmailUpdate(BaseModel):
    address: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    principal: Optional[bool] = None


class Email(BaseModel):
    id: int
    client_id: int
    address: str
    is_principal: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
