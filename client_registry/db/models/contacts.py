import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import relationship, synonym, validates

from client_registry.utils.formatting import format_phone, normalize_email
from .base import Base, now_utc


class PhoneKind(str, enum.Enum):
    MOBILE = "MOBILE"
    LANDLINE = "LANDLINE"
    BUSINESS = "BUSINESS"

    @property
    def expected_length(self) -> int:
        """Digit count the display mask expects; not enforced."""
        return 11 if self is PhoneKind.MOBILE else 10


class PhoneNumber(Base):
    __tablename__ = 'phone_numbers'
    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    digits = Column(String(11), nullable=False)
    kind = Column(Enum(PhoneKind, name='phone_kind', native_enum=False, length=20), nullable=False, default=PhoneKind.MOBILE)
    is_principal = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    owner_id = synonym('client_id')
    client = relationship("Client", back_populates="phones")

    __table_args__ = (
        UniqueConstraint('client_id', 'digits', name='uq_phone_numbers_client_digits'),
        Index(
            'uq_phone_numbers_one_principal',
            'client_id',
            unique=True,
            postgresql_where=text('is_principal'),
            sqlite_where=text('is_principal = 1'),
        ),
    )

    @property
    def comparison_key(self) -> str:
        return self.digits

    @property
    def formatted(self):
        return format_phone(self.digits)


class EmailAddress(Base):
    __tablename__ = 'email_addresses'
    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    address = Column(String(255), nullable=False)
    address_normalized = Column(String(255), nullable=False)
    is_principal = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    owner_id = synonym('client_id')
    client = relationship("Client", back_populates="emails")

    __table_args__ = (
        UniqueConstraint('client_id', 'address_normalized', name='uq_email_addresses_client_address'),
        Index(
            'uq_email_addresses_one_principal',
            'client_id',
            unique=True,
            postgresql_where=text('is_principal'),
            sqlite_where=text('is_principal = 1'),
        ),
    )

    @validates('address')
    def _sync_normalized_address(self, key, value):
        self.address_normalized = normalize_email(value)
        return value

    @property
    def comparison_key(self) -> str:
        return self.address_normalized
