from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from client_registry.engine.checksum import format_tax_id
from client_registry.utils.formatting import format_postal_code
from .base import Base, now_utc


class Client(Base):
    __tablename__ = 'clients'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    # Canonical digits only; see tax_id_formatted for display.
    tax_id = Column(String(11), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    address = relationship(
        "Address", back_populates="client", uselist=False, cascade="all, delete-orphan"
    )
    phones = relationship(
        "PhoneNumber", back_populates="client", cascade="all, delete-orphan", order_by="PhoneNumber.id"
    )
    emails = relationship(
        "EmailAddress", back_populates="client", cascade="all, delete-orphan", order_by="EmailAddress.id"
    )

    @property
    def tax_id_formatted(self):
        return format_tax_id(self.tax_id)


class Address(Base):
    __tablename__ = 'addresses'
    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id', ondelete='CASCADE'), nullable=False, unique=True)
    postal_code = Column(String(8), nullable=False)
    street = Column(String(255), nullable=False)
    complement = Column(String(255), nullable=True)
    district = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    client = relationship("Client", back_populates="address")

    @property
    def postal_code_formatted(self):
        return format_postal_code(self.postal_code)
