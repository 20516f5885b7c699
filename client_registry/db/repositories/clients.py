"""
Client repository: aggregate-root lookups and the client store.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from client_registry.db import models


class ClientStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, client_id) -> Optional[models.Client]:
        return get_client(self.db, client_id)

    def lock(self, client_id) -> Optional[models.Client]:
        """Row-lock the client so mutations of its collections are serialized."""
        return (
            self.db.query(models.Client)
            .filter(models.Client.id == client_id)
            .with_for_update()
            .first()
        )

    def find_by_tax_id(self, tax_id: str) -> Optional[models.Client]:
        return get_client_by_tax_id(self.db, tax_id)

    def add(self, client: models.Client) -> models.Client:
        self.db.add(client)
        self.db.flush()
        return client

    def save(self, client: models.Client) -> models.Client:
        self.db.add(client)
        self.db.flush()
        return client

    def remove(self, client: models.Client) -> None:
        self.db.delete(client)
        self.db.flush()


def get_client(db: Session, client_id) -> Optional[models.Client]:
    return db.query(models.Client).filter(models.Client.id == client_id).first()


def get_client_by_tax_id(db: Session, tax_id: str) -> Optional[models.Client]:
    """Lookup by canonical (digits-only) tax id."""
    return db.query(models.Client).filter(models.Client.tax_id == tax_id).first()


def get_clients(db: Session, skip: int = 0, limit: int = 100):
    return db.query(models.Client).order_by(models.Client.id).offset(skip).limit(limit).all()


def count_clients(db: Session) -> int:
    return db.query(models.Client).count()


def get_address(db: Session, client_id) -> Optional[models.Address]:
    return db.query(models.Address).filter(models.Address.client_id == client_id).first()
