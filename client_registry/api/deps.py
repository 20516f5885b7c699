"""
Common API dependencies.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from client_registry.db.database import get_db
from client_registry.services.client_registry_service import ClientRegistryService


def get_registry_service(db: Session = Depends(get_db)) -> ClientRegistryService:
    return ClientRegistryService(db)
