"""
Clients API endpoints.

CRUD for clients plus the nested address, phone and email collections.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from client_registry.api.deps import get_registry_service
from client_registry.api.errors import to_http_exception
from client_registry.db import schemas
from client_registry.engine import RegistryError
from client_registry.services.client_registry_service import ClientRegistryService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("/", response_model=schemas.Client, status_code=status.HTTP_201_CREATED)
def create_client_endpoint(
    client: schemas.ClientCreate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.create_client(client)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/", response_model=List[schemas.Client])
def list_clients_endpoint(
    skip: int = 0,
    limit: int = 100,
    service: ClientRegistryService = Depends(get_registry_service),
):
    return service.list_clients(skip=skip, limit=limit)


@router.get("/by-tax-id/{tax_id}", response_model=schemas.Client)
def get_client_by_tax_id_endpoint(
    tax_id: str,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.get_client_by_tax_id(tax_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{client_id}", response_model=schemas.Client)
def get_client_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.get_client(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.patch("/{client_id}", response_model=schemas.Client)
def update_client_endpoint(
    client_id: int,
    client: schemas.ClientUpdate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.update_client(client_id, client)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{client_id}", response_model=schemas.Client)
def replace_client_endpoint(
    client_id: int,
    client: schemas.ClientReplace,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.replace_client(client_id, client)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        service.delete_client(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Address
@router.get("/{client_id}/address", response_model=schemas.Address)
def get_address_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.get_address(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{client_id}/address", response_model=schemas.Address)
def set_address_endpoint(
    client_id: int,
    address: schemas.AddressIn,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.set_address(client_id, address)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{client_id}/address", status_code=status.HTTP_204_NO_CONTENT)
def delete_address_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        service.delete_address(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Phones
@router.post("/{client_id}/phones", response_model=schemas.Phone, status_code=status.HTTP_201_CREATED)
def add_phone_endpoint(
    client_id: int,
    phone: schemas.PhoneCreate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.add_phone(client_id, phone)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{client_id}/phones", response_model=List[schemas.Phone])
def list_phones_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.list_phones(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{client_id}/phones/principal", response_model=Optional[schemas.Phone])
def get_principal_phone_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.get_principal_phone(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


# Emails
@router.post("/{client_id}/emails", response_model=schemas.Email, status_code=status.HTTP_201_CREATED)
def add_email_endpoint(
    client_id: int,
    email: schemas.EmailCreate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.add_email(client_id, email)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{client_id}/emails", response_model=List[schemas.Email])
def list_emails_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.list_emails(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{client_id}/emails/principal", response_model=Optional[schemas.Email])
def get_principal_email_endpoint(
    client_id: int,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.get_principal_email(client_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
