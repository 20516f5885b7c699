"""
Phone and email API endpoints addressed by their own id.
"""
from fastapi import APIRouter, Depends, Response, status

from client_registry.api.deps import get_registry_service
from client_registry.api.errors import to_http_exception
from client_registry.db import schemas
from client_registry.engine import RegistryError
from client_registry.services.client_registry_service import ClientRegistryService

phones_router = APIRouter(prefix="/phones", tags=["phones"])
emails_router = APIRouter(prefix="/emails", tags=["emails"])


@phones_router.get("/{phone_id}", response_model=schemas.Phone)
def get_phone_endpoint(phone_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        return service.get_phone(phone_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@phones_router.put("/{phone_id}", response_model=schemas.Phone)
def update_phone_endpoint(
    phone_id: int,
    phone: schemas.PhoneUpdate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.update_phone(phone_id, phone)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@phones_router.delete("/{phone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_phone_endpoint(phone_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        service.delete_phone(phone_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@phones_router.put("/{phone_id}/principal", response_model=schemas.Phone)
def designate_principal_phone_endpoint(phone_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        return service.designate_principal_phone(phone_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@emails_router.get("/{email_id}", response_model=schemas.Email)
def get_email_endpoint(email_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        return service.get_email(email_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@emails_router.put("/{email_id}", response_model=schemas.Email)
def update_email_endpoint(
    email_id: int,
    email: schemas.EmailUpdate,
    service: ClientRegistryService = Depends(get_registry_service),
):
    try:
        return service.update_email(email_id, email)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc


@emails_router.delete("/{email_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_email_endpoint(email_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        service.delete_email(email_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@emails_router.put("/{email_id}/principal", response_model=schemas.Email)
def designate_principal_email_endpoint(email_id: int, service: ClientRegistryService = Depends(get_registry_service)):
    try:
        return service.designate_principal_email(email_id)
    except RegistryError as exc:
        raise to_http_exception(exc) from exc
