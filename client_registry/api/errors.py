"""
Translate registry errors into HTTP responses.
"""
from fastapi import HTTPException, status

from client_registry.engine import (
    DuplicateTaxId,
    DuplicateValue,
    InvalidChecksum,
    MinimumCardinalityViolation,
    NotFound,
    RegistryError,
    StorageUnavailable,
)

_STATUS_BY_ERROR = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (DuplicateTaxId, status.HTTP_409_CONFLICT),
    (DuplicateValue, status.HTTP_409_CONFLICT),
    (InvalidChecksum, status.HTTP_400_BAD_REQUEST),
    (MinimumCardinalityViolation, status.HTTP_400_BAD_REQUEST),
    (StorageUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exc: RegistryError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=status_code, detail={"kind": exc.kind, "message": exc.message})
