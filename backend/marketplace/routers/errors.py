"""
Mapping from domain errors to HTTP errors.
"""
from fastapi import HTTPException, status

from marketplace.core.errors import (
    AccountLockedError,
    AlreadyAdminError,
    DocumentValidationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    PasswordHashingError,
    PermissionDeniedError,
)

_STATUS_BY_ERROR = (
    (DocumentValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DuplicateEmailError, status.HTTP_409_CONFLICT),
    (AlreadyAdminError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (AccountLockedError, status.HTTP_401_UNAUTHORIZED),
    (PasswordHashingError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(error: ValueError) -> HTTPException:
    """Translate a service error; anything unrecognized is a 400."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
