from typing import NoReturn

from fastapi import status

from src.domain import errors
from src.libs.result import Error

# HTTP status per use-case error code
ERROR_STATUS = {
    errors.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    errors.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    errors.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    errors.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.ALREADY_RESOLVED: status.HTTP_409_CONFLICT,
    errors.CONFLICT: status.HTTP_409_CONFLICT,
    errors.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise the ClientError for a known error code, ServerError otherwise"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
