# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(StorefrontError, ValueError):
    status_code = 400


class NotFound(StorefrontError, LookupError):
    status_code = 404


class Forbidden(StorefrontError, PermissionError):
    status_code = 403


class Conflict(StorefrontError):
    status_code = 409
