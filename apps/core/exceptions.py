# apps/core/exceptions.py
"""
Error taxonomy raised by the service layer and mapped to JSON responses by
``apps.core.api.api_endpoint``.
"""


class ServiceError(Exception):
    """Base class for errors that carry a user-facing message and HTTP status."""

    status_code = 400
    default_message = 'Request could not be processed'

    def __init__(self, message=None, errors=None):
        self.message = str(message or self.default_message)
        self.errors = errors or {}
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = 400
    default_message = 'Invalid request data'


class NotFoundError(ServiceError):
    """Record is absent or outside the caller's hostel."""

    status_code = 404
    default_message = 'Not found'


class ConflictError(ServiceError):
    """The operation would violate an invariant."""

    status_code = 400
    default_message = 'Request conflicts with the current state'


class StorageError(ServiceError):
    """Underlying persistence failure. The message is never shown to callers."""

    status_code = 500
    default_message = 'Server error'


class PermissionDeniedError(ServiceError):
    """The caller's role may not perform the operation."""

    status_code = 403
    default_message = 'You do not have permission to perform this action'
