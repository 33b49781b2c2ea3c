# sellcore/errors.py
"""Typed failures raised by the listing core.

Each error carries the HTTP status the API layer answers with; the core
itself never builds responses.
"""


class ListingError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ListingError):
    """Missing or invalid required fields."""
    status_code = 400


class NotFoundError(ListingError):
    """The listing the caller referred to does not exist."""
    status_code = 404


class AuthorizationError(ListingError):
    """The acting user does not own the listing."""
    status_code = 403


class NoChangeError(ListingError):
    """Renewal without a change to price, image or shipping cost."""
    status_code = 400
