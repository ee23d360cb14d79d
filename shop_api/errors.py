"""Errors raised by the store and the product service.

The HTTP layer turns every ``ShopError`` into ``{"error": message}`` with
the error's ``status_code``.
"""


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    """Missing or malformed client input."""

    status_code = 400


class NotFoundError(ShopError):
    """The referenced product is not in the catalog."""

    status_code = 404


class StorageReadError(ShopError):
    """The catalog document could not be read or parsed."""


class StorageWriteError(ShopError):
    """The catalog document could not be written."""


class CatalogFullError(ShopError):
    """Every 6-digit product id is taken."""

    status_code = 503
