"""
Domain errors raised by the service modules.

Each error carries the HTTP status the API answers with; the handlers
registered in ``storefront.app`` do the translation.
"""

from __future__ import annotations


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShopError):
    status_code = 404


class InvalidRequestError(ShopError):
    status_code = 400


class InsufficientStockError(InvalidRequestError):
    def __init__(self, product_id: str, available: int, requested: int):
        super().__init__(f"Insufficient stock for product {product_id}")
        self.product_id = product_id
        self.available = available
        self.requested = requested


class ConflictError(ShopError):
    status_code = 409


class UploadTooLargeError(ShopError):
    status_code = 413
