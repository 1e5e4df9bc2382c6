"""Storefront error taxonomy"""

from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog read errors"""
    pass


class CatalogUnavailable(CatalogError):
    """The catalog request did not complete with a success status"""
    pass


class ProductNotFound(CatalogError):
    """The requested product could not be fetched"""

    def __init__(self, product_id: str, message: Optional[str] = None):
        self.product_id = product_id
        super().__init__(message or f"Product not found: {product_id}")


class CatalogMalformed(CatalogError):
    """The catalog response could not be parsed into the expected shape"""
    pass


class CheckoutError(Exception):
    """Base exception for checkout errors"""
    pass


class ValidationError(CheckoutError):
    """
    Checkout input was rejected before any network call.

    `fields` names every offending form field; "items" is used
    when the cart snapshot is empty.
    """

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Invalid checkout input: {', '.join(self.fields)}")


class OrderSubmissionFailed(CheckoutError):
    """The order-creation request failed in transport or on the server"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class CheckoutInProgress(CheckoutError):
    """A submission is already in flight for this cart"""
    pass
