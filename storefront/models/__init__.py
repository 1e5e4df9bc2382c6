# Storefront Models

from .product import (
    Product,
    ProductFilter,
    ProductPage,
    PaginationMeta,
    SortOrder,
)
from .cart import ActionType, CartAction, CartLine, CartState
from .checkout import (
    CheckoutForm,
    CheckoutState,
    OrderConfirmation,
    OrderItem,
    OrderRequest,
)

__all__ = [
    "Product",
    "ProductFilter",
    "ProductPage",
    "PaginationMeta",
    "SortOrder",
    "ActionType",
    "CartAction",
    "CartLine",
    "CartState",
    "CheckoutForm",
    "CheckoutState",
    "OrderConfirmation",
    "OrderItem",
    "OrderRequest",
]
