# Storefront Services

from .catalog_client import CatalogClient
from .cart_store import CartStore, apply
from .checkout_flow import CheckoutFlow

__all__ = ["CatalogClient", "CartStore", "apply", "CheckoutFlow"]
