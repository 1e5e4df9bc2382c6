# Storefront Routes

from .products import router as products_router
from .sessions import router as sessions_router
from .cart import router as cart_router
from .checkout import router as checkout_router

__all__ = ["products_router", "sessions_router", "cart_router", "checkout_router"]
