"""Cart state and actions"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .product import Product


class ActionType(str, Enum):
    """Actions understood by the cart store"""
    ADD = "add"
    REMOVE = "remove"
    SET_QUANTITY = "set_quantity"
    CLEAR = "clear"
    TOGGLE_CART = "toggle_cart"
    OPEN_CART = "open_cart"
    CLOSE_CART = "close_cart"
    TOGGLE_CHECKOUT = "toggle_checkout"
    OPEN_CHECKOUT = "open_checkout"
    CLOSE_CHECKOUT = "close_checkout"


@dataclass(frozen=True)
class CartAction:
    """
    A single message dispatched into the cart store.

    Only the payload fields relevant to `type` are read; use the
    constructors below rather than filling them in by hand.
    """
    type: ActionType
    product: Optional[Product] = None
    product_id: Optional[str] = None
    quantity: Optional[int] = None

    @classmethod
    def add(cls, product: Product) -> "CartAction":
        return cls(ActionType.ADD, product=product)

    @classmethod
    def remove(cls, product_id: str) -> "CartAction":
        return cls(ActionType.REMOVE, product_id=product_id)

    @classmethod
    def set_quantity(cls, product_id: str, quantity: int) -> "CartAction":
        return cls(ActionType.SET_QUANTITY, product_id=product_id, quantity=quantity)

    @classmethod
    def clear(cls) -> "CartAction":
        return cls(ActionType.CLEAR)

    @classmethod
    def toggle_cart(cls) -> "CartAction":
        return cls(ActionType.TOGGLE_CART)

    @classmethod
    def open_cart(cls) -> "CartAction":
        return cls(ActionType.OPEN_CART)

    @classmethod
    def close_cart(cls) -> "CartAction":
        return cls(ActionType.CLOSE_CART)

    @classmethod
    def toggle_checkout(cls) -> "CartAction":
        return cls(ActionType.TOGGLE_CHECKOUT)

    @classmethod
    def open_checkout(cls) -> "CartAction":
        return cls(ActionType.OPEN_CHECKOUT)

    @classmethod
    def close_checkout(cls) -> "CartAction":
        return cls(ActionType.CLOSE_CHECKOUT)


@dataclass(frozen=True)
class CartLine:
    """One product and its quantity in the cart"""
    product: Product
    quantity: int = 1

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartState:
    """Immutable snapshot of the cart"""
    lines: tuple[CartLine, ...] = ()
    cart_open: bool = False
    checkout_open: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        """Total number of units across all lines"""
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        """Sum of price x quantity, unrounded"""
        return sum((line.line_total for line in self.lines), 0.0)

    @property
    def display_subtotal(self) -> float:
        """Subtotal rounded to cents, for display only"""
        return round(self.subtotal, 2)

    def find(self, product_id: str) -> Optional[CartLine]:
        """Get the line for a product, if present"""
        return next(
            (line for line in self.lines if line.product_id == product_id),
            None,
        )
