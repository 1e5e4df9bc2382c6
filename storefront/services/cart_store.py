"""
Cart Store

Single source of truth for a shopper's cart. State changes only through
`apply`, a total transition function: it never raises, and actions it
does not recognize leave the state unchanged.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..models.cart import ActionType, CartAction, CartLine, CartState
from ..models.product import Product

logger = logging.getLogger(__name__)

CartListener = Callable[[CartState], None]


def _add(state: CartState, product: Product) -> CartState:
    if state.find(product.id) is None:
        return replace(state, lines=state.lines + (CartLine(product=product),))

    return replace(
        state,
        lines=tuple(
            replace(line, quantity=line.quantity + 1) if line.product_id == product.id else line
            for line in state.lines
        ),
    )


def _remove(state: CartState, product_id: str) -> CartState:
    if state.find(product_id) is None:
        return state
    return replace(
        state,
        lines=tuple(line for line in state.lines if line.product_id != product_id),
    )


def _set_quantity(state: CartState, product_id: str, quantity: int) -> CartState:
    if quantity <= 0:
        return _remove(state, product_id)
    if state.find(product_id) is None:
        return state
    return replace(
        state,
        lines=tuple(
            replace(line, quantity=quantity) if line.product_id == product_id else line
            for line in state.lines
        ),
    )


def apply(state: CartState, action: CartAction) -> CartState:
    """Compute the state that results from applying `action` to `state`"""
    if not isinstance(action, CartAction):
        return state

    if action.type == ActionType.ADD:
        if not isinstance(action.product, Product):
            return state
        return _add(state, action.product)

    elif action.type == ActionType.REMOVE:
        if action.product_id is None:
            return state
        return _remove(state, action.product_id)

    elif action.type == ActionType.SET_QUANTITY:
        # bool is an int subclass but never a meaningful quantity
        if (
            action.product_id is None
            or not isinstance(action.quantity, int)
            or isinstance(action.quantity, bool)
        ):
            return state
        return _set_quantity(state, action.product_id, action.quantity)

    elif action.type == ActionType.CLEAR:
        return replace(state, lines=())

    elif action.type == ActionType.TOGGLE_CART:
        return replace(state, cart_open=not state.cart_open)

    elif action.type == ActionType.OPEN_CART:
        return replace(state, cart_open=True)

    elif action.type == ActionType.CLOSE_CART:
        return replace(state, cart_open=False)

    elif action.type == ActionType.TOGGLE_CHECKOUT:
        return replace(state, checkout_open=not state.checkout_open)

    elif action.type == ActionType.OPEN_CHECKOUT:
        return replace(state, checkout_open=True)

    elif action.type == ActionType.CLOSE_CHECKOUT:
        return replace(state, checkout_open=False)

    return state


class CartStore:
    """
    Holds the current cart snapshot for one session.

    Readers get immutable `CartState` snapshots; every change goes
    through `dispatch`, processed strictly in call order.
    """

    def __init__(self, initial: Optional[CartState] = None):
        self._state = initial if initial is not None else CartState()
        self._listeners: list[CartListener] = []

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def item_count(self) -> int:
        return self._state.item_count

    @property
    def subtotal(self) -> float:
        return self._state.subtotal

    @property
    def display_subtotal(self) -> float:
        return self._state.display_subtotal

    def dispatch(self, action: CartAction) -> CartState:
        """Apply an action and notify listeners if the state changed"""
        new_state = apply(self._state, action)
        logger.debug(f"Dispatched {getattr(action, 'type', action)!r}")

        if new_state is self._state:
            return new_state

        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                logger.error(f"Cart listener failed: {e}", exc_info=True)
        return new_state

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
