"""
Checkout Flow

Drives a cart from "being edited" to "order placed":

    IDLE -> SUBMITTING -> SUCCESS -> IDLE
                       -> FAILURE -> IDLE

The flow only reads cart snapshots. The store is changed solely by the
CLEAR and CLOSE_CHECKOUT dispatches after a successful submission.
"""

import asyncio
import logging
import re
from typing import Any, Callable, Optional, Protocol, Sequence

from ..errors import CheckoutInProgress, OrderSubmissionFailed, ValidationError
from ..models.cart import CartAction, CartLine
from ..models.checkout import (
    CheckoutForm,
    CheckoutState,
    OrderConfirmation,
    OrderItem,
    OrderRequest,
)
from ..utils.formatters import format_price
from .cart_store import CartStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

CheckoutListener = Callable[[CheckoutState, Any], None]


class OrderSubmitter(Protocol):
    async def create_order(self, order: OrderRequest) -> OrderConfirmation:
        ...


def validate_checkout(form: CheckoutForm, lines: Sequence[CartLine]) -> list[str]:
    """Return the names of offending fields, empty when the input is valid"""
    invalid = []
    if not form.name.strip():
        invalid.append("name")
    if not form.email.strip() or not EMAIL_PATTERN.match(form.email.strip()):
        invalid.append("email")
    if not form.address.strip():
        invalid.append("address")
    if not lines:
        invalid.append("items")
    return invalid


def build_order_request(form: CheckoutForm, lines: Sequence[CartLine]) -> OrderRequest:
    return OrderRequest(
        customer_name=form.name.strip(),
        customer_email=form.email.strip(),
        shipping_address=form.address.strip(),
        items=[
            OrderItem(product_id=line.product_id, quantity=line.quantity)
            for line in lines
        ],
    )


class CheckoutFlow:
    """
    Submits orders for one cart store.

    At most one submission is expected in flight; a second `submit`
    while SUBMITTING raises CheckoutInProgress. Cancelling the calling task
    returns the flow to IDLE; if the order was already placed the cart is
    still cleared.
    """

    def __init__(
        self,
        store: CartStore,
        client: OrderSubmitter,
        success_delay: float = 0.0,
    ):
        """
        Initialize checkout flow.

        Args:
            store: Cart store the flow reads from and clears on success
            client: Anything with an async `create_order`
            success_delay: Seconds to keep the confirmation visible
                before the cart is cleared (0 disables the pause)
        """
        self.store = store
        self.client = client
        self.success_delay = success_delay
        self._state = CheckoutState.IDLE
        self._listeners: list[CheckoutListener] = []

    @property
    def state(self) -> CheckoutState:
        return self._state

    def subscribe(self, listener: CheckoutListener) -> Callable[[], None]:
        """Register a `(state, payload)` callback; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, new_state: CheckoutState, payload: Any = None) -> None:
        logger.info(f"Checkout {self._state.value} -> {new_state.value}")
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state, payload)
            except Exception as e:
                logger.error(f"Checkout listener failed: {e}", exc_info=True)

    async def submit(
        self,
        form: CheckoutForm,
        lines: Optional[Sequence[CartLine]] = None,
    ) -> OrderConfirmation:
        """
        Validate the form, place the order and clear the cart.

        Args:
            form: Shopper's contact and shipping details
            lines: Cart snapshot to order; defaults to the store's current lines

        Raises:
            CheckoutInProgress: a submission is already running
            ValidationError: form or cart is invalid; nothing was sent
            OrderSubmissionFailed: the order request failed; cart is untouched
        """
        if self._state != CheckoutState.IDLE:
            raise CheckoutInProgress("An order submission is already in progress")

        if lines is None:
            lines = self.store.state.lines

        invalid = validate_checkout(form, lines)
        if invalid:
            logger.info(f"Checkout rejected, invalid fields: {invalid}")
            raise ValidationError(invalid)

        order = build_order_request(form, lines)
        total = sum(line.line_total for line in lines)

        self._transition(CheckoutState.SUBMITTING)
        try:
            try:
                confirmation = await self.client.create_order(order)
            except Exception as e:
                self._transition(CheckoutState.FAILURE, e)
                self._transition(CheckoutState.IDLE)
                if isinstance(e, OrderSubmissionFailed):
                    raise
                raise OrderSubmissionFailed(f"Failed to create order: {e}", cause=e) from e

            logger.info(f"Order placed for {order.customer_email}: {format_price(total)}")
            self._transition(CheckoutState.SUCCESS, confirmation)

            if self.success_delay > 0:
                await asyncio.sleep(self.success_delay)
        finally:
            # Cancellation must not leave the flow locked outside IDLE
            if self._state == CheckoutState.SUBMITTING:
                logger.warning("Checkout cancelled while submitting; cart left untouched")
                self._transition(CheckoutState.IDLE)
            elif self._state == CheckoutState.SUCCESS:
                self._finish()

        return confirmation

    def _finish(self) -> None:
        """Clear the ordered cart, close the checkout panel and return to IDLE"""
        self.store.dispatch(CartAction.clear())
        self.store.dispatch(CartAction.close_checkout())
        self._transition(CheckoutState.IDLE)
