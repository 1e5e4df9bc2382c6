"""Cart API routes: dispatch shopper actions into the session's cart store"""

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Depends

from ..core.session import UserSession
from ..errors import CatalogError
from ..models.cart import CartAction, CartLine, CartState
from ..models.checkout import CheckoutState
from ..models.product import Product
from ..services.catalog_client import CatalogClient
from ..utils.formatters import format_price
from .dependencies import get_catalog_client, get_user_session
from .products import catalog_error

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["Cart"])

PANEL_ACTIONS = {
    "cart": {
        "toggle": CartAction.toggle_cart,
        "open": CartAction.open_cart,
        "close": CartAction.close_cart,
    },
    "checkout": {
        "toggle": CartAction.toggle_checkout,
        "open": CartAction.open_checkout,
        "close": CartAction.close_checkout,
    },
}


class AddToCartRequest(BaseModel):
    """Request to add a product to the cart"""
    product_id: str
    quantity: int = Field(default=1, ge=1, le=100)
    open_cart: bool = False


class UpdateCartItemRequest(BaseModel):
    """Request to set a line's quantity; zero or less removes it"""
    quantity: int


class CartLineView(BaseModel):
    product: Product
    quantity: int = Field(gt=0)
    line_total: float


class CartResponse(BaseModel):
    """Cart snapshot as shown to the shopper"""
    session_id: str
    items: list[CartLineView]
    item_count: int
    subtotal: float
    subtotal_display: str
    cart_open: bool
    checkout_open: bool
    checkout_state: CheckoutState

    @classmethod
    def from_session(cls, session: UserSession) -> "CartResponse":
        state: CartState = session.store.state
        return cls(
            session_id=session.session_id,
            items=[_line_view(line) for line in state.lines],
            item_count=state.item_count,
            subtotal=state.display_subtotal,
            subtotal_display=format_price(state.subtotal),
            cart_open=state.cart_open,
            checkout_open=state.checkout_open,
            checkout_state=session.checkout.state,
        )


def _line_view(line: CartLine) -> CartLineView:
    return CartLineView(
        product=line.product,
        quantity=line.quantity,
        line_total=round(line.line_total, 2),
    )


def get_editable_session(session: UserSession = Depends(get_user_session)) -> UserSession:
    """Session whose cart may change; refused while an order is being placed"""
    if session.checkout.state != CheckoutState.IDLE:
        raise HTTPException(
            status_code=409,
            detail=f"Cart is locked while checkout is {session.checkout.state.value}",
        )
    return session


@router.get("/cart", response_model=CartResponse)
async def get_cart(session: UserSession = Depends(get_user_session)):
    """Get the current cart snapshot"""
    return CartResponse.from_session(session)


@router.post("/cart/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: UserSession = Depends(get_editable_session),
    client: CatalogClient = Depends(get_catalog_client),
):
    """
    Fetch a product from the catalog and add `quantity` units of it.

    With `open_cart` set ("buy now") the cart panel is opened afterwards.
    """
    try:
        product = await client.get_product(request.product_id)
    except CatalogError as e:
        raise catalog_error(e)

    if not product.in_stock:
        raise HTTPException(status_code=409, detail=f"{product.title} is out of stock")

    for _ in range(request.quantity):
        session.store.dispatch(CartAction.add(product))
    if request.open_cart:
        session.store.dispatch(CartAction.open_cart())
    return CartResponse.from_session(session)


@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session: UserSession = Depends(get_editable_session),
):
    """Set a line's quantity"""
    session.store.dispatch(CartAction.set_quantity(product_id, request.quantity))
    return CartResponse.from_session(session)


@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session: UserSession = Depends(get_editable_session),
):
    """Remove a line from the cart"""
    session.store.dispatch(CartAction.remove(product_id))
    return CartResponse.from_session(session)


@router.delete("/cart", response_model=CartResponse)
async def clear_cart(session: UserSession = Depends(get_editable_session)):
    """Clear all items from the cart"""
    session.store.dispatch(CartAction.clear())
    return CartResponse.from_session(session)


@router.post("/{panel}/panel/{operation}", response_model=CartResponse)
async def change_panel(
    panel: str,
    operation: str,
    session: UserSession = Depends(get_user_session),
):
    """Toggle, open or close the cart or checkout panel"""
    action = PANEL_ACTIONS.get(panel, {}).get(operation)
    if action is None:
        raise HTTPException(status_code=404, detail=f"Unknown panel operation: {panel}/{operation}")

    session.store.dispatch(action())
    return CartResponse.from_session(session)
