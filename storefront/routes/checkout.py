"""Checkout API routes"""

import logging
from typing import Any, Optional

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Depends

from ..core.session import UserSession
from ..errors import CheckoutInProgress, OrderSubmissionFailed, ValidationError
from ..models.checkout import CheckoutForm
from .dependencies import get_user_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["Checkout"])


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    message: str
    order: Optional[Any] = None


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    form: CheckoutForm,
    session: UserSession = Depends(get_user_session),
):
    """
    Place an order for the session's cart.

    On success the cart is cleared and the checkout panel closed.
    On failure the cart is kept so the shopper can retry.
    """
    try:
        confirmation = await session.checkout.submit(form)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "fields": e.fields},
        )
    except CheckoutInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except OrderSubmissionFailed as e:
        logger.warning(f"Checkout failed for session {session.session_id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return CheckoutResponse(
        success=True,
        message=confirmation.message or "Order placed successfully!",
        order=confirmation.data,
    )
