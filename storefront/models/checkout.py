"""Checkout models"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckoutState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


class CheckoutForm(BaseModel):
    """Shipping and contact details entered by the shopper"""
    name: str = ""
    email: str = ""
    address: str = ""


class OrderItem(BaseModel):
    """Item in an order request"""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    quantity: int = Field(gt=0)


class OrderRequest(BaseModel):
    """Body of POST /orders"""

    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    shipping_address: str = Field(alias="shippingAddress")
    items: list[OrderItem]


class OrderConfirmation(BaseModel):
    """Envelope returned by the order service on success"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: bool = True
    status_code: int = Field(default=200, alias="statusCode")
    message: str = ""
    data: Optional[Any] = None
