from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

from order_tracker.domain.status import OrderStatus, PaymentStatus, InvoiceStatus, normalize

class CamelModel(BaseModel):
    """Reads snake_case or camelCase, writes camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class ProductCreate(CamelModel):
    name: str
    active: bool = True

class ProductActive(CamelModel):
    active: bool

class ProductRead(CamelModel):
    id: int
    name: str
    active: bool

class CustomerCreate(CamelModel):
    # Presence is checked by the service so a blank name is a 400, not a 422
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class CustomerRead(CamelModel):
    id: int
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime

# order_items.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1

class OrderItemIn(CamelModel):
    product_id: int
    # Missing or non-positive quantities are dropped, not rejected
    quantity: Optional[int] = Field(default=0, le=MAX_QUANTITY)

class _StatusFields(CamelModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    invoice_status: Optional[InvoiceStatus] = None

    @field_validator("status", mode="before")
    @classmethod
    def _order_status(cls, v):
        return normalize(OrderStatus, v)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _payment_status(cls, v):
        return normalize(PaymentStatus, v)

    @field_validator("invoice_status", mode="before")
    @classmethod
    def _invoice_status(cls, v):
        return normalize(InvoiceStatus, v)

class OrderCreate(_StatusFields):
    note: Optional[str] = None
    customer_id: Optional[int] = None
    # New customer to register when no existing customer was picked
    customer: Optional[CustomerCreate] = None
    items: list[OrderItemIn] = []

class OrderUpdate(_StatusFields):
    note: Optional[str] = None
    # None leaves the items alone; a list (even empty) replaces them
    items: Optional[list[OrderItemIn]] = None

class OrderItemRead(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    product: ProductRead

class OrderRead(CamelModel):
    id: int
    customer_id: int
    customer: CustomerRead
    status: OrderStatus
    payment_status: PaymentStatus
    invoice_status: InvoiceStatus
    note: Optional[str] = None
    created_at: datetime
    items: list[OrderItemRead]
    total_quantity: int

class OrderFilter(_StatusFields):
    customer_id: Optional[int] = None
    q: Optional[str] = None
    skip: int = 0
    limit: Optional[int] = None

class OrderStats(CamelModel):
    total_orders: int
    delivered: int
    in_preparation: int
    collected: int
    unique_customers: int
    total_quantity: int
    by_status: dict[str, int]
    by_payment_status: dict[str, int]
    by_invoice_status: dict[str, int]
