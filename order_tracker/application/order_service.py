"""
Order placement, editing and listing.

Writes are all-or-nothing: every public write method either commits the whole
change or rolls the session back and re-raises.
"""

from contextlib import contextmanager
from typing import Iterable, Optional
from sqlalchemy import func, or_, select, cast, String
from sqlalchemy.orm import Session, selectinload
from order_tracker.core.logging_config import get_logger
from order_tracker.domain.models import Customer, Order, OrderItem, Product
from order_tracker.domain.status import (
    OrderStatus,
    PaymentStatus,
    InvoiceStatus,
    DEFAULT_ORDER_STATUS,
    DEFAULT_PAYMENT_STATUS,
    DEFAULT_INVOICE_STATUS,
)
from .customer_service import CustomerService
from .errors import NotFoundError, ValidationError
from .product_service import ProductService
from .search import LIKE_ESCAPE, contains_pattern
from .schemas import OrderCreate, OrderUpdate, OrderFilter, OrderItemIn, OrderStats

logger = get_logger(__name__)

def positive_items(items: Iterable[OrderItemIn]) -> list[OrderItemIn]:
    """Drop lines whose quantity is missing, zero or negative."""
    return [i for i in items if i.quantity and i.quantity > 0]

class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.customers = CustomerService(db)
        self.products = ProductService(db)

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _query(self):
        return self.db.query(Order).options(
            selectinload(Order.customer),
            selectinload(Order.items).selectinload(OrderItem.product),
        )

    def _build_items(self, items: list[OrderItemIn]) -> list[OrderItem]:
        products = self.products.get_many(i.product_id for i in items)
        return [
            OrderItem(product=products[i.product_id], quantity=i.quantity)
            for i in items
        ]

    def list(self, filters: Optional[OrderFilter] = None):
        filters = filters or OrderFilter()
        query = self._query()

        if filters.status is not None:
            query = query.filter(Order.status == filters.status.value)
        if filters.payment_status is not None:
            query = query.filter(Order.payment_status == filters.payment_status.value)
        if filters.invoice_status is not None:
            query = query.filter(Order.invoice_status == filters.invoice_status.value)
        if filters.customer_id is not None:
            query = query.filter(Order.customer_id == filters.customer_id)
        if filters.q and filters.q.strip():
            term = contains_pattern(filters.q.strip())
            query = query.filter(or_(
                Order.customer.has(or_(Customer.name.ilike(term, escape=LIKE_ESCAPE), Customer.phone.ilike(term, escape=LIKE_ESCAPE))),
                Order.items.any(OrderItem.product.has(Product.name.ilike(term, escape=LIKE_ESCAPE))),
                Order.note.ilike(term, escape=LIKE_ESCAPE),
                cast(Order.id, String) == filters.q.strip(),
            ))

        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        if filters.skip:
            query = query.offset(filters.skip)
        if filters.limit is not None:
            query = query.limit(filters.limit)
        return query.all()

    def get(self, order_id: int) -> Order:
        order = self._query().filter(Order.id == order_id).first()
        if order is None:
            raise NotFoundError("Order not found")
        return order

    def create(self, data: OrderCreate) -> Order:
        items = positive_items(data.items)
        # ids start at 1; 0 or below means no customer was picked
        customer_id = data.customer_id if data.customer_id and data.customer_id > 0 else None
        if customer_id is None and data.customer is None:
            raise ValidationError("Customer and at least one product are required")
        if not items:
            raise ValidationError("Quantity must be greater than 0")

        with self._transaction():
            customer = self.customers.resolve_or_create(customer_id, data.customer)
            order = Order(
                customer=customer,
                status=(data.status or DEFAULT_ORDER_STATUS).value,
                payment_status=(data.payment_status or DEFAULT_PAYMENT_STATUS).value,
                invoice_status=(data.invoice_status or DEFAULT_INVOICE_STATUS).value,
                note=data.note,
                items=self._build_items(items),
            )
            self.db.add(order)
            self.db.flush()

        logger.info(
            f"Order {order.id} created",
            extra={'extra_fields': {
                'order_id': order.id,
                'customer_id': order.customer_id,
                'items': len(items),
                'total_quantity': order.total_quantity,
            }}
        )
        return self.get(order.id)

    def update(self, order_id: int, data: OrderUpdate) -> Order:
        """Apply a partial update; a supplied item list replaces the current one."""
        with self._transaction():
            order = self.db.get(Order, order_id)
            if order is None:
                raise NotFoundError("Order not found")

            if data.status is not None:
                order.status = data.status.value
            if data.payment_status is not None:
                order.payment_status = data.payment_status.value
            if data.invoice_status is not None:
                order.invoice_status = data.invoice_status.value
            # an explicit null clears the note; an omitted note is left alone
            if "note" in data.model_fields_set:
                order.note = data.note

            if data.items is not None:
                order.items.clear()
                self.db.flush()
                order.items.extend(self._build_items(positive_items(data.items)))
                self.db.flush()

        logger.info(
            f"Order {order_id} updated",
            extra={'extra_fields': {
                'order_id': order_id,
                'fields': sorted(data.model_dump(exclude_none=True).keys()),
            }}
        )
        # expire so the reload below sees the committed item set
        self.db.expire_all()
        return self.get(order_id)

    def delete(self, order_id: int) -> None:
        with self._transaction():
            order = self.db.get(Order, order_id)
            if order is None:
                raise NotFoundError("Order not found")
            self.db.delete(order)
        logger.info(f"Order {order_id} deleted", extra={'extra_fields': {'order_id': order_id}})

    def stats(self) -> OrderStats:
        def counts(column, enum_cls):
            rows = self.db.execute(select(column, func.count()).group_by(column)).all()
            found = {value: n for value, n in rows}
            return {member.value: found.get(member.value, 0) for member in enum_cls}

        by_status = counts(Order.status, OrderStatus)
        by_payment = counts(Order.payment_status, PaymentStatus)
        by_invoice = counts(Order.invoice_status, InvoiceStatus)

        total_orders = self.db.scalar(select(func.count(Order.id))) or 0
        unique_customers = self.db.scalar(select(func.count(func.distinct(Order.customer_id)))) or 0
        total_quantity = self.db.scalar(select(func.coalesce(func.sum(OrderItem.quantity), 0))) or 0

        return OrderStats(
            total_orders=total_orders,
            delivered=by_status[OrderStatus.DELIVERED.value],
            in_preparation=by_status[OrderStatus.IN_PREPARATION.value],
            collected=total_orders - by_payment[PaymentStatus.NOT_COLLECTED.value],
            unique_customers=unique_customers,
            total_quantity=int(total_quantity),
            by_status=by_status,
            by_payment_status=by_payment,
            by_invoice_status=by_invoice,
        )
