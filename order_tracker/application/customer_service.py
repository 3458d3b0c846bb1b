from typing import Optional
from sqlalchemy.orm import Session
from order_tracker.core.logging_config import get_logger
from order_tracker.domain.models import Customer
from .errors import NotFoundError, ValidationError
from .schemas import CustomerCreate
from .search import LIKE_ESCAPE, contains_pattern

logger = get_logger(__name__)

def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None

class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, q: Optional[str] = None):
        query = self.db.query(Customer)
        if q:
            query = query.filter(Customer.name.ilike(contains_pattern(q.strip()), escape=LIKE_ESCAPE))
        return query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()

    def get(self, customer_id: int) -> Customer:
        customer = self.db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def _validated_fields(self, data: CustomerCreate) -> dict:
        name = _clean(data.name)
        if not name:
            raise ValidationError("Customer name is required")
        return {"name": name, "phone": _clean(data.phone), "address": _clean(data.address)}

    def create(self, data: CustomerCreate, commit: bool = True) -> Customer:
        obj = Customer(**self._validated_fields(data))
        self.db.add(obj)
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        logger.info(
            f"Customer {obj.id} created",
            extra={'extra_fields': {'customer_id': obj.id, 'phone': obj.phone}}
        )
        return obj

    def update(self, customer_id: int, data: CustomerCreate) -> Customer:
        """Replace name, phone and address of an existing customer."""
        customer = self.get(customer_id)
        fields = self._validated_fields(data)
        customer.name = fields["name"]
        customer.phone = fields["phone"]
        customer.address = fields["address"]
        self.db.commit()
        self.db.refresh(customer)
        logger.info(
            f"Customer {customer.id} updated",
            extra={'extra_fields': {'customer_id': customer.id, 'phone': customer.phone}}
        )
        return customer

    def resolve_or_create(self, customer_id: Optional[int], new_customer: Optional[CustomerCreate]) -> Customer:
        """Customer an order is placed for.

        An inline new customer wins over an id; the new row is flushed but not
        committed so it shares the caller's transaction.
        """
        if new_customer is not None:
            return self.create(new_customer, commit=False)
        if customer_id is None:
            raise ValidationError("Customer is required")
        return self.get(customer_id)
