from typing import Iterable
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from order_tracker.core.logging_config import get_logger
from order_tracker.domain.models import Product
from .errors import ConflictError, NotFoundError, ValidationError
from .schemas import ProductCreate

logger = get_logger(__name__)

class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, include_inactive: bool = False):
        query = self.db.query(Product)
        if not include_inactive:
            query = query.filter(Product.active.is_(True))
        return query.order_by(Product.id.asc()).all()

    def get(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def get_many(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """Products keyed by id; raises if any id does not resolve."""
        wanted = set(product_ids)
        if not wanted:
            return {}
        found = {
            p.id: p
            for p in self.db.scalars(select(Product).where(Product.id.in_(wanted)))
        }
        missing = sorted(wanted - found.keys())
        if missing:
            raise NotFoundError(f"Product not found: {', '.join(str(i) for i in missing)}")
        return found

    def create(self, data: ProductCreate) -> Product:
        name = data.name.strip()
        if not name:
            raise ValidationError("Product name is required")
        obj = Product(name=name, active=data.active)
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Product '{name}' already exists")
        self.db.refresh(obj)
        logger.info(f"Product {obj.id} created", extra={'extra_fields': {'product_id': obj.id, 'name': obj.name}})
        return obj

    def ensure(self, name: str, active: bool = True) -> Product:
        """Insert ``name`` unless a product with that name exists already."""
        product = self.db.scalar(select(Product).where(Product.name == name))
        if product is None:
            product = Product(name=name, active=active)
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        return product

    def set_active(self, product_id: int, active: bool) -> Product:
        product = self.get(product_id)
        product.active = active
        self.db.commit()
        self.db.refresh(product)
        logger.info(
            f"Product {product.id} {'activated' if active else 'deactivated'}",
            extra={'extra_fields': {'product_id': product.id}}
        )
        return product
