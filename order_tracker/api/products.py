from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from order_tracker.infrastructure.db import get_db
from order_tracker.application.errors import OrderTrackerError
from order_tracker.application.product_service import ProductService
from order_tracker.application.schemas import ProductCreate, ProductRead, ProductActive

router = APIRouter(prefix="/products", tags=["products"])

@router.get("", response_model=list[ProductRead])
def list_products(
    db: Session = Depends(get_db),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    """Products that can be put on an order, by id."""
    return ProductService(db).list(include_inactive=include_inactive)

@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get(product_id)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("", response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return ProductService(db).create(payload)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.patch("/{product_id}", response_model=ProductRead)
def set_product_active(product_id: int, payload: ProductActive, db: Session = Depends(get_db)):
    try:
        return ProductService(db).set_active(product_id, payload.active)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
