from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session
from order_tracker.infrastructure.db import get_db
from order_tracker.application.errors import OrderTrackerError
from order_tracker.application.order_service import OrderService
from order_tracker.application.schemas import OrderCreate, OrderRead, OrderUpdate, OrderFilter, OrderStats

router = APIRouter(prefix="/orders", tags=["orders"])

@router.get("", response_model=list[OrderRead])
def list_orders(
    db: Session = Depends(get_db),
    status: Optional[str] = Query(None, description="Delivery status"),
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    invoice_status: Optional[str] = Query(None, alias="invoiceStatus"),
    customer_id: Optional[int] = Query(None, alias="customerId"),
    q: Optional[str] = Query(None, max_length=100, description="Search customer, product, note or order id"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of records to return"),
):
    """List orders newest first, optionally filtered."""
    try:
        filters = OrderFilter(
            status=status,
            payment_status=payment_status,
            invoice_status=invoice_status,
            customer_id=customer_id,
            q=q,
            skip=skip,
            limit=limit,
        )
    except SchemaValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return OrderService(db).list(filters)

@router.get("/stats", response_model=OrderStats)
def order_stats(db: Session = Depends(get_db)):
    return OrderService(db).stats()

@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    try:
        return OrderService(db).get(order_id)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("", response_model=OrderRead, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    try:
        return OrderService(db).create(payload)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.put("/{order_id}", response_model=OrderRead)
def update_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)):
    try:
        return OrderService(db).update(order_id, payload)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    try:
        OrderService(db).delete(order_id)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=204)
