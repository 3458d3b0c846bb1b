from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from order_tracker.infrastructure.db import get_db
from order_tracker.application.errors import OrderTrackerError
from order_tracker.application.customer_service import CustomerService
from order_tracker.application.schemas import CustomerCreate, CustomerRead

router = APIRouter(prefix="/customers", tags=["customers"])

@router.get("", response_model=list[CustomerRead])
def list_customers(
    db: Session = Depends(get_db),
    q: Optional[str] = Query(None, max_length=100, description="Filter by customer name")
):
    """List customers, newest first."""
    return CustomerService(db).list(q)

@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    try:
        return CustomerService(db).get(customer_id)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("", response_model=CustomerRead, status_code=201)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    try:
        return CustomerService(db).create(payload)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(customer_id: int, payload: CustomerCreate, db: Session = Depends(get_db)):
    try:
        return CustomerService(db).update(customer_id, payload)
    except OrderTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
