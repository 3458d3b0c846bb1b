from fastapi import APIRouter
from order_tracker.domain.status import vocabulary

router = APIRouter(prefix="/statuses", tags=["statuses"])

@router.get("")
def list_statuses():
    """Allowed status values per field, with their defaults and display labels."""
    return vocabulary()
