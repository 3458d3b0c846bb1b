"""Seed the product catalogue. Run with ``python -m order_tracker.seed``."""

import time
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from order_tracker.core import get_settings, setup_logging, get_logger
from order_tracker.application.product_service import ProductService
from order_tracker.infrastructure.db import SessionLocal, engine, init_models

MAX_ATTEMPTS = 30
SLEEP_SECONDS = 2

PRODUCTS = [
    "ideal pet şişe 0.33",
    "ideal pet şişe 0.50",
    "ideal pet şişe 5l",
    "ideal pet şişe 1,5 l",
    "ideal pet şişe 19",
    "ideal bardak su 200cc",
    "limonata",
    "meyveli soda",
    "sade soda",
    "şalgam",
]

logger = get_logger(__name__)

def wait_for_database(max_attempts: int = MAX_ATTEMPTS, delay: float = SLEEP_SECONDS) -> None:
    for attempt in range(1, max_attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database ready after {attempt} attempt(s)")
            return
        except OperationalError as e:
            logger.warning(f"Database not ready (attempt {attempt}): {e}")
            time.sleep(delay)
    raise SystemExit("Database not ready after max attempts")

def seed_products(session, names=PRODUCTS) -> int:
    """Insert missing products; returns how many were added."""
    service = ProductService(session)
    before = len(service.list(include_inactive=True))
    for name in names:
        service.ensure(name)
    return len(service.list(include_inactive=True)) - before

def main():
    setup_logging(service_name=get_settings().SERVICE_NAME + "-seed")
    wait_for_database()
    init_models()
    with SessionLocal() as session:
        added = seed_products(session)
    logger.info(f"Seed complete: {added} product(s) added")

if __name__ == "__main__":
    main()
