"""Retries stock provisioning for products whose inline call did not go through.

Run with ``python -m core_service.app.services.provisioning_worker``.
"""
import logging
import time
from datetime import datetime, timedelta
from typing import Optional

import requests
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.core.database import CoreSessionLocal

from ..models.provisioning_outbox import OutboxStatus, ProvisioningOutbox, utc_now
from ..utils import stock_client

logger = logging.getLogger(__name__)

SERVICE_USERNAME = "core-service"


def backoff_delay(attempts: int) -> timedelta:
    seconds = settings.PROVISIONING_BACKOFF_SECONDS * 2 ** max(attempts - 1, 0)
    return timedelta(seconds=min(seconds, settings.PROVISIONING_MAX_BACKOFF_SECONDS))


def mark_delivered(db: Session, entry: ProvisioningOutbox) -> None:
    entry.status = OutboxStatus.delivered
    entry.attempts += 1
    entry.last_error = None
    db.commit()
    logger.info(f"Stock provisioned for product {entry.product_id}")


def record_failed_attempt(
        db: Session,
        entry: ProvisioningOutbox,
        error: Exception,
        now: Optional[datetime] = None) -> None:
    now = now or utc_now()
    entry.attempts += 1
    entry.last_error = str(error)
    entry.next_attempt_at = now + backoff_delay(entry.attempts)
    if entry.attempts >= settings.PROVISIONING_MAX_ATTEMPTS:
        entry.status = OutboxStatus.failed
    db.commit()

    if entry.status == OutboxStatus.failed:
        logger.error(
            f"Stock provisioning abandoned for product {entry.product_id} "
            f"after {entry.attempts} attempt(s): {error}")
    else:
        logger.warning(
            f"Stock provisioning pending for product {entry.product_id} "
            f"after {entry.attempts} attempt(s): {error}")


def pending_entries(db: Session, limit: int, now: Optional[datetime] = None) -> list[ProvisioningOutbox]:
    """Pending rows that are due.

    Rows are created with ``next_attempt_at`` past the inline call's window,
    so a row whose request is still talking to the stock service is never due.
    """
    now = now or utc_now()
    return (
        db.query(ProvisioningOutbox)
        .filter(
            ProvisioningOutbox.status == OutboxStatus.pending,
            ProvisioningOutbox.next_attempt_at <= now,
        )
        .order_by(ProvisioningOutbox.id)
        .limit(limit)
        .all()
    )


def service_token() -> str:
    return auth.create_access_token(
        {"username": SERVICE_USERNAME},
        expires_minutes=settings.SERVICE_TOKEN_EXPIRE_MINUTES,
    )


def retry_pending_provisioning(
        db: Session,
        session: Optional[requests.Session] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None) -> int:
    """Replay due outbox entries once each. Returns how many got delivered."""
    now = now or utc_now()
    entries = pending_entries(db, limit or settings.PROVISIONING_BATCH_SIZE, now=now)
    if not entries:
        return 0

    token = service_token()
    delivered = 0
    for entry in entries:
        try:
            stock_client.create_product_in_stock(
                entry.as_stock_payload(), token, session=session)
        except requests.RequestException as e:
            record_failed_attempt(db, entry, e, now=now)
            continue

        mark_delivered(db, entry)
        delivered += 1

    logger.info(f"Provisioning retry: {delivered}/{len(entries)} delivered")
    return delivered


def run_forever(interval: Optional[int] = None) -> None:
    interval = interval or settings.PROVISIONING_RETRY_INTERVAL
    logger.info(f"Provisioning worker started, polling every {interval}s")
    while True:
        db = CoreSessionLocal()
        try:
            retry_pending_provisioning(db)
        except Exception:
            db.rollback()
            logger.exception("Provisioning worker iteration failed")
        finally:
            db.close()
        time.sleep(interval)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s]: %(message)s"
    )
    try:
        run_forever()
    except KeyboardInterrupt:
        logger.info("Provisioning worker stopped")
