import enum
from datetime import datetime, timezone
from sqlalchemy import TIMESTAMP, Column, Enum, Integer, String, Text, Uuid, func
from shared.core.database import CoreBase


class OutboxStatus(str, enum.Enum):
    pending = "pending"
    delivered = "delivered"
    # gave up after PROVISIONING_MAX_ATTEMPTS; needs an operator
    failed = "failed"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProvisioningOutbox(CoreBase):
    """Inventory record still owed to the stock service for a product.

    Written in the same transaction as the product, so a committed product
    always has a row here even when the inline provisioning call fails.
    The worker only picks up pending rows whose ``next_attempt_at`` has passed.
    """
    __tablename__ = "provisioning_outbox"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # no FK: the product may be deleted while its stock entry lives on
    product_id = Column(Uuid, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    status = Column(
        Enum(OutboxStatus, name="provisioning_status_enum"),
        nullable=False,
        default=OutboxStatus.pending,
        index=True,
    )
    attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    next_attempt_at = Column(TIMESTAMP(timezone=True), nullable=False,
                             default=utc_now, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    def as_stock_payload(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "relationId": str(self.product_id),
        }
