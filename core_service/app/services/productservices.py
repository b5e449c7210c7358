import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

import requests
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.utils.app_status_code import AppStatusCode
from shared.helpers.json_response_helper import error_response

from ..models.products import Product
from ..models.provisioning_outbox import ProvisioningOutbox, utc_now
from ..schemas.productschema import ProductCreate, ProductUpdate
from ..utils import stock_client
from . import categoryservices, provisioning_worker

logger = logging.getLogger(__name__)

INITIAL_STOCK_QUANTITY = 0


def create_product(
        db: Session,
        payload: ProductCreate,
        authorization: Optional[str],
        session: Optional[requests.Session] = None) -> Product:
    """Create a product, then provision its stock record on the stock service.

    The product, its new categories and the outbox entry are committed
    together before the stock service is called. A failing provisioning call
    propagates to the caller while the product stays committed; the outbox
    entry keeps it visible to the provisioning worker.
    """
    try:
        categories = categoryservices.resolve_categories(
            db, payload.categories)

        product = Product(
            name=payload.name,
            description=payload.description or "",
            image_url=payload.image or "",
            price=payload.price,
            categories=categories,
        )
        db.add(product)
        db.flush()  # generates product.id

        outbox = ProvisioningOutbox(
            product_id=product.id,
            name=product.name,
            quantity=INITIAL_STOCK_QUANTITY,
            # the inline call below owns the entry until then
            next_attempt_at=utc_now() + timedelta(
                seconds=settings.PROVISIONING_GRACE_SECONDS),
        )
        db.add(outbox)

        db.commit()

    except HTTPException:
        db.rollback()
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception("DB error while creating product")
        raise

    db.refresh(product)
    logger.info(f"Product {product.id} created")

    # forwarded unmodified; the stock service is the one verifying it
    token = auth.extract_bearer_token(authorization)
    try:
        stock_client.create_product_in_stock(
            outbox.as_stock_payload(), token, session=session)
    except requests.RequestException as e:
        provisioning_worker.record_failed_attempt(db, outbox, e)
        raise

    provisioning_worker.mark_delivered(db, outbox)
    return product


def get_products(db: Session, page: int = 1, limit: int = 10) -> list[Product]:
    offset = (page - 1) * limit
    return db.query(Product).offset(offset).limit(limit).all()


def get_product(db: Session, product_id: UUID) -> Product:
    product = db.get(Product, product_id)
    if not product:
        return error_response(
            message="Product not found",
            status_code=AppStatusCode.PRODUCT_NOT_FOUND,
            http_status=status.HTTP_404_NOT_FOUND
        )
    return product


def update_product(db: Session, product_id: UUID, payload: ProductUpdate) -> Product:
    product = get_product(db, product_id)

    try:
        data = payload.model_dump(exclude_unset=True, exclude={"categories"})
        if "image" in data:
            data["image_url"] = data.pop("image")

        # Update only the fields that are provided
        for k, v in data.items():
            if v is not None:
                setattr(product, k, v)

        if payload.categories is not None:
            product.categories = categoryservices.resolve_categories(
                db, payload.categories)

        db.commit()

    except HTTPException:
        db.rollback()
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"DB error while updating product {product_id}")
        raise

    db.refresh(product)
    return product


def delete_product(db: Session, product_id: UUID) -> None:
    product = get_product(db, product_id)

    db.delete(product)
    db.commit()
    # the stock record keyed by this product id is left in place
    logger.info(f"Product {product_id} deleted")
