# stock_service/app/router/stock_router.py
import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.collection import Collection
from shared.core.auth import get_current_token
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ..core.database import get_stock_collection
from ..schemas.stock_schemas import StockCreate, StockOut, StockUpdate
from ..crud import stock_crud as crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stock", tags=["stock"])


def stock_not_found():
    return error_response(
        message="Product not found",
        status_code=AppStatusCode.STOCK_NOT_FOUND,
        http_status=status.HTTP_404_NOT_FOUND
    )


@router.get("", response_model=List[StockOut])
def get_all_stock(
    limit: int = Query(10, ge=0),
    page: int = Query(1, ge=1),
    collection: Collection = Depends(get_stock_collection)
):
    return crud.get_all_stock(collection, limit=limit, page=page)


@router.get("/{product_id}", response_model=StockOut)
def get_stock_by_id(
    product_id: str,
    collection: Collection = Depends(get_stock_collection)
):
    stock = crud.get_stock_by_id(collection, product_id)
    if not stock:
        return stock_not_found()
    return stock


# Only creation is guarded; reads and quantity changes are open
@router.post("", status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(get_current_token)])
def create_stock(
    stock: StockCreate,
    collection: Collection = Depends(get_stock_collection)
):
    crud.create_stock(collection, stock)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/{product_id}")
def update_stock(
    product_id: str,
    body: StockUpdate,
    collection: Collection = Depends(get_stock_collection)
):
    matched = crud.update_stock(collection, product_id, body.stock)
    if not matched:
        logger.info(f"Stock update matched nothing for {product_id}")
        if settings.STOCK_STRICT_MUTATIONS:
            return stock_not_found()
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{product_id}")
def delete_stock(
    product_id: str,
    collection: Collection = Depends(get_stock_collection)
):
    deleted = crud.delete_stock(collection, product_id)
    if not deleted:
        logger.info(f"Stock delete matched nothing for {product_id}")
        if settings.STOCK_STRICT_MUTATIONS:
            return stock_not_found()
    return Response(status_code=status.HTTP_200_OK)
