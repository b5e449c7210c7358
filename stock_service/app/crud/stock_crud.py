# stock_service/app/crud/stock_crud.py
import logging
from typing import List, Optional

from bson import ObjectId
from pymongo.collection import Collection

from ..schemas.stock_schemas import StockCreate, StockOut

logger = logging.getLogger(__name__)


def stock_filter(product_id: str) -> dict:
    """A valid ObjectId addresses the document itself; anything else is
    taken as the catalog product id stored in ``relationId``."""
    if ObjectId.is_valid(product_id):
        return {"_id": ObjectId(product_id)}
    return {"relationId": product_id}


def to_stock_out(document: dict) -> StockOut:
    return StockOut(
        id=str(document["_id"]),
        name=document.get("name", ""),
        quantity=document.get("quantity", 0),
        relation_id=str(document.get("relationId", "")),
    )


def get_all_stock(collection: Collection, limit: int, page: int) -> List[StockOut]:
    offset = (page - 1) * limit
    # no sort key: documents come back in store order
    cursor = collection.find().skip(offset).limit(limit)
    return [to_stock_out(doc) for doc in cursor]


def get_stock_by_id(collection: Collection, product_id: str) -> Optional[StockOut]:
    document = collection.find_one(stock_filter(product_id))
    if not document:
        return None
    return to_stock_out(document)


def create_stock(collection: Collection, stock: StockCreate) -> str:
    # relationId is not unique: a repeated call adds a second record
    result = collection.insert_one({
        "name": stock.name,
        "quantity": stock.quantity,
        "relationId": stock.relation_id,
    })
    logger.info(
        f"Stock {result.inserted_id} created for product {stock.relation_id}")
    return str(result.inserted_id)


def update_stock(collection: Collection, product_id: str, quantity: int) -> int:
    """Overwrite ``quantity`` only. Returns how many records matched."""
    result = collection.update_one(
        stock_filter(product_id), {"$set": {"quantity": quantity}})
    return result.matched_count


def delete_stock(collection: Collection, product_id: str) -> int:
    """Returns how many records were removed."""
    result = collection.delete_one(stock_filter(product_id))
    return result.deleted_count
