from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session
from shared.core.database import get_core_db as get_db
from ..schemas.productschema import ProductCreate, ProductOut, ProductUpdate
from ..services import productservices

router = APIRouter(prefix="/product", tags=["Product"])


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
        product: ProductCreate,
        request: Request,
        db: Session = Depends(get_db)):
    return productservices.create_product(
        db, product, request.headers.get("authorization"))


@router.get("", response_model=List[ProductOut])
def find_all_products(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1),
        db: Session = Depends(get_db)):
    return productservices.get_products(db, page=page, limit=limit)


@router.get("/{product_id}", response_model=ProductOut)
def find_product(product_id: UUID, db: Session = Depends(get_db)):
    return productservices.get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
        product_id: UUID,
        product: ProductUpdate,
        db: Session = Depends(get_db)):
    return productservices.update_product(db, product_id, product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: UUID, db: Session = Depends(get_db)):
    productservices.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
