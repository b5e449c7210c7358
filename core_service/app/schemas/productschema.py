from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .categoryschema import CategoryOut


class CategoryRef(EmptyStringModel):
    id: Optional[int] = None
    name: str


class ProductCreate(EmptyStringModel):
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = Field(ge=0)
    categories: Optional[List[CategoryRef]] = None


class ProductUpdate(EmptyStringModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    categories: Optional[List[CategoryRef]] = None


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: str
    image_url: str
    price: float
    categories: List[CategoryOut] = []

    class Config:
        from_attributes = True
