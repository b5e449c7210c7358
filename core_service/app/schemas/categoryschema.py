from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class CategoryCreate(EmptyStringModel):
    name: str


class CategoryOut(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
