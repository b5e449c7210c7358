from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import date

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class PersonCreate(EmptyStringModel):
    cpf: str
    name: str
    birth: date
    email: EmailStr
    user_id: Optional[int] = None


class PersonOut(BaseModel):
    id: int
    cpf: str
    name: str
    birth: date
    email: str
    user_id: Optional[int] = None

    class Config:
        from_attributes = True
