from pydantic import BaseModel
from typing import Optional

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .personschema import PersonOut


class UserCreate(EmptyStringModel):
    username: str
    password: str


class UserSignin(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class UserWithPersonOut(UserOut):
    person: Optional[PersonOut] = None


class TokenResponse(BaseModel):
    token: str
