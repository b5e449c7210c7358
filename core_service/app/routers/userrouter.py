from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core.database import get_core_db as get_db
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/user", tags=["User"])


@router.post("", response_model=userschema.UserOut, status_code=status.HTTP_201_CREATED)
def create_user(new_user: userschema.UserCreate, db: Session = Depends(get_db)):
    return userservices.create_user(db, new_user)


@router.post("/signin", response_model=userschema.TokenResponse)
def signin(credentials: userschema.UserSignin, db: Session = Depends(get_db)):
    return userservices.signin(db, credentials)


@router.get("/{user_id}", response_model=userschema.UserWithPersonOut)
def find_user(user_id: int, db: Session = Depends(get_db)):
    return userservices.find_with_person(db, user_id)
