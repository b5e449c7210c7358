import logging

from fastapi import status
from sqlalchemy.orm import Session

from shared.core import auth
from shared.utils.app_status_code import AppStatusCode
from shared.helpers.json_response_helper import error_response

from ..models.users import Users
from ..schemas.userschema import UserCreate, UserSignin

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str):
    return db.query(Users).filter(Users.username == username).first()


def create_user(db: Session, user: UserCreate) -> Users:
    if get_user_by_username(db, user.username):
        return error_response(
            message=f"Username '{user.username}' is already registered.",
            status_code=AppStatusCode.USER_USERNAME_IS_UNIQUE,
            http_status=status.HTTP_400_BAD_REQUEST
        )

    user_instance = Users(username=user.username)
    user_instance.set_password(user.password)
    db.add(user_instance)
    db.commit()
    db.refresh(user_instance)
    return user_instance


def find_with_person(db: Session, user_id: int) -> Users:
    user = db.get(Users, user_id)
    if not user:
        return error_response(
            message="Resource not found",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=status.HTTP_404_NOT_FOUND
        )
    return user


def signin(db: Session, credentials: UserSignin) -> dict:
    """Issue an access token signed with the secret shared with the stock service."""
    user = get_user_by_username(db, credentials.username)

    # same answer for unknown user and wrong password
    if not user or not user.verify_password(credentials.password):
        logger.info(f"Failed sign-in for '{credentials.username}'")
        return error_response(
            message="Username or password is incorrect",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    token = auth.create_access_token({
        "username": user.username,
        "user_id": user.id,
    })
    return {"token": token}
