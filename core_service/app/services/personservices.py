from fastapi import status
from sqlalchemy.orm import Session

from shared.utils.app_status_code import AppStatusCode
from shared.helpers.json_response_helper import error_response

from ..models.person import Person
from ..models.users import Users
from ..schemas.personschema import PersonCreate


def create_person(db: Session, person: PersonCreate) -> Person:
    if person.user_id is not None and not db.get(Users, person.user_id):
        return error_response(
            message=f"User {person.user_id} not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID,
            http_status=status.HTTP_404_NOT_FOUND
        )

    person_instance = Person(**person.model_dump())
    db.add(person_instance)
    db.commit()
    db.refresh(person_instance)
    return person_instance
