from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from shared.core.database import get_core_db as get_db
from ..schemas.personschema import PersonCreate
from ..services import personservices

router = APIRouter(prefix="/person", tags=["Person"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_person(person: PersonCreate, db: Session = Depends(get_db)):
    personservices.create_person(db, person)
    return Response(status_code=status.HTTP_201_CREATED)
