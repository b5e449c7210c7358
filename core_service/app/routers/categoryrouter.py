from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core.database import get_core_db as get_db
from ..schemas.categoryschema import CategoryCreate, CategoryOut
from ..services import categoryservices

router = APIRouter(prefix="/category", tags=["Category"])


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    return categoryservices.create_category(db, category)
