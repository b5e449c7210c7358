from fastapi import status
from sqlalchemy.orm import Session

from shared.utils.app_status_code import AppStatusCode
from shared.helpers.json_response_helper import error_response

from ..models.categories import Category
from ..schemas.categoryschema import CategoryCreate


def get_or_create_category(db: Session, name: str) -> Category:
    """Return the category called ``name``, adding it to the session when new.

    Does not commit; callers own the transaction.
    """
    category = db.query(Category).filter(Category.name == name).first()
    if category:
        return category

    category = Category(name=name)
    db.add(category)
    db.flush()
    return category


def resolve_categories(db: Session, refs) -> list[Category]:
    """Map ``[{id?, name}]`` references onto Category rows.

    An id must point at an existing category; a bare name is reused when it
    exists and created otherwise.
    """
    categories = []
    for ref in refs or []:
        if ref.id is not None:
            category = db.get(Category, ref.id)
            if not category:
                return error_response(
                    message=f"Category {ref.id} not found",
                    status_code=AppStatusCode.CATEGORY_NOT_FOUND,
                    http_status=status.HTTP_404_NOT_FOUND
                )
        else:
            category = get_or_create_category(db, ref.name)

        if category not in categories:
            categories.append(category)
    return categories


def create_category(db: Session, payload: CategoryCreate) -> Category:
    category = get_or_create_category(db, payload.name)
    db.commit()
    db.refresh(category)
    return category
