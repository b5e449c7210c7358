from sqlalchemy import TIMESTAMP, Column, Integer, String, func
from shared.core.database import CoreBase


class Category(CoreBase):
    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique so that naming a category twice reuses the existing row
    name = Column(String(100), unique=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
