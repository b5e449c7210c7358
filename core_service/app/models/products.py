import uuid
from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Table, Text, Uuid
from sqlalchemy.orm import relationship
from shared.core.database import CoreBase

product_category = Table(
    "product_category",
    CoreBase.metadata,
    Column("product_id", Uuid, ForeignKey(
        "product.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey(
        "category.id", ondelete="CASCADE"), primary_key=True),
)


class Product(CoreBase):
    __tablename__ = "product"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(500), nullable=False, default="")
    price = Column(Numeric(12, 2), nullable=False)

    categories = relationship(
        "Category",
        secondary=product_category,
        lazy="selectin",
    )
