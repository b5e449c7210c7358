from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from shared.core.database import CoreBase


class Person(CoreBase):
    __tablename__ = "person"

    id = Column(Integer, primary_key=True, autoincrement=True)
    cpf = Column(String(14), nullable=False)
    name = Column(String(200), nullable=False)
    birth = Column(Date, nullable=False)
    email = Column(String(200), nullable=False)
    user_id = Column(Integer, ForeignKey(
        "user.id", ondelete="SET NULL"), nullable=True)

    user = relationship("Users", back_populates="person")
