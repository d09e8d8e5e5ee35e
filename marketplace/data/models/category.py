from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    image = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    products = relationship("ProductModel", back_populates="category")
