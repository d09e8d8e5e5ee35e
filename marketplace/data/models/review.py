from sqlalchemy import Column, String, DateTime, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    product = relationship("ProductModel", back_populates="reviews")
    user = relationship("UserModel", back_populates="reviews")
