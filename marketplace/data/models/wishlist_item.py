from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("UserModel", back_populates="wishlist_items")
    product = relationship("ProductModel", back_populates="wishlist_items")
