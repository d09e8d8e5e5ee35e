from sqlalchemy import Column, String, DateTime, Text, Integer, Numeric, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    seller_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True, index=True)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    short_description = Column(Text, nullable=True)
    long_description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    compare_at_price = Column(Numeric(10, 2), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    stock = Column(Integer, nullable=False, default=0)

    is_ai_generated = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    status = Column(String, nullable=False, default="active")  # active, draft, archived

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    seller = relationship("UserModel", back_populates="products")
    category = relationship("CategoryModel", back_populates="products")

    reviews = relationship("ReviewModel", back_populates="product", cascade="all, delete-orphan")
    cart_items = relationship("CartItemModel", back_populates="product", cascade="all, delete-orphan")
    wishlist_items = relationship("WishlistItemModel", back_populates="product", cascade="all, delete-orphan")
