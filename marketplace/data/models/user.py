from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=True)  # brak dla kont z zewnetrznym logowaniem
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="buyer")  # buyer, seller, admin
    external_auth_id = Column(String, nullable=True, unique=True)
    shop_name = Column(String, nullable=True)
    shop_logo = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    products = relationship("ProductModel", back_populates="seller", cascade="all, delete-orphan")
    orders = relationship("OrderModel", back_populates="user", cascade="all, delete-orphan")
    cart_items = relationship("CartItemModel", back_populates="user", cascade="all, delete-orphan")
    wishlist_items = relationship("WishlistItemModel", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("ReviewModel", back_populates="user", cascade="all, delete-orphan")
