from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship

from marketplace.data.database import Base
from marketplace.data.models._columns import new_id, utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String, nullable=False, default="pending")  # pending, paid, shipped, delivered, cancelled
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_reference = Column(String, nullable=True)
    payment_status = Column(String, nullable=True, default="pending")
    payment_method = Column(String, nullable=True)

    shipping_address = Column(JSON, nullable=True)
    # snapshot pozycji: [{product_id, name, price, quantity, image}], nie referencje do products
    items = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("UserModel", back_populates="orders")
