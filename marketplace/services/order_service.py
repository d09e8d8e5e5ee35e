# marketplace/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List, Optional

from marketplace.domain.schemas import (
    MAX_MONEY,
    ORDER_STATUSES,
    Order,
    OrderDraft,
    OrderItem,
    OrderLineIn,
    User,
)
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger
from marketplace.utils.settings import SHIPPING_FEE

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Pozycje zamówienia to snapshot produktu z chwili złożenia, późniejsze
    zmiany produktu nie zmieniają historii.
    """

    def __init__(self, storage: Storage, shipping_fee: Decimal = SHIPPING_FEE):
        self.storage = storage
        self.shipping_fee = shipping_fee

    def snapshot_items(self, lines: List[OrderLineIn]) -> List[OrderItem]:
        if not lines:
            raise ValueError("Order must contain at least one item")

        items = []
        for line in lines:
            product = self.storage.get_product_by_id(line.product_id)
            if not product:
                raise ValueError(f"Product {line.product_id} does not exist")

            items.append(
                OrderItem(
                    product_id=product.id,
                    name=product.name,
                    price=product.price,
                    quantity=line.quantity,
                    image=product.images[0] if product.images else None,
                )
            )
        return items

    def create_order(
        self,
        user: User,
        lines: List[OrderLineIn],
        shipping_address: Optional[Dict[str, Any]] = None,
        payment_method: Optional[str] = None,
    ) -> Order:
        """
        Use Case: Tworzenie zamówienia.

        1. Snapshot pozycji z aktualnych produktów
        2. Oblicza total (pozycje + wysyłka)
        3. Tworzy zamówienie w statusie pending
        """
        items = self.snapshot_items(lines)
        subtotal = sum((i.price * i.quantity for i in items), Decimal("0.00"))
        total = subtotal + self.shipping_fee
        if total > MAX_MONEY:
            raise ValueError(f"Order total cannot exceed {MAX_MONEY}")

        order = self.storage.create_order(
            OrderDraft(
                user_id=user.id,
                status="pending",
                total_amount=total,
                payment_status="pending",
                payment_method=payment_method,
                shipping_address=shipping_address,
                items=items,
            )
        )
        logger.info(f"Order {order.id} created for user {user.id}, total {order.total_amount}")
        return order

    def get_order(self, user: User, order_id: str) -> Order:
        order = self.storage.get_order_by_id(order_id)
        if not order:
            raise LookupError("Order not found")

        if order.user_id != user.id and user.role != "admin":
            raise PermissionError("Forbidden")
        return order

    def update_status(self, user: User, order_id: str, status: str) -> Order:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status: {status}")

        order = self.storage.get_order_by_id(order_id)
        if not order:
            raise LookupError("Order not found")

        if user.role == "buyer":
            # kupujacy moze tylko anulowac swoje oczekujace zamowienie
            if order.user_id != user.id:
                raise PermissionError("Forbidden")
            if status != "cancelled" or order.status != "pending":
                raise PermissionError("Buyers can only cancel pending orders")

        updated = self.storage.update_order_status(order_id, status)
        if not updated:
            raise LookupError("Order not found")

        logger.info(f"Order {order_id} status {order.status} -> {status} by {user.id}")
        return updated

    def list_for_seller(self, user: User) -> List[Order]:
        # TODO: filtrowac po produktach sprzedawcy, czeka na decyzje produktowa
        return self.storage.get_orders()
