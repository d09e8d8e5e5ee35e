# marketplace/services/cart_service.py
from decimal import Decimal
from typing import List

from marketplace.domain.schemas import (
    MAX_QUANTITY,
    CartItem,
    CartItemDraft,
    CartItemWithProduct,
    CartSummary,
    WishlistItem,
    WishlistItemDraft,
    WishlistItemWithProduct,
)
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def cart_subtotal(items: List[CartItemWithProduct]) -> Decimal:
    # Decimal, bez floatow - 10.00*2 + 5.50 == 25.50 zawsze
    return sum(
        (i.product.price * i.quantity for i in items if i.product),
        Decimal("0.00"),
    )


class CartService:
    """
    Koszyk i wishlist uzytkownika.
    commands (add, update, remove) modyfikuja stan
    query (get, summary) tylko odczyt
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    #query
    def get_cart(self, user_id: str) -> List[CartItemWithProduct]:
        return self.storage.get_cart_items(user_id)

    def get_summary(self, user_id: str) -> CartSummary:
        items = self.storage.get_cart_items(user_id)
        return CartSummary(
            items=items,
            subtotal=cart_subtotal(items),
            item_count=sum(i.quantity for i in items),
        )

    #commands
    def add_product(self, user_id: str, product_id: str, quantity: int) -> CartItem:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        if not self.storage.get_product_by_id(product_id):
            raise LookupError("Product not found")

        # ten sam produkt drugi raz => zwiekszamy ilosc zamiast nowej pozycji
        existing = next(
            (i for i in self.storage.get_cart_items(user_id) if i.product_id == product_id),
            None,
        )
        if existing:
            merged = existing.quantity + quantity
            if merged > MAX_QUANTITY:
                raise ValueError(f"Quantity cannot exceed {MAX_QUANTITY}")

            logger.info(
                f"Product {product_id} already in cart of {user_id}, "
                f"quantity {existing.quantity} -> {merged}"
            )
            return self.storage.update_cart_item(existing.id, merged)

        logger.info(f"Adding product {product_id} to cart of {user_id}")
        return self.storage.add_to_cart(
            CartItemDraft(user_id=user_id, product_id=product_id, quantity=quantity)
        )

    def _owned_item(self, user_id: str, item_id: str) -> CartItem:
        item = self.storage.get_cart_item(item_id)
        # cudza pozycja wyglada jak nieistniejaca
        if not item or item.user_id != user_id:
            raise LookupError("Cart item not found")
        return item

    def update_quantity(self, user_id: str, item_id: str, quantity: int) -> CartItem:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        self._owned_item(user_id, item_id)
        updated = self.storage.update_cart_item(item_id, quantity)
        if not updated:
            raise LookupError("Cart item not found")
        return updated

    def remove_item(self, user_id: str, item_id: str) -> None:
        self._owned_item(user_id, item_id)
        if not self.storage.remove_from_cart(item_id):
            raise LookupError("Cart item not found")

    # =====================================================
    # WISHLIST
    # =====================================================
    def get_wishlist(self, user_id: str) -> List[WishlistItemWithProduct]:
        result = []
        for item in self.storage.get_wishlist_items(user_id):
            product = self.storage.get_product_by_id(item.product_id)
            if product:
                result.append(WishlistItemWithProduct(**item.model_dump(), product=product))
        return result

    def add_to_wishlist(self, user_id: str, product_id: str) -> WishlistItem:
        if not self.storage.get_product_by_id(product_id):
            raise LookupError("Product not found")

        # samo istnienie wpisu jest sygnalem, bez duplikatow
        for item in self.storage.get_wishlist_items(user_id):
            if item.product_id == product_id:
                return item

        return self.storage.add_to_wishlist(
            WishlistItemDraft(user_id=user_id, product_id=product_id)
        )

    def remove_from_wishlist(self, user_id: str, item_id: str) -> None:
        item = self.storage.get_wishlist_item(item_id)
        if not item or item.user_id != user_id:
            raise LookupError("Wishlist item not found")
        self.storage.remove_from_wishlist(item_id)
