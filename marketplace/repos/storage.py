# marketplace/repos/storage.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from marketplace.domain.schemas import (
    CartItem,
    CartItemDraft,
    CartItemWithProduct,
    Category,
    CategoryDraft,
    Order,
    OrderDraft,
    Product,
    ProductDraft,
    ProductWithDetails,
    Review,
    ReviewDraft,
    ReviewWithUser,
    User,
    UserDraft,
    WishlistItem,
    WishlistItemDraft,
)


class Storage(ABC):
    """
    Jedyny punkt dostepu do danych.

    Dwie implementacje o identycznym zachowaniu na zewnatrz:
    MemStorage (slowniki w pamieci, tylko dev/testy) i DatabaseStorage (SQLAlchemy).

    - brak rekordu => None (get/update) albo False (delete), nigdy wyjatek
    - naruszenie unikalnosci przy create => ValueError
    - update_* przyjmuje slownik pol snake_case
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, draft: UserDraft) -> User: ...

    @abstractmethod
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]: ...

    @abstractmethod
    def delete_user(self, user_id: str) -> bool: ...

    @abstractmethod
    def get_all_users(self) -> List[User]: ...

    # Products
    @abstractmethod
    def get_products(
        self,
        category_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        is_featured: Optional[bool] = None,
    ) -> List[ProductWithDetails]: ...

    @abstractmethod
    def get_product_by_id(self, product_id: str) -> Optional[ProductWithDetails]: ...

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> Optional[ProductWithDetails]: ...

    @abstractmethod
    def create_product(self, draft: ProductDraft) -> Product: ...

    @abstractmethod
    def update_product(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]: ...

    @abstractmethod
    def delete_product(self, product_id: str) -> bool: ...

    # Categories
    @abstractmethod
    def get_categories(self) -> List[Category]: ...

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]: ...

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Optional[Category]: ...

    @abstractmethod
    def create_category(self, draft: CategoryDraft) -> Category: ...

    # Orders
    @abstractmethod
    def get_orders(self, user_id: Optional[str] = None) -> List[Order]: ...

    @abstractmethod
    def get_order_by_id(self, order_id: str) -> Optional[Order]: ...

    @abstractmethod
    def create_order(self, draft: OrderDraft) -> Order: ...

    @abstractmethod
    def update_order_status(self, order_id: str, status: str) -> Optional[Order]: ...

    @abstractmethod
    def update_order(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]: ...

    # Cart
    @abstractmethod
    def get_cart_items(self, user_id: str) -> List[CartItemWithProduct]: ...

    @abstractmethod
    def get_cart_item(self, item_id: str) -> Optional[CartItem]: ...

    @abstractmethod
    def add_to_cart(self, draft: CartItemDraft) -> CartItem: ...

    @abstractmethod
    def update_cart_item(self, item_id: str, quantity: int) -> Optional[CartItem]: ...

    @abstractmethod
    def remove_from_cart(self, item_id: str) -> bool: ...

    # Wishlist
    @abstractmethod
    def get_wishlist_items(self, user_id: str) -> List[WishlistItem]: ...

    @abstractmethod
    def get_wishlist_item(self, item_id: str) -> Optional[WishlistItem]: ...

    @abstractmethod
    def add_to_wishlist(self, draft: WishlistItemDraft) -> WishlistItem: ...

    @abstractmethod
    def remove_from_wishlist(self, item_id: str) -> bool: ...

    # Reviews
    @abstractmethod
    def get_product_reviews(self, product_id: str) -> List[ReviewWithUser]: ...

    @abstractmethod
    def create_review(self, draft: ReviewDraft) -> Review: ...
