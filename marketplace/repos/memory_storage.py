# marketplace/repos/memory_storage.py
import functools
import threading
import uuid
from datetime import datetime, timezone
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
from marketplace.repos.storage import Storage

# pola ktorych update_* nigdy nie nadpisuje
_PROTECTED = {"id", "created_at", "updated_at"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _newest_first(items):
    return sorted(items, key=lambda i: i.created_at, reverse=True)


def _locked(method):
    # handlery sync FastAPI chodza w threadpoolu, slowniki zmieniamy pod jednym lockiem
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class MemStorage(Storage):
    """Storage na slownikach w procesie. Nietrwaly, tylko dev i testy."""

    def __init__(self):
        self._lock = threading.RLock()
        self.users: Dict[str, User] = {}
        self.products: Dict[str, Product] = {}
        self.categories: Dict[str, Category] = {}
        self.orders: Dict[str, Order] = {}
        self.cart_items: Dict[str, CartItem] = {}
        self.wishlist_items: Dict[str, WishlistItem] = {}
        self.reviews: Dict[str, Review] = {}

    # =====================================================
    # USERS
    # =====================================================
    @_locked
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    @_locked
    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def _check_user_unique(self, email: str, external_auth_id: Optional[str], skip_id: Optional[str] = None):
        for u in self.users.values():
            if u.id == skip_id:
                continue
            if u.email == email:
                raise ValueError("Email already registered")
            if external_auth_id and u.external_auth_id == external_auth_id:
                raise ValueError("External account already linked")

    @_locked
    def create_user(self, draft: UserDraft) -> User:
        self._check_user_unique(draft.email, draft.external_auth_id)

        user = User(**draft.model_dump(), id=_new_id(), created_at=_now())
        self.users[user.id] = user
        return user

    @_locked
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None

        data = {**user.model_dump(), **_editable(fields)}
        self._check_user_unique(data["email"], data.get("external_auth_id"), skip_id=user_id)

        updated = User.model_validate(data)
        self.users[user_id] = updated
        return updated

    @_locked
    def delete_user(self, user_id: str) -> bool:
        if user_id not in self.users:
            return False

        # kaskada: produkty sprzedawcy (z ich recenzjami/koszykami), zamowienia, koszyk, wishlist, recenzje
        for product_id in [p.id for p in self.products.values() if p.seller_id == user_id]:
            self.delete_product(product_id)

        self.orders = {k: o for k, o in self.orders.items() if o.user_id != user_id}
        self.cart_items = {k: i for k, i in self.cart_items.items() if i.user_id != user_id}
        self.wishlist_items = {k: i for k, i in self.wishlist_items.items() if i.user_id != user_id}
        self.reviews = {k: r for k, r in self.reviews.items() if r.user_id != user_id}

        del self.users[user_id]
        return True

    @_locked
    def get_all_users(self) -> List[User]:
        return _newest_first(self.users.values())

    # =====================================================
    # PRODUCTS
    # =====================================================
    def _with_details(self, product: Product) -> ProductWithDetails:
        ratings = [r.rating for r in self.reviews.values() if r.product_id == product.id]
        average = sum(ratings) / len(ratings) if ratings else None

        return ProductWithDetails(
            **product.model_dump(),
            seller=self.users.get(product.seller_id),
            category=self.categories.get(product.category_id) if product.category_id else None,
            average_rating=average,
            review_count=len(ratings),
        )

    @_locked
    def get_products(
        self,
        category_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        is_featured: Optional[bool] = None,
    ) -> List[ProductWithDetails]:
        products = list(self.products.values())

        if category_id:
            products = [p for p in products if p.category_id == category_id]
        if seller_id:
            products = [p for p in products if p.seller_id == seller_id]
        if is_featured is not None:
            products = [p for p in products if p.is_featured == is_featured]

        return [self._with_details(p) for p in _newest_first(products)]

    @_locked
    def get_product_by_id(self, product_id: str) -> Optional[ProductWithDetails]:
        product = self.products.get(product_id)
        if not product:
            return None
        return self._with_details(product)

    @_locked
    def get_product_by_slug(self, slug: str) -> Optional[ProductWithDetails]:
        product = next((p for p in self.products.values() if p.slug == slug), None)
        if not product:
            return None
        return self._with_details(product)

    @_locked
    def create_product(self, draft: ProductDraft) -> Product:
        if any(p.slug == draft.slug for p in self.products.values()):
            raise ValueError("Product slug already exists")

        now = _now()
        product = Product(**draft.model_dump(), id=_new_id(), created_at=now, updated_at=now)
        self.products[product.id] = product
        return product

    @_locked
    def update_product(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        product = self.products.get(product_id)
        if not product:
            return None

        changes = _editable(fields)
        slug = changes.get("slug")
        if slug and any(p.slug == slug and p.id != product_id for p in self.products.values()):
            raise ValueError("Product slug already exists")

        updated = Product.model_validate({**product.model_dump(), **changes, "updated_at": _now()})
        self.products[product_id] = updated
        return updated

    @_locked
    def delete_product(self, product_id: str) -> bool:
        if product_id not in self.products:
            return False

        self.cart_items = {k: i for k, i in self.cart_items.items() if i.product_id != product_id}
        self.wishlist_items = {k: i for k, i in self.wishlist_items.items() if i.product_id != product_id}
        self.reviews = {k: r for k, r in self.reviews.items() if r.product_id != product_id}

        del self.products[product_id]
        return True

    # =====================================================
    # CATEGORIES
    # =====================================================
    @_locked
    def get_categories(self) -> List[Category]:
        return sorted(self.categories.values(), key=lambda c: c.name)

    @_locked
    def get_category(self, category_id: str) -> Optional[Category]:
        return self.categories.get(category_id)

    @_locked
    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return next((c for c in self.categories.values() if c.slug == slug), None)

    @_locked
    def create_category(self, draft: CategoryDraft) -> Category:
        for c in self.categories.values():
            if c.name == draft.name or c.slug == draft.slug:
                raise ValueError("Category already exists")

        category = Category(**draft.model_dump(), id=_new_id(), created_at=_now())
        self.categories[category.id] = category
        return category

    # =====================================================
    # ORDERS
    # =====================================================
    @_locked
    def get_orders(self, user_id: Optional[str] = None) -> List[Order]:
        orders = self.orders.values()
        if user_id:
            orders = [o for o in orders if o.user_id == user_id]
        return _newest_first(orders)

    @_locked
    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    @_locked
    def create_order(self, draft: OrderDraft) -> Order:
        now = _now()
        order = Order(**draft.model_dump(), id=_new_id(), created_at=now, updated_at=now)
        self.orders[order.id] = order
        return order

    @_locked
    def update_order_status(self, order_id: str, status: str) -> Optional[Order]:
        return self.update_order(order_id, {"status": status})

    @_locked
    def update_order(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        order = self.orders.get(order_id)
        if not order:
            return None

        updated = Order.model_validate({**order.model_dump(), **_editable(fields), "updated_at": _now()})
        self.orders[order_id] = updated
        return updated

    # =====================================================
    # CART
    # =====================================================
    @_locked
    def get_cart_items(self, user_id: str) -> List[CartItemWithProduct]:
        items = [i for i in self.cart_items.values() if i.user_id == user_id]
        return [
            CartItemWithProduct(**i.model_dump(), product=self.products.get(i.product_id))
            for i in _newest_first(items)
        ]

    @_locked
    def get_cart_item(self, item_id: str) -> Optional[CartItem]:
        return self.cart_items.get(item_id)

    @_locked
    def add_to_cart(self, draft: CartItemDraft) -> CartItem:
        item = CartItem(**draft.model_dump(), id=_new_id(), created_at=_now())
        self.cart_items[item.id] = item
        return item

    @_locked
    def update_cart_item(self, item_id: str, quantity: int) -> Optional[CartItem]:
        item = self.cart_items.get(item_id)
        if not item:
            return None

        updated = CartItem.model_validate({**item.model_dump(), "quantity": quantity})
        self.cart_items[item_id] = updated
        return updated

    @_locked
    def remove_from_cart(self, item_id: str) -> bool:
        return self.cart_items.pop(item_id, None) is not None

    # =====================================================
    # WISHLIST
    # =====================================================
    @_locked
    def get_wishlist_items(self, user_id: str) -> List[WishlistItem]:
        return _newest_first(i for i in self.wishlist_items.values() if i.user_id == user_id)

    @_locked
    def get_wishlist_item(self, item_id: str) -> Optional[WishlistItem]:
        return self.wishlist_items.get(item_id)

    @_locked
    def add_to_wishlist(self, draft: WishlistItemDraft) -> WishlistItem:
        item = WishlistItem(**draft.model_dump(), id=_new_id(), created_at=_now())
        self.wishlist_items[item.id] = item
        return item

    @_locked
    def remove_from_wishlist(self, item_id: str) -> bool:
        return self.wishlist_items.pop(item_id, None) is not None

    # =====================================================
    # REVIEWS
    # =====================================================
    @_locked
    def get_product_reviews(self, product_id: str) -> List[ReviewWithUser]:
        reviews = [r for r in self.reviews.values() if r.product_id == product_id]
        return [
            ReviewWithUser(**r.model_dump(), user=self.users.get(r.user_id))
            for r in _newest_first(reviews)
        ]

    @_locked
    def create_review(self, draft: ReviewDraft) -> Review:
        review = Review(**draft.model_dump(), id=_new_id(), created_at=_now())
        self.reviews[review.id] = review
        return review


def _editable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in _PROTECTED}
