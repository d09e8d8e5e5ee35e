# marketplace/repos/database_storage.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from marketplace.data.models import (
    CartItemModel,
    CategoryModel,
    OrderModel,
    ProductModel,
    ReviewModel,
    UserModel,
    WishlistItemModel,
)
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
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

_PROTECTED = {"id", "created_at", "updated_at"}


class DatabaseStorage(Storage):
    """Storage na SQLAlchemy. Jedna sesja na request, commit po kazdej operacji."""

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # HELPERS
    # =====================================================
    def _save(self, row, conflict_message: str):
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Integrity error: {e.orig}")
            raise ValueError(conflict_message)
        self.db.refresh(row)
        return row

    def _apply(self, row, fields: Dict[str, Any]):
        for key, value in fields.items():
            if key in _PROTECTED or not hasattr(type(row), key):
                continue
            setattr(row, key, value)

    def _delete(self, model, row_id: str) -> bool:
        row = self.db.get(model, row_id)
        if not row:
            return False
        # delete przez ORM zeby zadzialaly kaskady z relationship()
        self.db.delete(row)
        self.db.commit()
        return True

    # =====================================================
    # USERS
    # =====================================================
    def get_user(self, user_id: str) -> Optional[User]:
        row = self.db.get(UserModel, user_id)
        return User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()
        return User.model_validate(row) if row else None

    def create_user(self, draft: UserDraft) -> User:
        row = self._save(UserModel(**draft.model_dump()), "Email already registered")
        return User.model_validate(row)

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        row = self.db.get(UserModel, user_id)
        if not row:
            return None
        self._apply(row, fields)
        return User.model_validate(self._save(row, "Email already registered"))

    def delete_user(self, user_id: str) -> bool:
        return self._delete(UserModel, user_id)

    def get_all_users(self) -> List[User]:
        rows = self.db.execute(
            select(UserModel).order_by(UserModel.created_at.desc())
        ).scalars().all()
        return [User.model_validate(r) for r in rows]

    # =====================================================
    # PRODUCTS
    # =====================================================
    def _product_query(self):
        # jedno zapytanie: produkt + seller + kategoria + agregat recenzji
        stats = (
            select(
                ReviewModel.product_id.label("product_id"),
                func.avg(ReviewModel.rating).label("average_rating"),
                func.count(ReviewModel.id).label("review_count"),
            )
            .group_by(ReviewModel.product_id)
            .subquery()
        )
        return (
            select(ProductModel, stats.c.average_rating, stats.c.review_count)
            .outerjoin(stats, stats.c.product_id == ProductModel.id)
            .options(joinedload(ProductModel.seller), joinedload(ProductModel.category))
        )

    @staticmethod
    def _with_details(row, average, count) -> ProductWithDetails:
        details = ProductWithDetails.model_validate(row)
        return details.model_copy(update={
            "average_rating": float(average) if average is not None else None,
            "review_count": int(count or 0),
        })

    def get_products(
        self,
        category_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        is_featured: Optional[bool] = None,
    ) -> List[ProductWithDetails]:
        stmt = self._product_query()

        if category_id:
            stmt = stmt.where(ProductModel.category_id == category_id)
        if seller_id:
            stmt = stmt.where(ProductModel.seller_id == seller_id)
        if is_featured is not None:
            stmt = stmt.where(ProductModel.is_featured == is_featured)

        rows = self.db.execute(stmt.order_by(ProductModel.created_at.desc())).all()
        return [self._with_details(p, avg, cnt) for p, avg, cnt in rows]

    def _get_product_where(self, clause) -> Optional[ProductWithDetails]:
        result = self.db.execute(self._product_query().where(clause)).first()
        if not result:
            return None
        product, avg, cnt = result
        return self._with_details(product, avg, cnt)

    def get_product_by_id(self, product_id: str) -> Optional[ProductWithDetails]:
        return self._get_product_where(ProductModel.id == product_id)

    def get_product_by_slug(self, slug: str) -> Optional[ProductWithDetails]:
        return self._get_product_where(ProductModel.slug == slug)

    def create_product(self, draft: ProductDraft) -> Product:
        row = self._save(ProductModel(**draft.model_dump()), "Product slug already exists")
        return Product.model_validate(row)

    def update_product(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        row = self.db.get(ProductModel, product_id)
        if not row:
            return None
        self._apply(row, fields)
        row.updated_at = datetime.now(timezone.utc)
        return Product.model_validate(self._save(row, "Product slug already exists"))

    def delete_product(self, product_id: str) -> bool:
        return self._delete(ProductModel, product_id)

    # =====================================================
    # CATEGORIES
    # =====================================================
    def get_categories(self) -> List[Category]:
        rows = self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars().all()
        return [Category.model_validate(r) for r in rows]

    def get_category(self, category_id: str) -> Optional[Category]:
        row = self.db.get(CategoryModel, category_id)
        return Category.model_validate(row) if row else None

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        row = self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()
        return Category.model_validate(row) if row else None

    def create_category(self, draft: CategoryDraft) -> Category:
        row = self._save(CategoryModel(**draft.model_dump()), "Category already exists")
        return Category.model_validate(row)

    # =====================================================
    # ORDERS
    # =====================================================
    def get_orders(self, user_id: Optional[str] = None) -> List[Order]:
        stmt = select(OrderModel)
        if user_id:
            stmt = stmt.where(OrderModel.user_id == user_id)
        rows = self.db.execute(stmt.order_by(OrderModel.created_at.desc())).scalars().all()
        return [Order.model_validate(r) for r in rows]

    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        row = self.db.get(OrderModel, order_id)
        return Order.model_validate(row) if row else None

    def create_order(self, draft: OrderDraft) -> Order:
        data = draft.model_dump()
        # snapshot pozycji jako JSON (Decimal -> str)
        data["items"] = [i.model_dump(mode="json") for i in draft.items]
        row = self._save(OrderModel(**data), "Order could not be created")
        return Order.model_validate(row)

    def update_order_status(self, order_id: str, status: str) -> Optional[Order]:
        return self.update_order(order_id, {"status": status})

    def update_order(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        row = self.db.get(OrderModel, order_id)
        if not row:
            return None
        self._apply(row, {k: v for k, v in fields.items() if k != "items"})
        row.updated_at = datetime.now(timezone.utc)
        return Order.model_validate(self._save(row, "Order could not be updated"))

    # =====================================================
    # CART
    # =====================================================
    def get_cart_items(self, user_id: str) -> List[CartItemWithProduct]:
        rows = self.db.execute(
            select(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .options(joinedload(CartItemModel.product))
            .order_by(CartItemModel.created_at.desc())
        ).scalars().all()
        return [CartItemWithProduct.model_validate(r) for r in rows]

    def get_cart_item(self, item_id: str) -> Optional[CartItem]:
        row = self.db.get(CartItemModel, item_id)
        return CartItem.model_validate(row) if row else None

    def add_to_cart(self, draft: CartItemDraft) -> CartItem:
        row = self._save(CartItemModel(**draft.model_dump()), "Cart item could not be added")
        return CartItem.model_validate(row)

    def update_cart_item(self, item_id: str, quantity: int) -> Optional[CartItem]:
        row = self.db.get(CartItemModel, item_id)
        if not row:
            return None
        row.quantity = quantity
        return CartItem.model_validate(self._save(row, "Cart item could not be updated"))

    def remove_from_cart(self, item_id: str) -> bool:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.id == item_id))
        self.db.commit()
        return result.rowcount > 0

    # =====================================================
    # WISHLIST
    # =====================================================
    def get_wishlist_items(self, user_id: str) -> List[WishlistItem]:
        rows = self.db.execute(
            select(WishlistItemModel)
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.created_at.desc())
        ).scalars().all()
        return [WishlistItem.model_validate(r) for r in rows]

    def get_wishlist_item(self, item_id: str) -> Optional[WishlistItem]:
        row = self.db.get(WishlistItemModel, item_id)
        return WishlistItem.model_validate(row) if row else None

    def add_to_wishlist(self, draft: WishlistItemDraft) -> WishlistItem:
        row = self._save(WishlistItemModel(**draft.model_dump()), "Wishlist item could not be added")
        return WishlistItem.model_validate(row)

    def remove_from_wishlist(self, item_id: str) -> bool:
        result = self.db.execute(delete(WishlistItemModel).where(WishlistItemModel.id == item_id))
        self.db.commit()
        return result.rowcount > 0

    # =====================================================
    # REVIEWS
    # =====================================================
    def get_product_reviews(self, product_id: str) -> List[ReviewWithUser]:
        rows = self.db.execute(
            select(ReviewModel)
            .where(ReviewModel.product_id == product_id)
            .options(joinedload(ReviewModel.user))
            .order_by(ReviewModel.created_at.desc())
        ).scalars().all()
        return [ReviewWithUser.model_validate(r) for r in rows]

    def create_review(self, draft: ReviewDraft) -> Review:
        row = self._save(ReviewModel(**draft.model_dump()), "Review could not be created")
        return Review.model_validate(row)
