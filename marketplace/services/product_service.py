# marketplace/services/product_service.py
import re
import uuid

from marketplace.domain.schemas import (
    Category,
    CategoryDraft,
    CategoryIn,
    Product,
    ProductDraft,
    ProductIn,
    ProductPatchIn,
    User,
)
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

# pola, ktore nie moga byc wyczyszczone przez PATCH
_NOT_NULL = ("name", "price", "images", "stock", "is_ai_generated", "is_featured", "status")


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def unique_slug(name: str) -> str:
    base = slugify(name) or "product"
    return f"{base}-{uuid.uuid4().hex[:8]}"


def can_manage(user: User, product: Product) -> bool:
    return user.role == "admin" or product.seller_id == user.id


class ProductService:
    """
    Use case'y katalogu: tworzenie/edycja/usuwanie produktow i kategorii.
    Wlasciciel produktu albo admin moze go modyfikowac.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def create_product(self, user: User, payload: ProductIn) -> Product:
        if user.role not in ("seller", "admin"):
            raise PermissionError("Only sellers can create products")

        if payload.category_id and not self.storage.get_category(payload.category_id):
            raise ValueError("Category does not exist")

        # sellerId zawsze z tokena, nigdy z body
        product = self.storage.create_product(
            ProductDraft(
                **payload.model_dump(),
                seller_id=user.id,
                slug=unique_slug(payload.name),
            )
        )
        logger.info(f"Seller {user.id} created product {product.id} ({product.slug})")
        return product

    def update_product(self, user: User, product_id: str, payload: ProductPatchIn) -> Product:
        product = self.storage.get_product_by_id(product_id)
        if not product:
            raise LookupError("Product not found")

        if not can_manage(user, product):
            raise PermissionError("Forbidden")

        fields = payload.model_dump(exclude_unset=True)
        for key in _NOT_NULL:
            if key in fields and fields[key] is None:
                raise ValueError(f"{key} cannot be null")

        if fields.get("category_id") and not self.storage.get_category(fields["category_id"]):
            raise ValueError("Category does not exist")

        updated = self.storage.update_product(product_id, fields)
        if not updated:
            raise LookupError("Product not found")

        logger.info(f"Product {product_id} updated by {user.id}: {sorted(fields)}")
        return updated

    def delete_product(self, user: User, product_id: str) -> None:
        product = self.storage.get_product_by_id(product_id)
        if not product:
            raise LookupError("Product not found")

        if not can_manage(user, product):
            raise PermissionError("Forbidden")

        if not self.storage.delete_product(product_id):
            raise LookupError("Product not found")

        logger.info(f"Product {product_id} deleted by {user.id}")

    def create_category(self, payload: CategoryIn) -> Category:
        slug = slugify(payload.slug or payload.name)
        if not slug:
            raise ValueError("Category slug cannot be empty")

        category = self.storage.create_category(
            CategoryDraft(
                name=payload.name,
                slug=slug,
                image=payload.image,
                description=payload.description,
            )
        )
        logger.info(f"Category {category.slug} created")
        return category
