# marketplace/domain/schemas.py
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    model_serializer,
)
from pydantic.alias_generators import to_camel

Role = Literal["buyer", "seller", "admin"]
ProductStatus = Literal["active", "draft", "archived"]
OrderStatus = Literal["pending", "paid", "shipped", "delivered", "cancelled"]

ORDER_STATUSES = ("pending", "paid", "shipped", "delivered", "cancelled")

_CENT = Decimal("0.01")

# zakres kolumny Numeric(10, 2)
MAX_MONEY = Decimal("99999999.99")
MAX_QUANTITY = 10_000
MAX_STOCK = 1_000_000


def to_money(value: Decimal) -> Decimal:
    try:
        money = Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("Amount is not a valid number")

    if abs(money) > MAX_MONEY:
        raise ValueError(f"Amount cannot exceed {MAX_MONEY}")
    return money


# kwoty zawsze z dwoma miejscami po przecinku, tak jak Numeric(10, 2) w bazie
Money = Annotated[Decimal, AfterValidator(to_money)]


class CamelModel(BaseModel):
    """Baza: atrybuty snake_case, JSON camelCase, czytanie z modeli ORM."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# ENTITIES
# =====================================================
class UserPublic(CamelModel):
    """Użytkownik bez hasha hasła - tylko ten kształt wychodzi przez API."""

    id: str
    email: str
    name: str
    role: Role = "buyer"
    external_auth_id: Optional[str] = None
    shop_name: Optional[str] = None
    shop_logo: Optional[str] = None
    created_at: datetime


class User(UserPublic):
    password_hash: Optional[str] = None


class Category(CamelModel):
    id: str
    name: str
    slug: str
    image: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime


class Product(CamelModel):
    id: str
    seller_id: str
    category_id: Optional[str] = None
    name: str
    slug: str
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    price: Money
    compare_at_price: Optional[Money] = None
    images: List[str] = Field(default_factory=list)
    stock: int = 0
    is_ai_generated: bool = False
    is_featured: bool = False
    status: ProductStatus = "active"
    created_at: datetime
    updated_at: datetime


class ProductWithDetails(Product):
    seller: Optional[UserPublic] = None
    category: Optional[Category] = None
    average_rating: Optional[float] = None
    review_count: int = 0

    @model_serializer(mode="wrap")
    def _skip_missing_rating(self, handler):
        # brak recenzji => brak pola, nigdy 0 ani NaN
        data = handler(self)
        if self.average_rating is None:
            data.pop("averageRating", None)
            data.pop("average_rating", None)
        return data


class Review(CamelModel):
    id: str
    product_id: str
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    created_at: datetime


class ReviewWithUser(Review):
    user: Optional[UserPublic] = None


class OrderItem(CamelModel):
    """Snapshot pozycji z chwili złożenia zamówienia (nie referencja do produktu)."""

    product_id: str
    name: str
    price: Money
    quantity: int = Field(..., ge=1)
    image: Optional[str] = None


class Order(CamelModel):
    id: str
    user_id: str
    status: OrderStatus = "pending"
    total_amount: Money
    payment_reference: Optional[str] = None
    payment_status: Optional[str] = "pending"
    payment_method: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    items: List[OrderItem]
    created_at: datetime
    updated_at: datetime


class CartItem(CamelModel):
    id: str
    user_id: str
    product_id: str
    quantity: int = Field(1, ge=1)
    created_at: datetime


class CartItemWithProduct(CartItem):
    product: Optional[Product] = None


class CartSummary(CamelModel):
    items: List[CartItemWithProduct]
    # suma koszyka nie jest kwota z bazy, bez limitu Numeric(10, 2)
    subtotal: Decimal
    item_count: int


class WishlistItem(CamelModel):
    id: str
    user_id: str
    product_id: str
    created_at: datetime


class WishlistItemWithProduct(WishlistItem):
    product: Optional[ProductWithDetails] = None


class ReviewSummary(CamelModel):
    summary: str
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)


# =====================================================
# DRAFTS (wejście do Storage.create_*)
# =====================================================
class UserDraft(CamelModel):
    email: str
    password_hash: Optional[str] = None
    name: str
    role: Role = "buyer"
    external_auth_id: Optional[str] = None
    shop_name: Optional[str] = None
    shop_logo: Optional[str] = None


class CategoryDraft(CamelModel):
    name: str
    slug: str
    image: Optional[str] = None
    description: Optional[str] = None


class ProductDraft(CamelModel):
    seller_id: str
    category_id: Optional[str] = None
    name: str
    slug: str
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    price: Money
    compare_at_price: Optional[Money] = None
    images: List[str] = Field(default_factory=list)
    stock: int = Field(0, ge=0, le=MAX_STOCK)
    is_ai_generated: bool = False
    is_featured: bool = False
    status: ProductStatus = "active"


class ReviewDraft(CamelModel):
    product_id: str
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class OrderDraft(CamelModel):
    user_id: str
    status: OrderStatus = "pending"
    total_amount: Money
    payment_reference: Optional[str] = None
    payment_status: Optional[str] = "pending"
    payment_method: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    items: List[OrderItem]


class CartItemDraft(CamelModel):
    user_id: str
    product_id: str
    quantity: int = Field(1, ge=1)


class WishlistItemDraft(CamelModel):
    user_id: str
    product_id: str


# =====================================================
# REQUEST BODIES
# =====================================================
class RegisterIn(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=100)
    # samodzielna rejestracja admina nie jest dozwolona
    role: Literal["buyer", "seller"] = "buyer"
    shop_name: Optional[str] = None
    shop_logo: Optional[str] = None


class LoginIn(CamelModel):
    email: EmailStr
    password: str


class ProfileIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    shop_name: Optional[str] = None
    shop_logo: Optional[str] = None


class AuthOut(CamelModel):
    user: UserPublic
    token: str


class ProductIn(CamelModel):
    """Body dla POST /api/products. sellerId z body jest ignorowany."""

    name: str = Field(..., min_length=1, max_length=200)
    category_id: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    price: Money = Field(..., ge=0)
    compare_at_price: Optional[Money] = Field(None, ge=0)
    images: List[str] = Field(default_factory=list)
    stock: int = Field(0, ge=0, le=MAX_STOCK)
    is_ai_generated: bool = False
    is_featured: bool = False
    status: ProductStatus = "active"


class ProductPatchIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category_id: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    price: Optional[Money] = Field(None, ge=0)
    compare_at_price: Optional[Money] = Field(None, ge=0)
    images: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK)
    is_ai_generated: Optional[bool] = None
    is_featured: Optional[bool] = None
    status: Optional[ProductStatus] = None


class CategoryIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    description: Optional[str] = None


class ReviewIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class CartItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)


class CartItemPatchIn(CamelModel):
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)


class WishlistItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)


class OrderLineIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)


class OrderIn(CamelModel):
    items: List[OrderLineIn] = Field(..., min_length=1)
    shipping_address: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None


class OrderStatusIn(CamelModel):
    status: OrderStatus


class PaymentInitIn(OrderIn):
    payment_method: Literal["card", "momo"] = "card"
    momo_number: Optional[str] = None


class PaymentInitOut(CamelModel):
    authorization_url: str
    reference: str
    order_id: str


class PaymentVerifyOut(CamelModel):
    success: bool
    message: str
    order_id: str


class DescriptionIn(CamelModel):
    product_name: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = None


class DescriptionOut(CamelModel):
    description: str


class SuccessOut(CamelModel):
    success: bool = True
