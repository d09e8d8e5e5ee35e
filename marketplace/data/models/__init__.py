#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from marketplace.data.models.user import UserModel
from marketplace.data.models.category import CategoryModel
from marketplace.data.models.product import ProductModel
from marketplace.data.models.review import ReviewModel
from marketplace.data.models.order import OrderModel
from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.wishlist_item import WishlistItemModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "ReviewModel",
    "OrderModel",
    "CartItemModel",
    "WishlistItemModel",
]
