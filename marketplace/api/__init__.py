# marketplace/api/__init__.py
from marketplace.api.routers import (
    admin,
    ai,
    auth,
    cart,
    categories,
    health,
    orders,
    payments,
    products,
    reviews,
    seller,
    wishlist,
)

# kolejnosc ma znaczenie: /api/products/featured przed /api/products/{slug}
ROUTERS = [
    health.router,
    auth.router,
    products.router,
    reviews.router,
    ai.router,
    categories.router,
    cart.router,
    wishlist.router,
    orders.router,
    seller.router,
    admin.router,
    payments.router,
]
