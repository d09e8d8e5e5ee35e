# marketplace/data/seed.py
from decimal import Decimal

from marketplace.domain.schemas import CategoryDraft, ProductDraft, UserDraft
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger
from marketplace.utils.security import hash_password

logger = get_logger(__name__)

ADMIN_EMAIL = "admin@shophub.com"

_CATEGORIES = [
    ("Electronics", "electronics", "Latest gadgets and electronics",
     "https://images.unsplash.com/photo-1498049794561-7780e7231661?w=800&h=600&fit=crop"),
    ("Fashion", "fashion", "Trendy clothing and accessories",
     "https://images.unsplash.com/photo-1445205170230-053b83016050?w=800&h=600&fit=crop"),
    ("Home & Living", "home-living", "Everything for your home",
     "https://images.unsplash.com/photo-1484101403633-562f891dc89a?w=800&h=600&fit=crop"),
    ("Beauty & Health", "beauty-health", "Beauty and wellness products",
     "https://images.unsplash.com/photo-1596462502278-27bfdc403348?w=800&h=600&fit=crop"),
]

# (name, slug, short, price, compare_at, category slug, image, stock, featured)
_PRODUCTS = [
    ("Wireless Noise Cancelling Headphones", "wireless-noise-cancelling-headphones",
     "Premium wireless headphones with active noise cancellation", "299.99", "399.99",
     "electronics", "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=800&h=800&fit=crop", 50, True),
    ("Smart Watch Pro", "smart-watch-pro",
     "Advanced fitness tracking and notifications on your wrist", "249.99", None,
     "electronics", "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=800&h=800&fit=crop", 30, True),
    ("Designer Leather Backpack", "designer-leather-backpack",
     "Handcrafted genuine leather backpack for professionals", "189.99", "249.99",
     "fashion", "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=800&h=800&fit=crop", 20, True),
    ("Minimalist Desk Lamp", "minimalist-desk-lamp",
     "LED desk lamp with adjustable brightness and color temperature", "79.99", None,
     "home-living", "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=800&h=800&fit=crop", 45, True),
    ("Organic Skincare Set", "organic-skincare-set",
     "Complete organic skincare routine for glowing skin", "129.99", None,
     "beauty-health", "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=800&h=800&fit=crop", 35, False),
    ("Portable Bluetooth Speaker", "portable-bluetooth-speaker",
     "Waterproof speaker with 360° sound and 24-hour battery", "89.99", None,
     "electronics", "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=800&h=800&fit=crop", 60, False),
]


def seed_data(storage: Storage) -> None:
    # not forcing: only seed if empty
    if storage.get_user_by_email(ADMIN_EMAIL):
        return

    logger.info("Seeding database...")

    storage.create_user(UserDraft(
        email=ADMIN_EMAIL, password_hash=hash_password("admin123"), name="Admin User", role="admin",
    ))
    seller = storage.create_user(UserDraft(
        email="seller@shophub.com", password_hash=hash_password("seller123"),
        name="John's Electronics", role="seller", shop_name="John's Electronics",
    ))
    storage.create_user(UserDraft(
        email="buyer@shophub.com", password_hash=hash_password("buyer123"), name="Jane Doe", role="buyer",
    ))

    categories = {}
    for name, slug, description, image in _CATEGORIES:
        categories[slug] = storage.create_category(
            CategoryDraft(name=name, slug=slug, description=description, image=image)
        )

    for name, slug, short, price, compare_at, category, image, stock, featured in _PRODUCTS:
        storage.create_product(ProductDraft(
            seller_id=seller.id,
            category_id=categories[category].id,
            name=name,
            slug=slug,
            short_description=short,
            long_description=short,
            price=Decimal(price),
            compare_at_price=Decimal(compare_at) if compare_at else None,
            images=[image],
            stock=stock,
            is_featured=featured,
        ))

    logger.info(f"Seeded 3 users, {len(_CATEGORIES)} categories, {len(_PRODUCTS)} products")
