# tests/test_storage.py
from decimal import Decimal

import pytest

from marketplace.domain.schemas import (
    CartItemDraft,
    CategoryDraft,
    OrderDraft,
    OrderItem,
    Product,
    ProductDraft,
    ReviewDraft,
    UserDraft,
    WishlistItemDraft,
)


def make_user(storage, email="user@example.com", role="buyer"):
    return storage.create_user(UserDraft(email=email, password_hash="hash", name="User", role=role))


def make_product(storage, seller_id, slug="widget", **overrides):
    data = dict(
        seller_id=seller_id,
        name="Widget",
        slug=slug,
        short_description="A useful widget",
        price=Decimal("10.00"),
        images=["a.jpg", "b.jpg"],
        stock=3,
    )
    data.update(overrides)
    return storage.create_product(ProductDraft(**data))


def test_create_then_get_user(storage):
    user = make_user(storage)

    assert user.id
    assert user.created_at is not None

    fetched = storage.get_user(user.id)
    assert fetched == user
    assert storage.get_user_by_email("user@example.com") == user


def test_duplicate_email_rejected(storage):
    make_user(storage)

    with pytest.raises(ValueError):
        make_user(storage)

    assert len(storage.get_all_users()) == 1


def test_absence_is_none_not_exception(storage):
    assert storage.get_user("missing") is None
    assert storage.get_user_by_email("nobody@example.com") is None
    assert storage.get_product_by_id("missing") is None
    assert storage.get_product_by_slug("missing") is None
    assert storage.get_category_by_slug("missing") is None
    assert storage.get_order_by_id("missing") is None

    assert storage.update_user("missing", {"name": "x"}) is None
    assert storage.update_product("missing", {"name": "x"}) is None
    assert storage.update_order_status("missing", "paid") is None
    assert storage.update_cart_item("missing", 2) is None

    assert storage.delete_product("missing") is False
    assert storage.delete_user("missing") is False
    assert storage.remove_from_cart("missing") is False
    assert storage.remove_from_wishlist("missing") is False


def test_create_then_get_product(storage):
    seller = make_user(storage, role="seller")
    product = make_product(storage, seller.id)

    fetched = storage.get_product_by_id(product.id)

    assert fetched.model_dump(include=set(Product.model_fields)) == product.model_dump()
    assert fetched.images == ["a.jpg", "b.jpg"]
    assert storage.get_product_by_slug("widget").id == product.id


def test_price_has_two_fraction_digits(storage):
    seller = make_user(storage, role="seller")
    product = make_product(storage, seller.id, price=Decimal("10.5"))

    assert storage.get_product_by_id(product.id).price == Decimal("10.50")
    assert str(storage.get_product_by_id(product.id).price) == "10.50"


def test_product_enrichment(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    category = storage.create_category(CategoryDraft(name="Electronics", slug="electronics"))
    product = make_product(storage, seller.id, category_id=category.id)

    details = storage.get_product_by_id(product.id)

    assert details.seller.id == seller.id
    assert details.category.slug == "electronics"
    # seller wychodzi bez hasha hasla
    assert "passwordHash" not in details.model_dump(by_alias=True)["seller"]


def test_average_rating_and_count(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)

    for rating in (5, 3, 4):
        storage.create_review(ReviewDraft(product_id=product.id, user_id=buyer.id, rating=rating))

    details = storage.get_product_by_slug("widget")
    assert details.average_rating == 4.0
    assert details.review_count == 3


def test_no_reviews_means_absent_average(storage):
    seller = make_user(storage, role="seller")
    make_product(storage, seller.id)

    details = storage.get_product_by_slug("widget")

    assert details.review_count == 0
    assert details.average_rating is None
    assert "averageRating" not in details.model_dump(by_alias=True)


def test_product_filters(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    other = make_user(storage, email="other@example.com", role="seller")
    category = storage.create_category(CategoryDraft(name="Fashion", slug="fashion"))

    a = make_product(storage, seller.id, slug="a", is_featured=True, category_id=category.id)
    b = make_product(storage, seller.id, slug="b")
    c = make_product(storage, other.id, slug="c", is_featured=True)

    assert {p.id for p in storage.get_products()} == {a.id, b.id, c.id}
    assert {p.id for p in storage.get_products(seller_id=seller.id)} == {a.id, b.id}
    assert {p.id for p in storage.get_products(is_featured=True)} == {a.id, c.id}
    assert {p.id for p in storage.get_products(is_featured=False)} == {b.id}
    assert {p.id for p in storage.get_products(category_id=category.id)} == {a.id}


def test_duplicate_slug_rejected(storage):
    seller = make_user(storage, role="seller")
    make_product(storage, seller.id, slug="same")

    with pytest.raises(ValueError):
        make_product(storage, seller.id, slug="same")


def test_update_product_refreshes_updated_at(storage):
    seller = make_user(storage, role="seller")
    product = make_product(storage, seller.id)

    updated = storage.update_product(product.id, {"name": "Renamed", "price": Decimal("12.00")})

    assert updated.name == "Renamed"
    assert updated.price == Decimal("12.00")
    assert updated.created_at == product.created_at
    assert updated.updated_at >= product.updated_at


def test_update_user_merges_fields(storage):
    user = make_user(storage)

    updated = storage.update_user(user.id, {"shop_name": "My Shop", "id": "hijack"})

    assert updated.id == user.id
    assert updated.shop_name == "My Shop"
    assert updated.email == user.email


def test_cart_items_carry_product(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)

    item = storage.add_to_cart(CartItemDraft(user_id=buyer.id, product_id=product.id, quantity=2))

    [listed] = storage.get_cart_items(buyer.id)
    assert listed.id == item.id
    assert listed.quantity == 2
    assert listed.product.id == product.id
    assert listed.product.price == Decimal("10.00")

    assert storage.update_cart_item(item.id, 5).quantity == 5
    assert storage.remove_from_cart(item.id) is True
    assert storage.remove_from_cart(item.id) is False
    assert storage.get_cart_items(buyer.id) == []


def test_reviews_carry_author(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)

    storage.create_review(ReviewDraft(product_id=product.id, user_id=buyer.id, rating=5, comment="Great"))

    [review] = storage.get_product_reviews(product.id)
    assert review.user.email == "buyer@example.com"
    assert review.comment == "Great"


def test_delete_product_cascades(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)

    storage.add_to_cart(CartItemDraft(user_id=buyer.id, product_id=product.id))
    wish = storage.add_to_wishlist(WishlistItemDraft(user_id=buyer.id, product_id=product.id))
    storage.create_review(ReviewDraft(product_id=product.id, user_id=buyer.id, rating=4))

    assert storage.delete_product(product.id) is True

    assert storage.get_product_by_id(product.id) is None
    assert storage.get_cart_items(buyer.id) == []
    assert storage.get_wishlist_items(buyer.id) == []
    assert storage.get_wishlist_item(wish.id) is None
    assert storage.get_product_reviews(product.id) == []


def test_delete_user_cascades(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)
    storage.add_to_cart(CartItemDraft(user_id=buyer.id, product_id=product.id))

    assert storage.delete_user(seller.id) is True

    assert storage.get_user(seller.id) is None
    assert storage.get_products() == []
    # pozycja koszyka z produktem sprzedawcy tez znika
    assert storage.get_cart_items(buyer.id) == []
    assert storage.get_user(buyer.id) is not None


def test_order_items_are_snapshots(storage):
    seller = make_user(storage, email="seller@example.com", role="seller")
    buyer = make_user(storage, email="buyer@example.com")
    product = make_product(storage, seller.id)

    order = storage.create_order(
        OrderDraft(
            user_id=buyer.id,
            total_amount=Decimal("30.00"),
            shipping_address={"city": "Accra"},
            items=[OrderItem(product_id=product.id, name=product.name, price=product.price, quantity=2)],
        )
    )

    storage.update_product(product.id, {"name": "Changed", "price": Decimal("99.00")})
    storage.delete_product(product.id)

    fetched = storage.get_order_by_id(order.id)
    assert fetched.items[0].name == "Widget"
    assert fetched.items[0].price == Decimal("10.00")
    assert fetched.total_amount == Decimal("30.00")
    assert fetched.shipping_address == {"city": "Accra"}
    assert fetched.status == "pending"

    paid = storage.update_order_status(order.id, "paid")
    assert paid.status == "paid"
    assert [o.id for o in storage.get_orders(buyer.id)] == [order.id]
    assert storage.get_orders(seller.id) == []
