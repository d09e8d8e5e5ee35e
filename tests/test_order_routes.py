# tests/test_order_routes.py
from marketplace.services.paystack_client import PaymentGatewayError
from tests.helpers import auth, create_product, register


class FailingGateway:
    def initialize(self, **kwargs):
        raise PaymentGatewayError("gateway down")

    def verify(self, reference):
        raise PaymentGatewayError("gateway down")


class FakeGateway:
    def __init__(self, status="success"):
        self.status = status
        self.initialized = []

    def initialize(self, **kwargs):
        self.initialized.append(kwargs)
        return f"https://checkout.example/{kwargs['reference']}"

    def verify(self, reference):
        return self.status


def place_order(client, token, product_id, quantity=1):
    return client.post(
        "/api/orders",
        json={"items": [{"productId": product_id, "quantity": quantity}], "shippingAddress": {"city": "Accra"}},
        headers=auth(token),
    )


def test_order_snapshots_current_product(client, seller, buyer):
    seller_token, _ = seller
    token, user = buyer
    product = create_product(client, seller_token, name="Lamp", price="20.00")

    resp = place_order(client, token, product["id"], quantity=2)

    assert resp.status_code == 201
    order = resp.json()
    assert order["userId"] == user["id"]
    assert order["status"] == "pending"
    # 2 x 20.00 + 10.00 wysylka
    assert order["totalAmount"] == "50.00"
    assert order["items"][0]["name"] == "Lamp"
    assert order["items"][0]["price"] == "20.00"
    assert order["shippingAddress"] == {"city": "Accra"}

    client.patch(f"/api/products/{product['id']}", json={"name": "Renamed", "price": "99.00"}, headers=auth(seller_token))

    [listed] = client.get("/api/orders", headers=auth(token)).json()
    assert listed["items"][0]["name"] == "Lamp"
    assert listed["items"][0]["price"] == "20.00"
    assert listed["totalAmount"] == "50.00"


def test_order_ignores_client_prices(client, seller, buyer):
    seller_token, _ = seller
    token, _ = buyer
    product = create_product(client, seller_token, price="20.00")

    resp = client.post(
        "/api/orders",
        json={"items": [{"productId": product["id"], "quantity": 1, "price": "0.01"}], "totalAmount": "0.01"},
        headers=auth(token),
    )

    assert resp.json()["totalAmount"] == "30.00"


def test_invalid_orders(client, store, buyer):
    token, _ = buyer

    assert client.post("/api/orders", json={"items": []}, headers=auth(token)).status_code == 400
    assert place_order(client, token, "missing").status_code == 400
    assert place_order(client, token, "missing", quantity=0).status_code == 400
    assert client.post("/api/orders", json={"items": []}).status_code == 401

    assert store.get_orders() == []


def test_orders_are_private(client, seller, buyer, admin):
    seller_token, _ = seller
    token, _ = buyer
    admin_token, _ = admin
    other_token, _ = register(client, "other@example.com")
    product = create_product(client, seller_token)
    order = place_order(client, token, product["id"]).json()

    assert client.get("/api/orders", headers=auth(other_token)).json() == []
    assert client.get(f"/api/orders/{order['id']}", headers=auth(other_token)).status_code == 403
    assert client.get(f"/api/orders/{order['id']}", headers=auth(token)).status_code == 200
    assert client.get(f"/api/orders/{order['id']}", headers=auth(admin_token)).status_code == 200
    assert client.get("/api/orders/missing", headers=auth(token)).status_code == 404


def test_status_changes(client, seller, buyer):
    seller_token, _ = seller
    token, _ = buyer
    product = create_product(client, seller_token)
    order = place_order(client, token, product["id"]).json()
    url = f"/api/orders/{order['id']}/status"

    assert client.patch(url, json={"status": "shipped"}, headers=auth(token)).status_code == 403
    assert client.patch(url, json={"status": "lost"}, headers=auth(seller_token)).status_code == 400

    shipped = client.patch(url, json={"status": "shipped"}, headers=auth(seller_token))
    assert shipped.status_code == 200
    assert shipped.json()["status"] == "shipped"

    # wyslanego juz nie da sie anulowac jako kupujacy
    assert client.patch(url, json={"status": "cancelled"}, headers=auth(token)).status_code == 403
    assert client.patch("/api/orders/missing/status", json={"status": "paid"}, headers=auth(seller_token)).status_code == 404


def test_buyer_can_cancel_pending_order(client, seller, buyer):
    seller_token, _ = seller
    token, _ = buyer
    product = create_product(client, seller_token)
    order = place_order(client, token, product["id"]).json()

    resp = client.patch(f"/api/orders/{order['id']}/status", json={"status": "cancelled"}, headers=auth(token))

    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"


def test_payment_flow_without_gateway(client, seller, buyer):
    seller_token, _ = seller
    token, _ = buyer
    product = create_product(client, seller_token, price="15.00")

    init = client.post(
        "/api/payments/initialize",
        json={"items": [{"productId": product["id"], "quantity": 1}], "paymentMethod": "card"},
        headers=auth(token),
    )

    assert init.status_code == 200
    body = init.json()
    order_id = body["orderId"]
    assert body["reference"] == order_id
    assert body["authorizationUrl"].endswith(f"?reference={order_id}")

    pending = client.get(f"/api/orders/{order_id}", headers=auth(token)).json()
    assert pending["status"] == "pending"
    assert pending["totalAmount"] == "25.00"

    verify = client.get(f"/api/payments/verify/{order_id}", headers=auth(token))
    assert verify.json() == {"success": True, "message": "Payment verified", "orderId": order_id}

    paid = client.get(f"/api/orders/{order_id}", headers=auth(token)).json()
    assert paid["status"] == "paid"
    assert paid["paymentStatus"] == "success"


def test_payment_with_gateway(client, app, seller, buyer):
    seller_token, _ = seller
    token, user = buyer
    product = create_product(client, seller_token)
    gateway = FakeGateway(status="failed")
    app.state.payment_gateway = gateway

    init = client.post(
        "/api/payments/initialize",
        json={"items": [{"productId": product["id"], "quantity": 1}], "paymentMethod": "momo", "momoNumber": "0240000000"},
        headers=auth(token),
    ).json()

    assert init["authorizationUrl"] == f"https://checkout.example/{init['orderId']}"
    [call] = gateway.initialized
    assert call["email"] == user["email"]
    assert call["channels"] == ["mobile_money"]

    verify = client.get(f"/api/payments/verify/{init['orderId']}", headers=auth(token)).json()
    assert verify["success"] is False

    order = client.get(f"/api/orders/{init['orderId']}", headers=auth(token)).json()
    assert order["status"] == "pending"
    assert order["paymentStatus"] == "failed"


def test_gateway_failure_leaves_pending_order(client, app, store, seller, buyer):
    seller_token, _ = seller
    token, user = buyer
    product = create_product(client, seller_token)
    app.state.payment_gateway = FailingGateway()

    resp = client.post(
        "/api/payments/initialize",
        json={"items": [{"productId": product["id"], "quantity": 1}]},
        headers=auth(token),
    )

    assert resp.status_code == 500
    [order] = store.get_orders(user["id"])
    assert order.status == "pending"


def test_verify_unknown_or_foreign_reference(client, seller, buyer):
    seller_token, _ = seller
    token, _ = buyer
    other_token, _ = register(client, "other@example.com")
    product = create_product(client, seller_token)
    order = place_order(client, token, product["id"]).json()

    assert client.get("/api/payments/verify/missing", headers=auth(token)).status_code == 404
    assert client.get(f"/api/payments/verify/{order['id']}", headers=auth(other_token)).status_code == 403
