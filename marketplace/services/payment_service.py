# marketplace/services/payment_service.py
from typing import Optional

from requests import RequestException

from marketplace.domain.schemas import PaymentInitIn, PaymentInitOut, PaymentVerifyOut, User
from marketplace.repos.storage import Storage
from marketplace.services.order_service import OrderService
from marketplace.services.paystack_client import PaymentGatewayError, PaystackClient
from marketplace.utils.logging import get_logger
from marketplace.utils.settings import PAYMENT_CALLBACK_URL

logger = get_logger(__name__)

_CHANNELS = {
    "card": ["card"],
    "momo": ["mobile_money"],
}


class PaymentService:
    """
    Checkout: najpierw zamowienie (pending), potem inicjalizacja platnosci.

    Dwa osobne kroki bez transakcji kompensujacej - jesli bramka padnie po
    utworzeniu zamowienia, zamowienie zostaje w statusie pending.
    Bez skonfigurowanej bramki (dev) zwracamy lokalny redirect.
    """

    def __init__(self, storage: Storage, gateway: Optional[PaystackClient] = None):
        self.storage = storage
        self.gateway = gateway
        self.orders = OrderService(storage)

    def initialize(self, user: User, payload: PaymentInitIn) -> PaymentInitOut:
        order = self.orders.create_order(
            user,
            payload.items,
            shipping_address=payload.shipping_address,
            payment_method=payload.payment_method,
        )

        if self.gateway is None:
            logger.info(f"No payment gateway configured, dev redirect for order {order.id}")
            self.storage.update_order(order.id, {"payment_reference": order.id})
            return PaymentInitOut(
                authorization_url=f"{PAYMENT_CALLBACK_URL}?reference={order.id}",
                reference=order.id,
                order_id=order.id,
            )

        try:
            authorization_url = self.gateway.initialize(
                email=user.email,
                amount=order.total_amount,
                reference=order.id,
                channels=_CHANNELS[payload.payment_method],
                callback_url=PAYMENT_CALLBACK_URL,
                metadata={"orderId": order.id, "momoNumber": payload.momo_number},
            )
        except (RequestException, PaymentGatewayError) as e:
            logger.error(f"Payment initialization failed for order {order.id}: {e}")
            raise RuntimeError("Payment initialization failed, please try again")

        self.storage.update_order(order.id, {"payment_reference": order.id})
        logger.info(f"Payment initialized for order {order.id}")

        return PaymentInitOut(
            authorization_url=authorization_url,
            reference=order.id,
            order_id=order.id,
        )

    def verify(self, user: User, reference: str) -> PaymentVerifyOut:
        # reference == id zamowienia (tak inicjalizujemy bramke)
        order = self.orders.get_order(user, reference)

        if self.gateway is None:
            gateway_status = "success"
        else:
            try:
                gateway_status = self.gateway.verify(reference)
            except (RequestException, PaymentGatewayError) as e:
                logger.error(f"Payment verification failed for order {order.id}: {e}")
                raise RuntimeError("Payment verification failed, please try again")

        if gateway_status != "success":
            self.storage.update_order(order.id, {"payment_status": gateway_status})
            return PaymentVerifyOut(success=False, message="Payment not completed", order_id=order.id)

        self.storage.update_order(order.id, {"status": "paid", "payment_status": "success"})
        logger.info(f"Order {order.id} paid")

        return PaymentVerifyOut(success=True, message="Payment verified", order_id=order.id)
