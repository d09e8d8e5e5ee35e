# marketplace/services/paystack_client.py
from decimal import Decimal

import requests

from marketplace.utils.settings import PAYSTACK_BASE_URL, PAYSTACK_SECRET_KEY, PAYMENT_TIMEOUT_SECONDS
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentGatewayError(RuntimeError):
    pass


class PaystackClient:
    """
    Bramka platnosci (redirect). Jedna proba na wywolanie, bez retry -
    blad wraca do uzytkownika, ktory moze sprobowac ponownie.
    """

    def __init__(self, secret_key: str | None = None, base_url: str | None = None, timeout: int = PAYMENT_TIMEOUT_SECONDS):
        self.secret_key = secret_key or PAYSTACK_SECRET_KEY
        self.base_url = (base_url or PAYSTACK_BASE_URL).rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _data(resp: requests.Response) -> dict:
        resp.raise_for_status()
        body = resp.json()
        if not body.get("status"):
            raise PaymentGatewayError(body.get("message") or "Payment gateway rejected the request")
        return body.get("data") or {}

    def initialize(
        self,
        email: str,
        amount: Decimal,
        reference: str,
        channels: list[str],
        callback_url: str | None = None,
        metadata: dict | None = None,
    ) -> str:
        url = f"{self.base_url}/transaction/initialize"
        logger.info(f"PaystackClient POST {url} reference={reference}")

        payload = {
            "email": email,
            # Paystack liczy w najmniejszej jednostce waluty
            "amount": int(amount * 100),
            "reference": reference,
            "channels": channels,
            "metadata": metadata or {},
        }
        if callback_url:
            payload["callback_url"] = callback_url

        resp = requests.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        data = self._data(resp)

        authorization_url = data.get("authorization_url")
        if not authorization_url:
            raise PaymentGatewayError("Payment gateway did not return an authorization url")
        return authorization_url

    def verify(self, reference: str) -> str:
        url = f"{self.base_url}/transaction/verify/{reference}"
        logger.info(f"PaystackClient GET {url}")

        resp = requests.get(url, headers=self._headers(), timeout=self.timeout)
        return self._data(resp).get("status", "unknown")
