"""Forwarding generic bill payments to the payment provider."""

from __future__ import annotations

import requests

from .errors import RequestError
from .models import PaymentRequest, to_json

PAYMENT_URL = "https://api.example.com/pay"
TIMEOUT = 30


def process_payment(payment: PaymentRequest) -> str:
    """Submit a payment and return the provider's response body."""
    try:
        response = requests.post(PAYMENT_URL, json=to_json(payment), timeout=TIMEOUT)
    except requests.RequestException as exc:
        raise RequestError(exc) from exc
    return response.text