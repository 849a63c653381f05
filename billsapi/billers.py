"""Fetching the list of billers from the payment gateway."""

from __future__ import annotations

import os

import requests

from .errors import EnvVarMissing, RequestError
from .models import Biller, from_json

TIMEOUT = 30

_HEADERS = {
    "Content-Type": "application/json",
    "Authorization": "InterswitchAuth token",
    "Signature": "placeholder",
    "Timestamp": "1434455667788",
    "Nonce": "7333394444423754333",
    "SignatureMethod": "SHA1",
    "TerminalID": "3DMO0001",
}


def fetch_billers() -> list[Biller]:
    """Return every biller the gateway offers."""
    base = os.environ.get("API_BASE_URL")
    if base is None:
        raise EnvVarMissing("API_BASE_URL")
    url = f"{base}/quickteller/billers"
    try:
        payload = requests.get(url, headers=_HEADERS, timeout=TIMEOUT).json()
    except (requests.RequestException, ValueError) as exc:
        raise RequestError(exc) from exc
    if not isinstance(payload, list):
        raise RequestError(ValueError("expected a list of billers"))
    try:
        return [from_json(Biller, item) for item in payload]
    except ValueError as exc:
        raise RequestError(exc) from exc