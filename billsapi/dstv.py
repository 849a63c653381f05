"""DSTV account lookup and payment calls against the vendor XML API."""

from __future__ import annotations

import base64
import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from urllib.parse import quote
from xml.sax.saxutils import escape

import requests

from .errors import InternalServerError, RequestError
from .models import DstvLookupRequest, DstvLookupResponse

logger = logging.getLogger(__name__)

MERCHANT_ID = "test"
VAS_ID = "MCA_ACCOUNT_SQ_NG"
COUNTRY_CODE = "NG"
DEFAULT_API_URL = "https://mcapi.example.com"
DEFAULT_LOOKUP_URL = "https://mcapi.example.com/vendor/lookup"
DEFAULT_PAYMENT_URL = "https://mcapi.example.com/vendor/singlepayment"
TIMEOUT = 30

_BASIC_CREDENTIALS = "test:password"
_U32_MAX = 2**32 - 1

_LOOKUP_TEMPLATE = """<PayUVasRequest>
    <MerchantId>{merchant_id}</MerchantId>
    <MerchantReference>ref-123</MerchantReference>
    <TransactionType>ACCOUNT_LOOKUP</TransactionType>
    <VasId>{vas_id}</VasId>
    <CountryCode>{country}</CountryCode>
    <CustomerId>{customer_id}</CustomerId>
</PayUVasRequest>"""

_SINGLE_PAYMENT_TEMPLATE = """<PayUVasRequest>
    <MerchantId>{merchant_id}</MerchantId>
    <MerchantReference>{reference}</MerchantReference>
    <TransactionType>SINGLE_PAYMENT</TransactionType>
    <VasId>{vas_id}</VasId>
    <CountryCode>{country}</CountryCode>
    <CustomerId>{customer_id}</CustomerId>
    <Amount>{amount}</Amount>
    <ProductCode>{product_code}</ProductCode>
</PayUVasRequest>"""


@dataclass
class SinglePaymentRequest:
    amount: int
    customer_id: str
    product_code: str
    merchant_reference: str


def _authorization() -> str:
    encoded = base64.b64encode(_BASIC_CREDENTIALS.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def _api_url() -> str:
    return os.environ.get("DSTV_API_URL", DEFAULT_API_URL).rstrip("/")


def build_confirm_payment_xml(
    merchant_reference: str, customer_id: str, basket_id: str, amount: int
) -> str:
    """Serialise a single-payment confirmation request."""
    if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= _U32_MAX:
        raise ValueError(f"amount must be an unsigned 32-bit integer, got {amount!r}")
    root = ET.Element("PayUVasRequest", Ver="1.0")
    for tag, text in (
        ("MerchantId", MERCHANT_ID),
        ("MerchantReference", merchant_reference),
        ("TransactionType", "SINGLE"),
        ("VasId", VAS_ID),
        ("CountryCode", COUNTRY_CODE),
        ("AmountInCents", str(amount)),
        ("CustomerId", customer_id),
    ):
        ET.SubElement(root, tag).text = text
    custom_fields = ET.SubElement(root, "CustomFields")
    ET.SubElement(custom_fields, "Customfield", Key="BasketId", Value=basket_id)
    return ET.tostring(root, encoding="unicode")


def build_lookup_xml(customer_id: str) -> str:
    """Serialise an account lookup request."""
    return _LOOKUP_TEMPLATE.format(
        merchant_id=MERCHANT_ID,
        vas_id=VAS_ID,
        country=COUNTRY_CODE,
        customer_id=escape(customer_id),
    )


def build_single_payment_xml(request: SinglePaymentRequest) -> str:
    """Serialise a bill payment request."""
    return _SINGLE_PAYMENT_TEMPLATE.format(
        merchant_id=MERCHANT_ID,
        reference=escape(request.merchant_reference),
        vas_id=VAS_ID,
        country=COUNTRY_CODE,
        customer_id=escape(request.customer_id),
        amount=request.amount,
        product_code=escape(request.product_code),
    )


def _parse_result(xml_text: str) -> ET.Element:
    try:
        root = ET.fromstring(xml_text.strip())
    except ET.ParseError as exc:
        logger.error("XML parse error: %s", exc)
        raise InternalServerError() from exc
    for tag in ("ResultCode", "ResultMessage"):
        if root.find(tag) is None:
            logger.error("XML response lacks %s", tag)
            raise InternalServerError()
    return root


def parse_lookup_response(xml_text: str) -> DstvLookupResponse:
    """Extract the account details from a lookup response document."""
    root = _parse_result(xml_text)
    fields: dict[str, str] = {}
    account_name = None
    customer_id = None
    custom = root.find("CustomFields")
    if custom is not None:
        for element in custom.findall("Customfield"):
            key = element.get("Key")
            value = element.get("Value")
            if key is None or value is None:
                raise InternalServerError()
            fields[key] = value
            if key == "SURNAME":
                account_name = value
            elif key == "DSTV_CUSTOMER_NUMBER":
                customer_id = value
    logger.info("Custom fields: %s", fields)
    return DstvLookupResponse(
        account_name=account_name,
        customer_id=customer_id,
        message="Success",
        success=True,
        custom_fields=fields,
    )


def confirm_dstv_payment(
    merchant_reference: str, customer_id: str, basket_id: str, amount: int
) -> str:
    """Send a payment confirmation; fall back to a requery if it cannot be sent."""
    payload = build_confirm_payment_xml(merchant_reference, customer_id, basket_id, amount)
    try:
        response = requests.post(
            f"{_api_url()}/Vendor/SinglePayment",
            data=payload.encode("utf-8"),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=TIMEOUT,
        )
    except requests.RequestException:
        logger.warning("Initial confirmation failed, falling back to requery")
        return requery_dstv_confirmation(merchant_reference)
    return response.text


def requery_dstv_confirmation(reference: str) -> str:
    """Ask for the status of a payment; return the document if it succeeded."""
    url = f"{_api_url()}/Transactions/Single/{quote(reference, safe='')}"
    try:
        response = requests.get(
            url, headers={"Authorization": _authorization()}, timeout=TIMEOUT
        )
    except requests.RequestException as exc:
        raise RequestError(exc) from exc
    text = response.text
    root = _parse_result(text)
    code = root.findtext("ResultCode")
    logger.info("Requery result: %s %s", code, root.findtext("ResultMessage"))
    if code == "00":
        return text
    raise InternalServerError()


def lookup_dstv_account(request: DstvLookupRequest) -> DstvLookupResponse:
    """Look up a DSTV customer account."""
    url = os.environ.get("DSTV_LOOKUP_URL", DEFAULT_LOOKUP_URL)
    try:
        response = requests.post(
            url,
            headers={"Authorization": _authorization()},
            data={"xml": build_lookup_xml(request.customer_id)},
            timeout=TIMEOUT,
        )
    except requests.RequestException as exc:
        raise RequestError(exc) from exc
    logger.debug("Lookup raw XML response: %s", response.text)
    return parse_lookup_response(response.text)


def pay_dstv_bill(request: SinglePaymentRequest) -> str:
    """Pay a DSTV bill and return the raw response document."""
    url = os.environ.get("DSTV_PAYMENT_URL", DEFAULT_PAYMENT_URL)
    try:
        response = requests.post(
            url,
            headers={"Authorization": _authorization()},
            data={"xml": build_single_payment_xml(request)},
            timeout=TIMEOUT,
        )
    except requests.RequestException as exc:
        raise RequestError(exc) from exc
    logger.info("Payment response XML: %s", response.text)
    return response.text