"""HTTP routes of the bill-payment API."""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from flask import Blueprint, Response, abort, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from .billers import fetch_billers
from .dstv import confirm_dstv_payment, lookup_dstv_account
from .errors import ApiError
from .models import (
    BluecodeStatusResponseWrapper,
    DstvConfirmPaymentRequest,
    DstvLookupRequest,
    DstvLookupResponse,
    NewTransaction,
    from_json,
    to_json,
)
from .transactions import TransactionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _read_json(cls: type[T]) -> T:
    """Decode the request body into ``cls``, rejecting it the way clients expect."""
    if not request.is_json:
        abort(415, "Expected request with `Content-Type: application/json`")
    try:
        data: Any = json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        abort(400, f"Failed to parse the request body as JSON: {exc}")
    try:
        return from_json(cls, data)
    except ValueError as exc:
        abort(422, f"Failed to deserialize the JSON body into the target type: {exc}")


def _server_error(exc: Exception) -> Response:
    return Response(str(exc), status=500, mimetype="text/plain")


# --- bluecode ----------------------------------------------------------------


def callback_handler() -> Response:
    """Acknowledge a payment status callback."""
    payload = _read_json(BluecodeStatusResponseWrapper)
    logger.info("Received Bluecode callback: %s", payload)
    return jsonify(status="received")


def bluecode_routes() -> Blueprint:
    """Routes receiving callbacks from the QR payment provider."""
    bp = Blueprint("bluecode", __name__)
    bp.add_url_rule("/callback", "callback", callback_handler, methods=["POST"])
    return bp


# --- dstv --------------------------------------------------------------------


def lookup_handler() -> Response:
    """Look up a DSTV account; report a failed lookup instead of an error."""
    payload = _read_json(DstvLookupRequest)
    try:
        data = lookup_dstv_account(payload)
    except ApiError as exc:
        logger.error("DSTV lookup failed: %s", exc)
        data = DstvLookupResponse(message="Lookup failed", success=False)
    return jsonify(to_json(data))


def confirm_payment_handler() -> Response:
    """Confirm a DSTV payment and return the upstream document."""
    body = _read_json(DstvConfirmPaymentRequest)
    logger.info("Received DSTV confirm-payment request: %s", body)
    try:
        xml_response = confirm_dstv_payment(
            body.merchant_reference, body.customer_id, body.basket_id, body.amount
        )
    except ApiError as exc:
        logger.error("Failed to confirm DSTV payment: %s", exc)
        return jsonify(
            success=False,
            raw_xml=None,
            message="DSTV payment confirmation failed",
        )
    logger.info("DSTV confirmation success")
    return jsonify(
        success=True,
        raw_xml=xml_response,
        message="Payment confirmed successfully",
    )


def dstv_routes() -> Blueprint:
    """Routes for DSTV account lookup and payment confirmation."""
    bp = Blueprint("dstv", __name__)
    bp.add_url_rule("/lookup", "lookup", lookup_handler, methods=["POST"])
    bp.add_url_rule(
        "/confirm-payment", "confirm_payment", confirm_payment_handler, methods=["POST"]
    )
    return bp


# --- billers -----------------------------------------------------------------


def _get_billers() -> Response:
    try:
        billers = fetch_billers()
    except ApiError as exc:
        logger.error("Fetching billers failed: %s", exc)
        billers = []
    return jsonify([to_json(biller) for biller in billers])


def billers_routes() -> Blueprint:
    """Route listing the available billers."""
    bp = Blueprint("billers", __name__)
    bp.add_url_rule("/billers", "get_billers", _get_billers, methods=["GET"])
    return bp


# --- payments ----------------------------------------------------------------


def _process_payment() -> Response:
    return Response("Payment processed", mimetype="text/plain")


def payments_routes() -> Blueprint:
    """Route accepting generic payments."""
    bp = Blueprint("payments", __name__)
    bp.add_url_rule(
        "/", "process_payment", _process_payment, methods=["POST"], strict_slashes=False
    )
    return bp


# --- transactions ------------------------------------------------------------


def transaction_routes(store: TransactionStore) -> Blueprint:
    """Routes storing and listing transactions in ``store``."""
    bp = Blueprint("transactions", __name__)

    def get_transactions() -> Response:
        try:
            rows = store.list()
        except SQLAlchemyError as exc:
            return _server_error(exc)
        return jsonify([to_json(row) for row in rows])

    def store_transaction() -> Response:
        payload = _read_json(NewTransaction)
        logger.info("Saving transaction: %s", payload)
        try:
            row = store.add(payload)
        except SQLAlchemyError as exc:
            return _server_error(exc)
        return jsonify(to_json(row))

    bp.add_url_rule(
        "/", "get_transactions", get_transactions, methods=["GET"], strict_slashes=False
    )
    bp.add_url_rule(
        "/", "store_transaction", store_transaction, methods=["POST"], strict_slashes=False
    )
    return bp