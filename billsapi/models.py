"""Request and response records exchanged with clients and upstream services."""

import dataclasses
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar, Union

T = TypeVar("T")

_I32 = (-(2**31), 2**31 - 1)
_I64 = (-(2**63), 2**63 - 1)
_U32 = (0, 2**32 - 1)


def _field(key: Optional[str] = None, *, bounds: Optional[tuple] = None, optional: bool = False):
    metadata: dict = {}
    if key:
        metadata["key"] = key
    if bounds:
        metadata["bounds"] = bounds
    if optional:
        return field(default=None, metadata=metadata)
    return field(metadata=metadata)


# --- airtime -----------------------------------------------------------------


@dataclass(kw_only=True)
class AirtimeRequestWithPin:
    client_transaction_reference: str = _field("clientTransactionReference")
    account_number: str = _field("accountNumber")
    cif: str
    network: str
    phone_number: str = _field("phoneNumber")
    amount: float
    pin: str
    channel_id: str = _field("channelId")
    security_info: str = _field("securityInfo")
    is_for_point: bool = _field("isForPoint")


@dataclass(kw_only=True)
class AirtimePurchaseResult:
    status: Optional[str] = None
    message: Optional[str] = None
    narration: Optional[str] = None
    transaction_reference: Optional[str] = _field("transactionReference", optional=True)
    platform_transaction_reference: Optional[str] = _field(
        "platformTransactionReference", optional=True
    )
    transaction_stan: Optional[str] = _field("transactionStan", optional=True)
    original_txn_transaction_date: Optional[str] = _field(
        "orinalTxnTransactionDate", optional=True
    )


@dataclass(kw_only=True)
class AirtimePurchaseResponse:
    result: Optional[AirtimePurchaseResult] = None
    error_message: Optional[str] = _field("errorMessage", optional=True)
    error_messages: Optional[list[str]] = _field("errorMessages", optional=True)
    has_error: bool = _field("hasError")
    time_generated: Optional[str] = _field("timeGenerated", optional=True)


# --- billers -----------------------------------------------------------------


@dataclass(kw_only=True)
class Biller:
    categoryid: str
    categoryname: str
    categorydescription: str
    billerid: str
    billername: str
    customerfield1: str
    customerfield2: Optional[str] = None
    currency_symbol: str = _field("currencySymbol")
    logo_url: Optional[str] = _field("logoUrl", optional=True)


# --- bluecode ----------------------------------------------------------------


@dataclass(kw_only=True)
class BluecodeRegisterResponse:
    merchant_tx_id: str
    checkin_code: str
    state: str


@dataclass(kw_only=True)
class BluecodeRegisterResponseWrapper:
    result: str
    payment: BluecodeRegisterResponse


@dataclass(kw_only=True)
class PaymentInitRequest:
    """Amount in kobo."""

    amount: int = _field(bounds=_I64)


@dataclass(kw_only=True)
class BluecodeRegisterRequest:
    merchant_tx_id: str
    branch_ext_id: str
    scheme: str
    requested_amount: int = _field(bounds=_I64)
    currency: str
    terminal: str
    source: str
    merchant_callback_url: str
    return_url_failure: str
    return_url_success: str
    return_url_cancel: str


@dataclass(kw_only=True)
class BluecodeStatusRequest:
    merchant_tx_id: str


@dataclass(kw_only=True)
class BluecodeStatusResponse:
    state: str
    merchant_tx_id: str


@dataclass(kw_only=True)
class BluecodeStatusResponseWrapper:
    result: str
    payment: BluecodeStatusResponse


# --- dstv --------------------------------------------------------------------


@dataclass(kw_only=True)
class DstvConfirmPaymentRequest:
    customer_id: str
    basket_id: str
    amount: int = _field(bounds=_U32)
    merchant_reference: str


@dataclass(kw_only=True)
class DstvLookupRequest:
    customer_id: str


@dataclass(kw_only=True)
class DstvLookupResponse:
    account_name: Optional[str] = None
    customer_id: Optional[str] = None
    message: str
    success: bool
    custom_fields: Optional[dict[str, str]] = None


# --- payments ----------------------------------------------------------------


@dataclass(kw_only=True)
class PaymentRequest:
    biller_id: str
    amount: float


# --- transactions ------------------------------------------------------------


@dataclass(kw_only=True)
class Transaction:
    id: int = _field(bounds=_I32)
    merchant_reference: str
    amount: int = _field(bounds=_I64)
    customer_id: str
    basket_id: str
    status: str
    timestamp: int = _field(bounds=_I64)


@dataclass(kw_only=True)
class NewTransaction:
    merchant_reference: str
    amount: int = _field(bounds=_I64)
    customer_id: str
    basket_id: str
    status: str
    timestamp: int = _field(bounds=_I64)


# --- conversion --------------------------------------------------------------


def _union_args(tp: Any) -> Optional[tuple]:
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        return typing.get_args(tp)
    return None


def _is_optional(tp: Any) -> bool:
    args = _union_args(tp)
    return args is not None and type(None) in args


def _convert(tp: Any, value: Any, where: str) -> Any:
    args = _union_args(tp)
    if args is not None:
        if value is None and type(None) in args:
            return None
        inner = [a for a in args if a is not type(None)]
        return _convert(inner[0], value, where)

    origin = typing.get_origin(tp)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"field `{where}`: expected a list")
        (item_type,) = typing.get_args(tp)
        return [_convert(item_type, item, f"{where}[{i}]") for i, item in enumerate(value)]
    if origin is dict:
        if not isinstance(value, Mapping):
            raise ValueError(f"field `{where}`: expected an object")
        key_type, value_type = typing.get_args(tp)
        return {
            _convert(key_type, k, where): _convert(value_type, v, f"{where}.{k}")
            for k, v in value.items()
        }
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return from_json(tp, value)
    if tp is bool:
        if not isinstance(value, bool):
            raise ValueError(f"field `{where}`: expected a boolean")
        return value
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"field `{where}`: expected an integer")
        return value
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"field `{where}`: expected a number")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise ValueError(f"field `{where}`: expected a string")
        return value
    raise TypeError(f"unsupported field type {tp!r}")


def from_json(cls: type, data: Any) -> Any:
    """Build a model of type ``cls`` from decoded JSON, validating every field."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a model class")
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {cls.__name__}")
    values: dict = {}
    for f in dataclasses.fields(cls):
        key = f.metadata.get("key", f.name)
        tp = f.type
        if key in data:
            value = _convert(tp, data[key], key)
        elif _is_optional(tp):
            value = None
        else:
            raise ValueError(f"missing field `{key}`")
        bounds = f.metadata.get("bounds")
        if bounds and value is not None and not bounds[0] <= value <= bounds[1]:
            raise ValueError(f"field `{key}` out of range: {value}")
        values[f.name] = value
    return cls(**values)


def _dump(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json(value)
    if isinstance(value, list):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return value


def to_json(model: Any) -> dict:
    """Turn a model into a JSON-ready dict using its wire field names."""
    if isinstance(model, type) or not dataclasses.is_dataclass(model):
        raise TypeError(f"{model!r} is not a model instance")
    return {
        f.metadata.get("key", f.name): _dump(getattr(model, f.name))
        for f in dataclasses.fields(model)
    }