# billsapi

Building blocks for a small bill-payment backend:

- `billsapi.dstv` – DStv account lookup, payment confirmation (with a
  requery fallback) and bill payment against the PayU VAS XML API.
- `billsapi.billers` – `fetch_billers()` lists the billers offered by the
  payment gateway at `$API_BASE_URL/quickteller/billers`.
- `billsapi.payments` – `process_payment(payment)` posts a `PaymentRequest`
  as JSON to `https://api.example.com/pay` and returns the response body.
- `billsapi.transactions` – `TransactionStore`, a transaction ledger kept in
  any SQL database SQLAlchemy can reach.
- `billsapi.routes` – Flask blueprints exposing the above over HTTP.
- `billsapi.models` – the request and response records, with `to_json(model)`
  and `from_json(cls, data)` converting to and from their JSON field names.
- `billsapi.errors` – `ApiError` and its subclasses `RequestError`,
  `EnvVarMissing` and `InternalServerError`.

## Serving the routes

The package provides blueprints; you assemble and run the Flask application:

```python
from flask import Flask

from billsapi.routes import (
    billers_routes,
    bluecode_routes,
    dstv_routes,
    payments_routes,
    transaction_routes,
)
from billsapi.transactions import TransactionStore

store = TransactionStore("sqlite:///bills.db")

app = Flask(__name__)
app.register_blueprint(dstv_routes(), url_prefix="/dstv")
app.register_blueprint(bluecode_routes(), url_prefix="/bluecode")
app.register_blueprint(transaction_routes(store), url_prefix="/transactions")
app.register_blueprint(billers_routes())
app.register_blueprint(payments_routes(), url_prefix="/payments")

app.run(host="127.0.0.1", port=8080)
```

With those prefixes the endpoints are:

| Method | Path | Body | Reply |
| --- | --- | --- | --- |
| POST | `/dstv/lookup` | `{"customer_id": "..."}` | `account_name`, `customer_id`, `message`, `success`, `custom_fields` |
| POST | `/dstv/confirm-payment` | `customer_id`, `basket_id`, `amount`, `merchant_reference` | `success`, `raw_xml`, `message` |
| POST | `/bluecode/callback` | `{"result": ..., "payment": {"state": ..., "merchant_tx_id": ...}}` | `{"status": "received"}` |
| GET | `/transactions/` | none | all transactions, newest timestamp first |
| POST | `/transactions/` | `merchant_reference`, `amount`, `customer_id`, `basket_id`, `status`, `timestamp` | the stored transaction with its `id` |
| GET | `/billers` | none | the list of billers |
| POST | `/payments/` | none | the text `Payment processed` |

JSON bodies must be sent with `Content-Type: application/json`; otherwise the
reply is 415. A body that is not JSON gets 400, and one that does not match
the expected fields or types gets 422.

Upstream failures do not become HTTP errors: a failed lookup replies with
`success: false` and `"Lookup failed"`, a failed confirmation with
`success: false` and `"DSTV payment confirmation failed"`, and a failed
biller fetch with an empty list. Database errors on the transaction routes
reply with status 500 and the error text.

## Configuration

| Variable | Used for | Default |
| --- | --- | --- |
| `DSTV_API_URL` | Base URL for payment confirmation and requery | `https://mcapi.example.com` |
| `DSTV_LOOKUP_URL` | Account lookup endpoint | `https://mcapi.example.com/vendor/lookup` |
| `DSTV_PAYMENT_URL` | Single bill payment endpoint | `https://mcapi.example.com/vendor/singlepayment` |
| `API_BASE_URL` | Base URL for the biller list | none; `fetch_billers()` raises `EnvVarMissing` |

## Using it as a library

```python
from billsapi.models import NewTransaction
from billsapi.transactions import TransactionStore

store = TransactionStore("sqlite:///bills.db")
saved = store.add(NewTransaction(
    merchant_reference="ref-1",
    amount=1500,
    customer_id="customer-1",
    basket_id="basket-1",
    status="PENDING",
    timestamp=1700000000,
))
print(saved.id, [t.merchant_reference for t in store.list()])
```

The DStv documents can be built and read without any network access:

```python
from billsapi.dstv import build_lookup_xml, parse_lookup_response

print(build_lookup_xml("customer-1"))
```

`build_confirm_payment_xml` and `build_single_payment_xml` build the payment
documents, and `parse_lookup_response` turns a response document into a
`DstvLookupResponse`. `lookup_dstv_account`, `confirm_dstv_payment`,
`requery_dstv_confirmation` and `pay_dstv_bill` perform the HTTP calls and
raise `ApiError` subclasses on failure. `confirm_dstv_payment` falls back to
`requery_dstv_confirmation` when the confirmation cannot be sent, and the
requery succeeds only when the result code is `00`.

## What it does not do

- There is no command and no ready-made server: you create the Flask
  application and register the blueprints yourself, as shown above. No `.env`
  file is read and no cross-origin headers are added.
- Bluecode QR payments are not registered or requeried; only the status
  callback is acknowledged, and its contents are logged, not stored.
- Airtime purchase is not provided; `AirtimeRequestWithPin` and the airtime
  response records exist only as data models.