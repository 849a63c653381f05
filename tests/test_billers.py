import pytest
import responses

from billsapi.billers import fetch_billers
from billsapi.errors import EnvVarMissing, RequestError

BASE = "https://billers.example.com"

BILLER = {
    "categoryid": "2",
    "categoryname": "Cable TV",
    "categorydescription": "Pay for cable",
    "billerid": "104",
    "billername": "DSTV",
    "customerfield1": "Smart Card Number",
    "customerfield2": None,
    "currencySymbol": "NGN",
    "logoUrl": "dstv.png",
}


@pytest.fixture
def mocked(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", BASE)
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_fetch_billers_parses_list(mocked):
    mocked.add(responses.GET, f"{BASE}/quickteller/billers", json=[BILLER])
    billers = fetch_billers()
    assert [b.billername for b in billers] == ["DSTV"]
    assert billers[0].currency_symbol == "NGN"
    assert billers[0].customerfield2 is None


def test_fetch_billers_sends_gateway_headers(mocked):
    mocked.add(responses.GET, f"{BASE}/quickteller/billers", json=[])
    assert fetch_billers() == []
    headers = mocked.calls[0].request.headers
    assert headers["TerminalID"] == "3DMO0001"
    assert headers["SignatureMethod"] == "SHA1"
    assert headers["Authorization"].split(" ")[0] == "InterswitchAuth"


def test_missing_base_url(monkeypatch):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    with pytest.raises(EnvVarMissing) as info:
        fetch_billers()
    assert info.value.name == "API_BASE_URL"


def test_non_json_body_is_request_error(mocked):
    mocked.add(responses.GET, f"{BASE}/quickteller/billers", body="oops", status=500)
    with pytest.raises(RequestError):
        fetch_billers()


def test_malformed_biller_is_request_error(mocked):
    mocked.add(responses.GET, f"{BASE}/quickteller/billers", json=[{"billerid": "1"}])
    with pytest.raises(RequestError):
        fetch_billers()


def test_object_instead_of_list_is_request_error(mocked):
    mocked.add(responses.GET, f"{BASE}/quickteller/billers", json={"billers": []})
    with pytest.raises(RequestError):
        fetch_billers()