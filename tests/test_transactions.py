import dataclasses

import pytest
from sqlalchemy.exc import OperationalError

from billsapi.models import NewTransaction, Transaction
from billsapi.transactions import TransactionStore


def _new(reference, timestamp, amount=5000):
    return NewTransaction(
        merchant_reference=reference,
        amount=amount,
        customer_id="CUST-0001",
        basket_id="BASKET-1",
        status="pending",
        timestamp=timestamp,
    )


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tx.sqlite'}"


@pytest.fixture
def store(db_url):
    return TransactionStore(db_url)


def test_empty_store_lists_nothing(store):
    assert store.list() == []


def test_add_returns_stored_transaction(store):
    new = _new("REF-A", 100)
    stored = store.add(new)
    assert stored == Transaction(id=stored.id, **dataclasses.asdict(new))
    assert stored.id > 0


def test_ids_are_distinct(store):
    first = store.add(_new("REF-A", 100))
    second = store.add(_new("REF-B", 200))
    assert first.id != second.id
    assert {t.id for t in store.list()} == {first.id, second.id}


def test_list_orders_by_timestamp_descending(store):
    store.add(_new("REF-OLD", 10))
    store.add(_new("REF-NEW", 30))
    store.add(_new("REF-MID", 20))
    listed = store.list()
    assert [t.merchant_reference for t in listed] == ["REF-NEW", "REF-MID", "REF-OLD"]
    timestamps = [t.timestamp for t in listed]
    assert timestamps == sorted(timestamps, reverse=True)


def test_large_amounts_round_trip(store):
    big = 2**63 - 1
    stored = store.add(_new("REF-BIG", 1, amount=big))
    assert stored.amount == big
    assert store.list()[0].amount == big


def test_data_persists_across_stores(db_url):
    added = TransactionStore(db_url).add(_new("REF-A", 100))
    assert TransactionStore(db_url).list() == [added]


def test_unreachable_database_raises(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'dir' / 'tx.sqlite'}"
    with pytest.raises(OperationalError):
        TransactionStore(url)