"""Persistent storage of payment transactions."""

from __future__ import annotations

import dataclasses

from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    insert,
    select,
)

from .models import NewTransaction, Transaction

_metadata = MetaData()

transactions_table = Table(
    "transactions",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("merchant_reference", String, nullable=False),
    Column("amount", BigInteger, nullable=False),
    Column("customer_id", String, nullable=False),
    Column("basket_id", String, nullable=False),
    Column("status", String, nullable=False),
    Column("timestamp", BigInteger, nullable=False),
)


class TransactionStore:
    """Transactions kept in an SQL database reachable through ``url``."""

    def __init__(self, url: str) -> None:
        self._engine = create_engine(url)
        _metadata.create_all(self._engine)

    def list(self) -> list[Transaction]:
        """Return every transaction, newest timestamp first."""
        table = transactions_table
        query = select(table).order_by(table.c.timestamp.desc())
        with self._engine.connect() as conn:
            return [Transaction(**row) for row in conn.execute(query).mappings()]

    def add(self, new: NewTransaction) -> Transaction:
        """Store ``new`` and return it with the id the database assigned."""
        table = transactions_table
        with self._engine.begin() as conn:
            result = conn.execute(insert(table).values(**dataclasses.asdict(new)))
            (new_id,) = result.inserted_primary_key
            row = conn.execute(select(table).where(table.c.id == new_id)).mappings().one()
        return Transaction(**row)