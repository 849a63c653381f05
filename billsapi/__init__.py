"""Bill payment building blocks: DStv calls, billers, a transaction ledger and Flask blueprints."""

__version__ = "0.1.0"