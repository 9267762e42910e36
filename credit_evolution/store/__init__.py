"""In-memory data stores."""

from credit_evolution.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
