"""
Ledger - Where emitted attribute sets are persisted.

The engine depends only on the AttributeLedger interface; the adapters
here are interchangeable.
"""

from .base import AttributeLedger, LedgerRecord
from .memory import InMemoryAttributeLedger, LedgerCall
from .file import JsonFileLedger

__all__ = [
    "AttributeLedger",
    "LedgerRecord",
    "InMemoryAttributeLedger",
    "LedgerCall",
    "JsonFileLedger",
]
