"""
In-memory attribute ledger.

Keeps every record in a dict and remembers the most recent calls. This is
what the API service uses by default and what tests inspect.
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass

from .base import AttributeLedger, LedgerRecord

logger = logging.getLogger(__name__)


@dataclass
class LedgerCall:
    """One recorded ledger call."""
    operation: str  # "create" or "update"
    asset_id: str
    attributes: list[tuple[str, str]]


class InMemoryAttributeLedger(AttributeLedger):
    """
    Ledger backed by a dict.

    Usage:
        ledger = InMemoryAttributeLedger()
        ledger.create("asset-1", "Sword", "https://...", attributes)
        ledger.get("asset-1").attribute("level")
    """

    # Most recent calls kept in `calls`; older ones are dropped
    MAX_RECORDED_CALLS = 1000

    def __init__(self, max_calls: int = MAX_RECORDED_CALLS):
        self._records: dict[str, LedgerRecord] = {}
        self.calls: deque[LedgerCall] = deque(maxlen=max_calls)

    def create(self, asset_id, name, uri, attributes) -> None:
        pairs = attributes.as_pairs()
        self._records[asset_id] = LedgerRecord(
            asset_id=asset_id, name=name, uri=uri, attributes=pairs
        )
        self.calls.append(LedgerCall("create", asset_id, pairs))
        logger.debug("ledger create %s (%d attributes)", asset_id, len(pairs))

    def update(self, asset_id, attributes) -> None:
        pairs = attributes.as_pairs()
        record = self._records.get(asset_id)
        if record is None:
            # Fusion results can land on an asset the ledger has not seen yet
            record = LedgerRecord(asset_id=asset_id)
            self._records[asset_id] = record
        record.attributes = pairs
        self.calls.append(LedgerCall("update", asset_id, pairs))
        logger.debug("ledger update %s (%d attributes)", asset_id, len(pairs))

    def get(self, asset_id: str) -> LedgerRecord | None:
        return self._records.get(asset_id)

    def list_assets(self) -> list[str]:
        return list(self._records)
