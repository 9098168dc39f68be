"""
JSON File Ledger - Attribute ledger kept in a single JSON file.

The file:
- Maps asset_id -> {name, uri, attributes}
- Is rewritten in full after each create/update
- Is created on first write; a missing file is an empty ledger
"""

from __future__ import annotations
import json
import logging
from pathlib import Path

from .base import LedgerRecord
from .memory import InMemoryAttributeLedger

logger = logging.getLogger(__name__)


class JsonFileLedger(InMemoryAttributeLedger):
    """
    File-backed ledger for the CLI.

    Usage:
        ledger = JsonFileLedger("~/.nftforge/ledger.json")
        ledger.update("asset-1", attributes)
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path).expanduser()
        self._load()

    def create(self, asset_id, name, uri, attributes) -> None:
        super().create(asset_id, name, uri, attributes)
        self._save()

    def update(self, asset_id, attributes) -> None:
        super().update(asset_id, attributes)
        self._save()

    def _load(self):
        if not self.path.exists():
            return
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        for asset_id, entry in data.items():
            self._records[asset_id] = LedgerRecord(
                asset_id=asset_id,
                name=entry.get("name"),
                uri=entry.get("uri"),
                attributes=[(k, v) for k, v in entry.get("attributes", [])],
            )
        logger.debug("loaded %d ledger records from %s", len(self._records), self.path)

    def _save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            asset_id: {
                "name": record.name,
                "uri": record.uri,
                "attributes": [[k, v] for k, v in record.attributes],
            }
            for asset_id, record in self._records.items()
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
