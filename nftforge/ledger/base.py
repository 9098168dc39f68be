"""
Attribute Ledger - Interface to the store that persists asset attributes.

The engine never writes attributes itself. It hands each freshly emitted
AttributeSet to a ledger:
- create(): once, when an asset is minted
- update(): once per Update, Evolve or Fuse, fully replacing what the
  ledger held for the asset before

Adapters decide how and where the attributes are kept.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import AttributeSet


@dataclass
class LedgerRecord:
    """What a ledger holds for one asset."""
    asset_id: str
    name: str | None = None
    uri: str | None = None
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def attribute(self, key: str) -> str | None:
        for k, v in self.attributes:
            if k == key:
                return v
        return None


class AttributeLedger(ABC):
    """
    Capability interface for attribute persistence.

    Implementations must treat update() as a full replace, never a merge.
    """

    @abstractmethod
    def create(self, asset_id: str, name: str, uri: str, attributes: AttributeSet) -> None:
        """Register a new asset with its initial attributes."""
        pass

    @abstractmethod
    def update(self, asset_id: str, attributes: AttributeSet) -> None:
        """Replace the stored attributes of an asset."""
        pass

    @abstractmethod
    def get(self, asset_id: str) -> LedgerRecord | None:
        """Current record for an asset, or None if unknown."""
        pass
