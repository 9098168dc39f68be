"""
Registry - Host-side ownership of progression records.

The engine core holds no state of its own; the registry keeps the records,
serializes writers and talks to the attribute ledger.
"""

from .manager import AssetRegistry

__all__ = [
    "AssetRegistry",
]
