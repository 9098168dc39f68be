"""
Progression State - The per-asset record the engine operates on.

Design principles:
- Immutable-friendly: transitions return a new record, never edit in place
- Serializable: to_dict/from_dict for stores and the API
- Addressable: every record is keyed by a deterministic storage key
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator

from .rarity import Rarity

STATE_NAMESPACE = "nft_state"


def state_key(asset_id: str) -> str:
    """Storage key for an asset's progression record."""
    return f"{STATE_NAMESPACE}:{asset_id}"


@dataclass(frozen=True)
class Attribute:
    """A single key/value pair as the ledger stores it."""
    key: str
    value: str


@dataclass
class AttributeSet:
    """
    Ordered key/value description of an asset's current derived state.

    Produced fresh by every transition. It fully replaces whatever the
    ledger stored for the asset before; sets are never merged.
    """
    attributes: list[Attribute] = field(default_factory=list)

    @classmethod
    def of(cls, *pairs: tuple[str, Any]) -> AttributeSet:
        """Build a set from (key, value) pairs, stringifying values."""
        return cls(attributes=[Attribute(key, _stringify(value)) for key, value in pairs])

    def add(self, key: str, value: Any) -> AttributeSet:
        """Return new set with a pair appended."""
        return AttributeSet(attributes=self.attributes + [Attribute(key, _stringify(value))])

    def get(self, key: str) -> str | None:
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None

    def keys(self) -> list[str]:
        return [a.key for a in self.attributes]

    def as_pairs(self) -> list[tuple[str, str]]:
        return [(a.key, a.value) for a in self.attributes]

    def as_dict(self) -> dict[str, str]:
        return dict(self.as_pairs())

    def __contains__(self, key: str) -> bool:
        return any(a.key == key for a in self.attributes)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass
class ProgressionState:
    """
    Progression record for one asset.

    Invariants:
    - level never decreases across transitions
    - last_update_time >= mint_time
    - mint_time and asset_id never change once set
    - achievement_points is reserved; no transition changes it
    """
    asset_id: str
    level: int = 0
    rarity: Rarity = Rarity.COMMON
    mint_time: int = 0
    last_update_time: int = 0
    evolution_count: int = 0
    fusion_potential: int = 0
    achievement_points: int = 0

    @property
    def key(self) -> str:
        return state_key(self.asset_id)

    def with_changes(self, **kwargs) -> ProgressionState:
        """Return a copy with some fields replaced."""
        return replace(self, **kwargs)

    def clone(self) -> ProgressionState:
        return replace(self)

    def validate(self) -> list[str]:
        """
        Check record invariants.

        Returns a list of violations, empty if the record is consistent.
        """
        errors: list[str] = []
        if not self.asset_id:
            errors.append("asset_id is required")
        for name in ("level", "evolution_count", "fusion_potential", "achievement_points"):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be >= 0")
        if self.last_update_time < self.mint_time:
            errors.append("last_update_time must be >= mint_time")
        return errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "level": self.level,
            "rarity": self.rarity.value,
            "mint_time": self.mint_time,
            "last_update_time": self.last_update_time,
            "evolution_count": self.evolution_count,
            "fusion_potential": self.fusion_potential,
            "achievement_points": self.achievement_points,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressionState:
        return cls(
            asset_id=data["asset_id"],
            level=int(data.get("level", 0)),
            rarity=Rarity.parse(data.get("rarity", Rarity.COMMON.value)),
            mint_time=int(data.get("mint_time", 0)),
            last_update_time=int(data.get("last_update_time", 0)),
            evolution_count=int(data.get("evolution_count", 0)),
            fusion_potential=int(data.get("fusion_potential", 0)),
            achievement_points=int(data.get("achievement_points", 0)),
        )
