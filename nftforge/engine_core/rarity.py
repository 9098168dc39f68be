"""
Rarity Ladder - Ordered rarity tiers and the tables keyed by tier.

The ladder is a total order:
    Common < Uncommon < Rare < Epic < Legendary < Mythic < Divine

Each tier carries:
- cooldown multiplier (scales the Update cooldown)
- reward multiplier (scales bonus experience)
- evolution chance (percentage gate for Evolve)
- next tier (where Evolve moves it; Divine is the ceiling)

Pure lookup, no state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Rarity(Enum):
    """Rarity tiers, declared in ladder order."""
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"
    MYTHIC = "Mythic"
    DIVINE = "Divine"

    @classmethod
    def parse(cls, label: str | Rarity) -> Rarity:
        """
        Parse a display label ("Rare") into a Rarity.

        Raises ValueError for labels that are not on the ladder.
        """
        if isinstance(label, Rarity):
            return label
        try:
            return cls(label)
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown rarity {label!r} (expected one of: {valid})") from None

    @property
    def rank(self) -> int:
        """Position on the ladder, Common = 0."""
        return _ORDER.index(self)

    @property
    def profile(self) -> RarityProfile:
        return RARITY_LADDER[self]

    @property
    def next_tier(self) -> Rarity:
        return RARITY_LADDER[self].next_tier

    def __lt__(self, other):
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = list(Rarity)


@dataclass(frozen=True)
class RarityProfile:
    """Per-tier behavioral multipliers."""
    rarity: Rarity
    cooldown_multiplier: int
    reward_multiplier: int
    evolution_chance: int  # percent, 0-100
    next_tier: Rarity


RARITY_LADDER: dict[Rarity, RarityProfile] = {
    Rarity.COMMON: RarityProfile(Rarity.COMMON, 1, 1, 100, Rarity.UNCOMMON),
    Rarity.UNCOMMON: RarityProfile(Rarity.UNCOMMON, 2, 2, 85, Rarity.RARE),
    Rarity.RARE: RarityProfile(Rarity.RARE, 3, 3, 70, Rarity.EPIC),
    Rarity.EPIC: RarityProfile(Rarity.EPIC, 4, 4, 50, Rarity.LEGENDARY),
    Rarity.LEGENDARY: RarityProfile(Rarity.LEGENDARY, 5, 5, 25, Rarity.MYTHIC),
    Rarity.MYTHIC: RarityProfile(Rarity.MYTHIC, 6, 6, 10, Rarity.DIVINE),
    Rarity.DIVINE: RarityProfile(Rarity.DIVINE, 7, 7, 5, Rarity.DIVINE),
}


def cooldown_multiplier(rarity: Rarity) -> int:
    return RARITY_LADDER[rarity].cooldown_multiplier


def reward_multiplier(rarity: Rarity) -> int:
    return RARITY_LADDER[rarity].reward_multiplier


def evolution_chance(rarity: Rarity) -> int:
    return RARITY_LADDER[rarity].evolution_chance


def next_tier(rarity: Rarity) -> Rarity:
    return RARITY_LADDER[rarity].next_tier


# Fusion outcome by source pair. Unlisted pairs fall back to Rare.
_FUSION_RESULTS: dict[frozenset[Rarity], Rarity] = {
    frozenset({Rarity.LEGENDARY}): Rarity.DIVINE,
    frozenset({Rarity.EPIC}): Rarity.LEGENDARY,
    frozenset({Rarity.RARE}): Rarity.EPIC,
}


def fusion_rarity(a: Rarity, b: Rarity) -> Rarity:
    """
    Rarity of a fusion result.

    Only matched Rare, Epic and Legendary pairs step up; every other
    pairing (mismatched tiers, Common/Uncommon pairs, Mythic/Divine pairs)
    yields Rare.
    """
    return _FUSION_RESULTS.get(frozenset({a, b}), Rarity.RARE)
