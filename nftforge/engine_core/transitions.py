"""
Transition Engine - Mint, Update, Evolve and Fuse.

Each transition is a pure function:
    (current state(s), parameters, now) -> Transition(new state, attributes)

Preconditions are checked first and raise a ProgressionError; the inputs
are never modified, so a failed transition leaves nothing behind.

Time is always supplied by the caller as integer unix seconds. The
evolution gate (`now % 100`) is deterministic and NOT a secure random
source; it exists so outcomes are reproducible for a given timestamp.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .achievement import AchievementTier, classify_level
from .errors import (
    CannotFuseSameNFT,
    EvolutionFailed,
    EvolutionNotReady,
    InvalidLevelProgression,
    UpdateTooSoon,
)
from .rarity import Rarity, fusion_rarity
from .state import AttributeSet, ProgressionState

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# Hours of the (UTC) day at which minting is promoted to Legendary
GOLDEN_HOURS = frozenset({0, 12})

FUSION_BONUS_PER_POINT = 10

FUSION_MULTIPLIERS: dict[str, int] = {
    "Power": 2,
    "Speed": 3,
    "Magic": 4,
    "Legendary": 5,
}
DEFAULT_FUSION_MULTIPLIER = 1


@dataclass
class Transition:
    """Outcome of a successful transition."""
    state: ProgressionState
    attributes: AttributeSet
    changes: list[str] = field(default_factory=list)


def hour_of_day(now: int) -> int:
    return (now // SECONDS_PER_HOUR) % 24


def fusion_multiplier(fusion_type: str) -> int:
    """Level multiplier for a fusion type; unknown types silently use 1."""
    return FUSION_MULTIPLIERS.get(fusion_type, DEFAULT_FUSION_MULTIPLIER)


def evolution_requirement(state: ProgressionState) -> int:
    """
    Seconds since mint required before the asset may evolve.

    One day per current level, minus one hour per fusion-potential point.
    The result is not clamped and can be negative.
    """
    base_required = state.level * SECONDS_PER_DAY
    fusion_discount = state.fusion_potential * SECONDS_PER_HOUR
    return base_required - fusion_discount


def mint(
    asset_id: str,
    level: int,
    rarity: Rarity | str,
    fusion_potential: int,
    now: int,
) -> Transition:
    """
    Create the progression record for a new asset.

    Minting during a golden hour forces Legendary regardless of the
    requested rarity. The stored record carries the effective rarity.
    """
    requested = Rarity.parse(rarity)
    hour = hour_of_day(now)
    effective = Rarity.LEGENDARY if hour in GOLDEN_HOURS else requested
    tier: AchievementTier = classify_level(level)
    fusion_bonus = fusion_potential * FUSION_BONUS_PER_POINT

    state = ProgressionState(
        asset_id=asset_id,
        level=level,
        rarity=effective,
        mint_time=now,
        last_update_time=now,
        evolution_count=0,
        fusion_potential=fusion_potential,
        achievement_points=0,
    )
    attributes = AttributeSet.of(
        ("level", level),
        ("rarity", effective),
        ("mint_time", now),
        ("fusion_potential", fusion_potential),
        ("achievement_tier", tier),
        ("fusion_bonus", fusion_bonus),
        ("hour", hour),
    )
    changes = [f"Minted {asset_id} at level {level} as {effective.value}"]
    if effective is not requested:
        changes.append(f"Golden hour {hour}: rarity promoted from {requested.value}")
    return Transition(state=state, attributes=attributes, changes=changes)


def update(
    state: ProgressionState,
    new_level: int,
    min_time_elapsed: int,
    now: int,
    new_rarity: Rarity | str | None = None,
) -> Transition:
    """
    Raise an asset's level after its rarity-scaled cooldown.

    A supplied new_rarity is applied as-is, without checking that it moves
    forward on the ladder.
    """
    profile = state.rarity.profile
    required_cooldown = min_time_elapsed * profile.cooldown_multiplier
    ready_at = state.last_update_time + required_cooldown
    if now < ready_at:
        raise UpdateTooSoon(
            f"Cannot update metadata too soon: ready at {ready_at}, now {now}",
            ready_at=ready_at,
            required_cooldown=required_cooldown,
        )
    if new_level <= state.level:
        raise InvalidLevelProgression(
            f"Level progression must be forward-only: {new_level} <= {state.level}",
            current_level=state.level,
            new_level=new_level,
        )

    rarity = Rarity.parse(new_rarity) if new_rarity is not None else None
    bonus_experience = (new_level - state.level) * profile.reward_multiplier

    changes = {"level": new_level, "last_update_time": now}
    if rarity is not None:
        changes["rarity"] = rarity
    new_state = state.with_changes(**changes)

    attributes = AttributeSet.of(
        ("level", new_level),
        ("last_update_time", now),
        ("bonus_experience", bonus_experience),
        ("cooldown_multiplier", profile.cooldown_multiplier),
    )
    if rarity is not None:
        attributes = attributes.add("rarity", rarity)

    summary = [f"Updated {state.asset_id} to level {new_level} (+{bonus_experience} bonus xp)"]
    if rarity is not None and rarity is not state.rarity:
        summary.append(f"Rarity set from {state.rarity.value} to {rarity.value}")
    return Transition(state=new_state, attributes=attributes, changes=summary)


def evolve(state: ProgressionState, now: int) -> Transition:
    """
    Advance an asset one level and one rarity tier.

    Gated first by time since mint, then by the tier's evolution chance
    against `now % 100`.
    """
    fusion_discount = state.fusion_potential * SECONDS_PER_HOUR
    total_required = evolution_requirement(state)
    elapsed = now - state.mint_time
    if elapsed < total_required:
        raise EvolutionNotReady(
            f"NFT is not ready for evolution yet: {elapsed}s of {total_required}s elapsed",
            elapsed=elapsed,
            required=total_required,
        )

    profile = state.rarity.profile
    roll = now % 100
    if roll > profile.evolution_chance:
        raise EvolutionFailed(
            f"Evolution attempt failed: roll {roll} above {profile.evolution_chance}% chance",
            roll=roll,
            chance=profile.evolution_chance,
        )

    new_level = state.level + 1
    new_rarity = profile.next_tier
    evolution_count = state.evolution_count + 1
    new_state = state.with_changes(
        level=new_level,
        rarity=new_rarity,
        last_update_time=now,
        evolution_count=evolution_count,
    )
    attributes = AttributeSet.of(
        ("level", new_level),
        ("rarity", new_rarity),
        ("evolved_at", now),
        ("evolution_count", evolution_count),
        ("fusion_bonus_used", fusion_discount),
        ("evolution_chance", profile.evolution_chance),
    )
    return Transition(
        state=new_state,
        attributes=attributes,
        changes=[f"{state.asset_id} evolved to level {new_level} with {new_rarity.value} rarity"],
    )


def fuse(
    a: ProgressionState,
    b: ProgressionState,
    fusion_type: str,
    result_asset_id: str,
    now: int,
    existing_result: ProgressionState | None = None,
) -> Transition:
    """
    Merge two asset histories into a result asset.

    The sources are read-only. When the result asset already has a record,
    its mint_time and achievement_points carry over; otherwise a new record
    is minted at `now`.
    """
    if a.asset_id == b.asset_id:
        raise CannotFuseSameNFT(
            f"Cannot fuse an NFT with itself: {a.asset_id}",
            asset_id=a.asset_id,
        )

    multiplier = fusion_multiplier(fusion_type)
    combined_level = (a.level + b.level) * multiplier // 2
    fusion_potential = a.fusion_potential + b.fusion_potential + 1
    rarity = fusion_rarity(a.rarity, b.rarity)
    evolution_count = a.evolution_count + b.evolution_count

    if existing_result is not None:
        base = existing_result
    else:
        base = ProgressionState(asset_id=result_asset_id, mint_time=now)
    new_state = base.with_changes(
        level=combined_level,
        rarity=rarity,
        fusion_potential=fusion_potential,
        last_update_time=now,
        evolution_count=evolution_count,
    )
    attributes = AttributeSet.of(
        ("level", combined_level),
        ("rarity", rarity),
        ("fusion_type", fusion_type),
        ("fusion_potential", fusion_potential),
        ("fused_at", now),
        ("fusion_multiplier", multiplier),
    )
    return Transition(
        state=new_state,
        attributes=attributes,
        changes=[
            f"Fused {a.asset_id} + {b.asset_id} into {result_asset_id} "
            f"({fusion_type} x{multiplier}): level {combined_level}, {rarity.value}"
        ],
    )
