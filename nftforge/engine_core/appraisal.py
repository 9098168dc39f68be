"""
Appraisal - Read-only valuation of a progression record.

Nothing here mutates state or talks to the ledger. The stored
achievement_points field is left alone; the score computed here is a
derived view.
"""

from __future__ import annotations
from dataclasses import dataclass

from .achievement import AchievementTier, classify_level
from .rarity import RARITY_LADDER, Rarity
from .state import ProgressionState
from .transitions import SECONDS_PER_DAY, SECONDS_PER_HOUR, evolution_requirement, hour_of_day

ACHIEVEMENT_POINTS_PER_EVOLUTION = 10


@dataclass
class Appraisal:
    asset_id: str
    bonus_experience: int
    fusion_bonus: int
    achievement_points: int
    total_value: int
    achievement_tier: AchievementTier
    next_rarity: Rarity
    evolution_chance: int
    seconds_until_evolution: int
    hour_of_day: int
    day_of_week: int


def achievement_score(level: int, rarity: Rarity, evolution_count: int) -> int:
    """Level scaled by rarity reward, plus a flat amount per evolution."""
    return (
        level * RARITY_LADDER[rarity].reward_multiplier
        + evolution_count * ACHIEVEMENT_POINTS_PER_EVOLUTION
    )


def appraise(state: ProgressionState, now: int) -> Appraisal:
    profile = RARITY_LADDER[state.rarity]
    bonus_experience = state.level * profile.reward_multiplier
    fusion_bonus = state.fusion_potential * SECONDS_PER_HOUR
    points = achievement_score(state.level, state.rarity, state.evolution_count)
    remaining = evolution_requirement(state) - (now - state.mint_time)
    return Appraisal(
        asset_id=state.asset_id,
        bonus_experience=bonus_experience,
        fusion_bonus=fusion_bonus,
        achievement_points=points,
        total_value=bonus_experience + fusion_bonus + points,
        achievement_tier=classify_level(state.level),
        next_rarity=profile.next_tier,
        evolution_chance=profile.evolution_chance,
        seconds_until_evolution=max(0, remaining),
        hour_of_day=hour_of_day(now),
        day_of_week=(now // SECONDS_PER_DAY) % 7,
    )
