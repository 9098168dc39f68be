"""
Engine Core - Deterministic progression state and transitions.

The engine is the runtime that:
1. Holds the rarity ladder and achievement tiers
2. Defines the per-asset ProgressionState
3. Validates and applies Mint, Update, Evolve and Fuse
4. Emits a fresh AttributeSet for the ledger on every transition
"""

from .rarity import Rarity, RarityProfile, RARITY_LADDER, fusion_rarity
from .achievement import AchievementTier, classify_level
from .state import ProgressionState, AttributeSet, Attribute, state_key
from .errors import ErrorCode, ProgressionError
from .transitions import Transition, mint, update, evolve, fuse
from .appraisal import Appraisal, appraise
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "Rarity",
    "RarityProfile",
    "RARITY_LADDER",
    "fusion_rarity",
    "AchievementTier",
    "classify_level",
    "ProgressionState",
    "AttributeSet",
    "Attribute",
    "state_key",
    "ErrorCode",
    "ProgressionError",
    "Transition",
    "mint",
    "update",
    "evolve",
    "fuse",
    "Appraisal",
    "appraise",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
]
