"""
Progression Errors - Validation failures raised by the transition engine.

Every error is detected before any state is touched, so a raised error
always means "nothing happened". The engine never retries; the caller
decides whether to resubmit later or with different parameters.

Actively raised:
- UpdateTooSoon
- InvalidLevelProgression
- EvolutionNotReady
- EvolutionFailed
- CannotFuseSameNFT

Reserved (declared for future rules, never raised today):
- FusionRequirementsNotMet
- InvalidRarity
- InsufficientAchievementPoints
- TimeLockedFeature
- FusionPotentialExhausted
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable progression error codes."""
    UPDATE_TOO_SOON = "UpdateTooSoon"
    INVALID_LEVEL_PROGRESSION = "InvalidLevelProgression"
    EVOLUTION_NOT_READY = "EvolutionNotReady"
    EVOLUTION_FAILED = "EvolutionFailed"
    CANNOT_FUSE_SAME_NFT = "CannotFuseSameNFT"
    FUSION_REQUIREMENTS_NOT_MET = "FusionRequirementsNotMet"
    INVALID_RARITY = "InvalidRarity"
    INSUFFICIENT_ACHIEVEMENT_POINTS = "InsufficientAchievementPoints"
    TIME_LOCKED_FEATURE = "TimeLockedFeature"
    FUSION_POTENTIAL_EXHAUSTED = "FusionPotentialExhausted"


class ProgressionError(Exception):
    """Base class for transition precondition failures."""
    code: ErrorCode
    default_message: str = "Progression rule violated"

    def __init__(self, message: str | None = None, **details):
        self.details = details
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UpdateTooSoon(ProgressionError):
    code = ErrorCode.UPDATE_TOO_SOON
    default_message = "Cannot update metadata too soon"


class InvalidLevelProgression(ProgressionError):
    code = ErrorCode.INVALID_LEVEL_PROGRESSION
    default_message = "Level progression must be forward-only"


class EvolutionNotReady(ProgressionError):
    code = ErrorCode.EVOLUTION_NOT_READY
    default_message = "NFT is not ready for evolution yet"


class EvolutionFailed(ProgressionError):
    code = ErrorCode.EVOLUTION_FAILED
    default_message = "Evolution attempt failed"


class CannotFuseSameNFT(ProgressionError):
    code = ErrorCode.CANNOT_FUSE_SAME_NFT
    default_message = "Cannot fuse an NFT with itself"


class FusionRequirementsNotMet(ProgressionError):
    code = ErrorCode.FUSION_REQUIREMENTS_NOT_MET
    default_message = "Fusion requirements not met"


class InvalidRarity(ProgressionError):
    code = ErrorCode.INVALID_RARITY
    default_message = "Invalid rarity"


class InsufficientAchievementPoints(ProgressionError):
    code = ErrorCode.INSUFFICIENT_ACHIEVEMENT_POINTS
    default_message = "Insufficient achievement points"


class TimeLockedFeature(ProgressionError):
    code = ErrorCode.TIME_LOCKED_FEATURE
    default_message = "Feature is time-locked"


class FusionPotentialExhausted(ProgressionError):
    code = ErrorCode.FUSION_POTENTIAL_EXHAUSTED
    default_message = "Fusion potential exhausted"

