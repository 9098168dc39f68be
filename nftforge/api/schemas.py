"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between API clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- UPDATE_TOO_SOON: Update issued before the rarity-scaled cooldown elapsed
- INVALID_LEVEL_PROGRESSION: New level is not above the current level
- EVOLUTION_NOT_READY: Not enough time since mint to evolve
- EVOLUTION_FAILED: Evolution roll above the tier's success chance
- CANNOT_FUSE_SAME_NFT: Both fusion sources are the same asset
- ASSET_NOT_FOUND: No progression record for the asset
- ASSET_EXISTS: Mint targeted an asset that already has a record
- VALIDATION_ERROR: Request failed type validation (e.g. unknown rarity)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class RarityName(str, Enum):
    """Rarity tiers, in ladder order."""
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"
    MYTHIC = "Mythic"
    DIVINE = "Divine"


class ActionName(str, Enum):
    """Transition that produced a response."""
    MINT = "mint"
    UPDATE = "update"
    EVOLVE = "evolve"
    FUSE = "fuse"


class ErrorCode(str, Enum):
    """Structured error codes."""
    UPDATE_TOO_SOON = "UPDATE_TOO_SOON"
    INVALID_LEVEL_PROGRESSION = "INVALID_LEVEL_PROGRESSION"
    EVOLUTION_NOT_READY = "EVOLUTION_NOT_READY"
    EVOLUTION_FAILED = "EVOLUTION_FAILED"
    CANNOT_FUSE_SAME_NFT = "CANNOT_FUSE_SAME_NFT"
    FUSION_REQUIREMENTS_NOT_MET = "FUSION_REQUIREMENTS_NOT_MET"
    INVALID_RARITY = "INVALID_RARITY"
    INSUFFICIENT_ACHIEVEMENT_POINTS = "INSUFFICIENT_ACHIEVEMENT_POINTS"
    TIME_LOCKED_FEATURE = "TIME_LOCKED_FEATURE"
    FUSION_POTENTIAL_EXHAUSTED = "FUSION_POTENTIAL_EXHAUSTED"
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    ASSET_EXISTS = "ASSET_EXISTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class AttributeInfo(BaseModel):
    """A single ledger attribute."""
    key: str
    value: str


class AssetState(BaseModel):
    """Progression record of one asset."""
    asset_id: str
    storage_key: str = Field(description="Deterministic key the record is stored under")
    level: int
    rarity: RarityName
    mint_time: int
    last_update_time: int
    evolution_count: int
    fusion_potential: int
    achievement_points: int = Field(0, description="Reserved; no transition changes it")

    model_config = {"from_attributes": True}


class RarityInfo(BaseModel):
    """One rung of the rarity ladder."""
    rarity: RarityName
    rank: int
    cooldown_multiplier: int
    reward_multiplier: int
    evolution_chance: int = Field(description="Evolution success chance, percent")
    next_tier: RarityName


# =============================================================================
# Request Models
# =============================================================================

class MintRequest(BaseModel):
    """Request to mint a new asset."""
    asset_id: Optional[str] = Field(None, description="Asset identifier; generated if omitted")
    name: str = Field(..., description="Display name")
    uri: str = Field(..., description="Metadata resource locator")
    level: int = Field(1, ge=0, description="Initial level")
    rarity: RarityName = Field(RarityName.COMMON, description="Requested rarity")
    fusion_potential: int = Field(0, ge=0)
    timestamp: Optional[int] = Field(None, ge=0, description="Unix seconds; defaults to now")


class UpdateRequest(BaseModel):
    """Request to raise an asset's level."""
    new_level: int = Field(..., ge=0)
    min_time_elapsed: int = Field(0, description="Base cooldown in seconds, scaled by rarity")
    new_rarity: Optional[RarityName] = Field(
        None, description="Replaces rarity as-is; not checked against the ladder"
    )
    timestamp: Optional[int] = Field(None, ge=0)


class EvolveRequest(BaseModel):
    """Request to evolve an asset."""
    timestamp: Optional[int] = Field(None, ge=0)


class FuseRequest(BaseModel):
    """Request to fuse two assets into a result asset."""
    first_asset_id: str
    second_asset_id: str
    result_asset_id: Optional[str] = Field(None, description="Target asset; generated if omitted")
    fusion_type: str = Field("Power", description="Power, Speed, Magic, Legendary; others x1")
    timestamp: Optional[int] = Field(None, ge=0)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class TransitionResponse(BaseModel):
    """Outcome of a committed transition."""
    success: bool = True
    action: ActionName
    asset_id: str
    created: bool = Field(False, description="Whether a new record was created")
    state: AssetState
    attributes: list[AttributeInfo] = Field(
        default_factory=list, description="Attribute set handed to the ledger"
    )
    changes: list[str] = Field(default_factory=list)
    timestamp: int
    api_version: str = "v1"


class AssetListResponse(BaseModel):
    """Response listing known assets."""
    assets: list[str]
    count: int


class LedgerRecordResponse(BaseModel):
    """What the attribute ledger currently holds for an asset."""
    asset_id: str
    name: Optional[str] = None
    uri: Optional[str] = None
    attributes: list[AttributeInfo] = Field(default_factory=list)
    api_version: str = "v1"


class AppraisalResponse(BaseModel):
    """Read-only valuation of an asset."""
    asset_id: str
    bonus_experience: int
    fusion_bonus: int
    achievement_points: int
    total_value: int
    achievement_tier: str
    next_rarity: RarityName
    evolution_chance: int
    seconds_until_evolution: int
    hour_of_day: int
    day_of_week: int
    timestamp: int
    api_version: str = "v1"


class RarityLadderResponse(BaseModel):
    """The full rarity ladder."""
    tiers: list[RarityInfo]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
