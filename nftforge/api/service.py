"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to registry actions
2. Supplies the current time when a request does not carry one
3. Maps engine failures to structured error responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Union
import time
import uuid

from .schemas import (
    # Requests
    MintRequest,
    UpdateRequest,
    EvolveRequest,
    FuseRequest,
    # Responses
    TransitionResponse,
    AssetListResponse,
    LedgerRecordResponse,
    AppraisalResponse,
    RarityLadderResponse,
    ErrorResponse,
    # Shared
    AssetState,
    AttributeInfo,
    RarityInfo,
    # Enums
    ActionName,
    ErrorCode,
)
from ..engine_core.action import ActionResult
from ..engine_core.errors import ErrorCode as EngineErrorCode
from ..engine_core.rarity import RARITY_LADDER
from ..engine_core.state import ProgressionState
from ..registry import AssetRegistry


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def error_code_for(code: str | None) -> ErrorCode:
    """Map an ActionResult error code onto the API ErrorCode enum."""
    if code is None:
        return ErrorCode.INTERNAL_ERROR
    if code in ErrorCode.__members__:
        return ErrorCode[code]
    try:
        return ErrorCode[EngineErrorCode(code).name]
    except (ValueError, KeyError):
        return ErrorCode.INTERNAL_ERROR


def asset_state(state: ProgressionState) -> AssetState:
    return AssetState(
        asset_id=state.asset_id,
        storage_key=state.key,
        level=state.level,
        rarity=state.rarity.value,
        mint_time=state.mint_time,
        last_update_time=state.last_update_time,
        evolution_count=state.evolution_count,
        fusion_potential=state.fusion_potential,
        achievement_points=state.achievement_points,
    )


Response = Union[TransitionResponse, ErrorResponse]


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Mint
        response = service.mint(MintRequest(name="Sword", uri="https://..."))

        # Evolve later
        response = service.evolve(response.asset_id, EvolveRequest())
    """
    registry: AssetRegistry = field(default_factory=AssetRegistry)
    clock: Callable[[], int] = system_clock

    def mint(self, request: MintRequest) -> Response:
        """Mint a new asset."""
        asset_id = request.asset_id or str(uuid.uuid4())
        now = self._now(request.timestamp)
        result = self.registry.mint(
            asset_id=asset_id,
            name=request.name,
            uri=request.uri,
            level=request.level,
            rarity=request.rarity.value,
            fusion_potential=request.fusion_potential,
            now=now,
        )
        return self._transition_response(ActionName.MINT, asset_id, result, now)

    def update(self, asset_id: str, request: UpdateRequest) -> Response:
        """Raise an asset's level, optionally replacing its rarity."""
        now = self._now(request.timestamp)
        result = self.registry.update(
            asset_id=asset_id,
            new_level=request.new_level,
            min_time_elapsed=request.min_time_elapsed,
            now=now,
            new_rarity=request.new_rarity.value if request.new_rarity else None,
        )
        return self._transition_response(ActionName.UPDATE, asset_id, result, now)

    def evolve(self, asset_id: str, request: EvolveRequest | None = None) -> Response:
        """Evolve an asset one tier."""
        now = self._now(request.timestamp if request else None)
        result = self.registry.evolve(asset_id, now)
        return self._transition_response(ActionName.EVOLVE, asset_id, result, now)

    def fuse(self, request: FuseRequest) -> Response:
        """Fuse two assets into a result asset."""
        result_id = request.result_asset_id or str(uuid.uuid4())
        now = self._now(request.timestamp)
        result = self.registry.fuse(
            first_id=request.first_asset_id,
            second_id=request.second_asset_id,
            result_id=result_id,
            fusion_type=request.fusion_type,
            now=now,
        )
        return self._transition_response(ActionName.FUSE, result_id, result, now)

    def get_asset(self, asset_id: str) -> Union[AssetState, ErrorResponse]:
        state = self.registry.get(asset_id)
        if state is None:
            return self._not_found(asset_id)
        return asset_state(state)

    def get_attributes(self, asset_id: str) -> Union[LedgerRecordResponse, ErrorResponse]:
        record = self.registry.ledger.get(asset_id)
        if record is None:
            return self._not_found(asset_id)
        return LedgerRecordResponse(
            asset_id=record.asset_id,
            name=record.name,
            uri=record.uri,
            attributes=[AttributeInfo(key=k, value=v) for k, v in record.attributes],
        )

    def appraise(self, asset_id: str, timestamp: int | None = None) -> Union[AppraisalResponse, ErrorResponse]:
        now = self._now(timestamp)
        appraisal = self.registry.appraise(asset_id, now)
        if appraisal is None:
            return self._not_found(asset_id)
        return AppraisalResponse(
            asset_id=appraisal.asset_id,
            bonus_experience=appraisal.bonus_experience,
            fusion_bonus=appraisal.fusion_bonus,
            achievement_points=appraisal.achievement_points,
            total_value=appraisal.total_value,
            achievement_tier=appraisal.achievement_tier.value,
            next_rarity=appraisal.next_rarity.value,
            evolution_chance=appraisal.evolution_chance,
            seconds_until_evolution=appraisal.seconds_until_evolution,
            hour_of_day=appraisal.hour_of_day,
            day_of_week=appraisal.day_of_week,
            timestamp=now,
        )

    def list_assets(self) -> AssetListResponse:
        assets = self.registry.list_assets()
        return AssetListResponse(assets=assets, count=len(assets))

    def rarity_ladder(self) -> RarityLadderResponse:
        return RarityLadderResponse(
            tiers=[
                RarityInfo(
                    rarity=profile.rarity.value,
                    rank=profile.rarity.rank,
                    cooldown_multiplier=profile.cooldown_multiplier,
                    reward_multiplier=profile.reward_multiplier,
                    evolution_chance=profile.evolution_chance,
                    next_tier=profile.next_tier.value,
                )
                for profile in RARITY_LADDER.values()
            ]
        )

    def _now(self, timestamp: int | None) -> int:
        return timestamp if timestamp is not None else self.clock()

    def _transition_response(
        self,
        action: ActionName,
        asset_id: str,
        result: ActionResult,
        now: int,
    ) -> Response:
        if not result.success:
            return ErrorResponse(
                error=result.error or "Transition failed",
                error_code=error_code_for(result.error_code),
                details={"asset_id": asset_id, "action": action.value, "timestamp": now},
            )
        return TransitionResponse(
            action=action,
            asset_id=result.new_state.asset_id,
            created=result.created,
            state=asset_state(result.new_state),
            attributes=[AttributeInfo(key=a.key, value=a.value) for a in result.attributes],
            changes=result.state_changes,
            timestamp=now,
        )

    def _not_found(self, asset_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Asset {asset_id} not found",
            error_code=ErrorCode.ASSET_NOT_FOUND,
            details={"asset_id": asset_id},
        )
