"""
Reducer - Applies actions to progression state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (states, action) -> ActionResult
- Validates before applying
- Returns ActionResult with success/failure
- Delegates the progression rules to the transition engine
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Mapping

from . import transitions
from .action import Action, ActionResult, ActionType
from .errors import CannotFuseSameNFT, ProgressionError
from .state import ProgressionState

ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
ASSET_EXISTS = "ASSET_EXISTS"
VALIDATION_ERROR = "VALIDATION_ERROR"


class AssetNotFound(LookupError):
    """Raised when an action references an asset with no progression record."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset {asset_id} not found")


@dataclass
class Reducer:
    """
    Reducer applies actions to progression state.

    Stateless - the caller owns the records and passes in every state the
    action touches, keyed by asset_id.
    """

    def apply(self, states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
        """
        Apply an action against the given states.

        Returns ActionResult with the new state and attribute set, or an
        error. The input states are never modified.
        """
        validation_error = self._validate_action(action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=VALIDATION_ERROR)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=VALIDATION_ERROR,
            )

        try:
            return handler(states, action)
        except ProgressionError as e:
            return ActionResult.failure(e.message, error_code=e.code.value)
        except AssetNotFound as e:
            return ActionResult.failure(str(e), error_code=ASSET_NOT_FOUND)
        except ValueError as e:
            return ActionResult.failure(str(e), error_code=VALIDATION_ERROR)

    def _validate_action(self, action: Action) -> str | None:
        """
        Check the payload carries what the action type needs.

        Returns error message if invalid, None if valid.
        """
        payload = action.payload
        if not payload.asset_id:
            return "asset_id is required"

        if action.action_type == ActionType.MINT:
            if payload.level is None or payload.level < 0:
                return "level must be a non-negative integer"
            if payload.fusion_potential < 0:
                return "fusion_potential must be a non-negative integer"
            if not payload.rarity:
                return "rarity is required"
        elif action.action_type == ActionType.UPDATE:
            if payload.level is None:
                return "new_level is required"
        elif action.action_type == ActionType.FUSE:
            if not payload.source_ids or len(payload.source_ids) != 2:
                return "fusion requires exactly two source assets"
            if payload.fusion_type is None:
                return "fusion_type is required"
            first_id, second_id = payload.source_ids
            # A same-id pair is left for the handler to reject as CannotFuseSameNFT
            if first_id != second_id and payload.asset_id in payload.source_ids:
                return "fusion result must be a third asset, not one of its sources"

        return None

    def _get_handler(
        self, action_type: ActionType
    ) -> Callable[[Mapping[str, ProgressionState], Action], ActionResult] | None:
        handlers = {
            ActionType.MINT: self._handle_mint,
            ActionType.UPDATE: self._handle_update,
            ActionType.EVOLVE: self._handle_evolve,
            ActionType.FUSE: self._handle_fuse,
        }
        return handlers.get(action_type)

    def _handle_mint(self, states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
        payload = action.payload
        if payload.asset_id in states:
            return ActionResult.failure(
                f"Asset {payload.asset_id} already minted",
                error_code=ASSET_EXISTS,
            )
        result = transitions.mint(
            asset_id=payload.asset_id,
            level=payload.level,
            rarity=payload.rarity,
            fusion_potential=payload.fusion_potential,
            now=action.timestamp,
        )
        return ActionResult.success_with_state(
            result.state, result.attributes, changes=result.changes, created=True
        )

    def _handle_update(self, states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
        payload = action.payload
        state = _require(states, payload.asset_id)
        result = transitions.update(
            state,
            new_level=payload.level,
            min_time_elapsed=payload.min_time_elapsed,
            now=action.timestamp,
            new_rarity=payload.rarity,
        )
        return ActionResult.success_with_state(result.state, result.attributes, changes=result.changes)

    def _handle_evolve(self, states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
        state = _require(states, action.payload.asset_id)
        result = transitions.evolve(state, now=action.timestamp)
        return ActionResult.success_with_state(result.state, result.attributes, changes=result.changes)

    def _handle_fuse(self, states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
        payload = action.payload
        first_id, second_id = payload.source_ids
        if first_id == second_id:
            raise CannotFuseSameNFT(
                f"Cannot fuse an NFT with itself: {first_id}",
                asset_id=first_id,
            )
        first = _require(states, first_id)
        second = _require(states, second_id)
        existing = states.get(payload.asset_id)
        result = transitions.fuse(
            first,
            second,
            fusion_type=payload.fusion_type,
            result_asset_id=payload.asset_id,
            now=action.timestamp,
            existing_result=existing,
        )
        return ActionResult.success_with_state(
            result.state,
            result.attributes,
            changes=result.changes,
            created=existing is None,
        )


def _require(states: Mapping[str, ProgressionState], asset_id: str) -> ProgressionState:
    state = states.get(asset_id)
    if state is None:
        raise AssetNotFound(asset_id)
    return state


def apply_action(states: Mapping[str, ProgressionState], action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(states, action)
