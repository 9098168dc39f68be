"""
Action System - Actions, payloads, and results.

Actions represent the four progression transitions:
1. Mint a new asset
2. Update its level (and optionally rarity)
3. Evolve it a tier
4. Fuse two assets into a third

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    MINT = "mint"
    UPDATE = "update"
    EVOLVE = "evolve"
    FUSE = "fuse"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    # Target asset (minted, updated, evolved, or fusion result)
    asset_id: str | None = None

    # Mint
    name: str | None = None
    uri: str | None = None
    level: int | None = None
    rarity: str | None = None
    fusion_potential: int = 0

    # Update
    min_time_elapsed: int = 0

    # Fuse
    source_ids: tuple[str, str] | None = None
    fusion_type: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to progression state.

    Actions are:
    - Timestamped by the caller (the engine never reads a clock)
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload
    timestamp: int = 0

    @classmethod
    def mint(
        cls,
        asset_id: str,
        name: str,
        uri: str,
        level: int,
        rarity: str,
        fusion_potential: int,
        timestamp: int,
    ) -> Action:
        """Factory for mint action."""
        return cls(
            action_type=ActionType.MINT,
            payload=ActionPayload(
                asset_id=asset_id,
                name=name,
                uri=uri,
                level=level,
                rarity=rarity,
                fusion_potential=fusion_potential,
            ),
            timestamp=timestamp,
        )

    @classmethod
    def update(
        cls,
        asset_id: str,
        new_level: int,
        min_time_elapsed: int,
        timestamp: int,
        new_rarity: str | None = None,
    ) -> Action:
        """Factory for update action."""
        return cls(
            action_type=ActionType.UPDATE,
            payload=ActionPayload(
                asset_id=asset_id,
                level=new_level,
                rarity=new_rarity,
                min_time_elapsed=min_time_elapsed,
            ),
            timestamp=timestamp,
        )

    @classmethod
    def evolve(cls, asset_id: str, timestamp: int) -> Action:
        """Factory for evolve action."""
        return cls(
            action_type=ActionType.EVOLVE,
            payload=ActionPayload(asset_id=asset_id),
            timestamp=timestamp,
        )

    @classmethod
    def fuse(
        cls,
        first_id: str,
        second_id: str,
        result_id: str,
        fusion_type: str,
        timestamp: int,
    ) -> Action:
        """Factory for fuse action."""
        return cls(
            action_type=ActionType.FUSE,
            payload=ActionPayload(
                asset_id=result_id,
                source_ids=(first_id, second_id),
                fusion_type=fusion_type,
            ),
            timestamp=timestamp,
        )

    @property
    def asset_ids(self) -> list[str]:
        """Every asset the action reads or writes."""
        ids = list(self.payload.source_ids or ())
        if self.payload.asset_id and self.payload.asset_id not in ids:
            ids.append(self.payload.asset_id)
        return ids


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state and attribute set (if succeeded)
    - Error (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: Any | None = None  # ProgressionState
    attributes: Any | None = None  # AttributeSet
    created: bool = False  # True when new_state is a record that did not exist before
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        attributes: Any,
        changes: list[str] | None = None,
        created: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            attributes=attributes,
            created=created,
            state_changes=changes or [],
        )
