"""
Asset Registry - The system of record for progression state.

LIFECYCLE:
1. Caller submits an action (mint, update, evolve, fuse) with a timestamp
2. Registry takes its writer lock, so transitions never interleave
3. Registry gathers every record the action touches
4. Reducer validates and computes (new state, attribute set)
5. On success:
   - attribute set goes to the ledger (create on mint, update otherwise)
   - new state replaces the old one under its storage key
6. On failure nothing is written: no ledger call, no state change

PERSISTENCE RULES:
- States live in memory, keyed by state_key(asset_id)
- Optionally mirrored to a JSON file after each committed transition
- Records are never deleted here
"""

from __future__ import annotations
import json
import logging
import threading
from pathlib import Path

from ..engine_core.action import Action, ActionResult, ActionType
from ..engine_core.appraisal import Appraisal, appraise
from ..engine_core.reducer import Reducer
from ..engine_core.state import ProgressionState, state_key
from ..ledger import AttributeLedger, InMemoryAttributeLedger

logger = logging.getLogger(__name__)


class AssetRegistry:
    """
    Holds progression records and serializes every read and write.

    Responsibilities:
    - Look up records by asset id
    - Run actions through the reducer under a single writer lock
    - Forward emitted attributes to the ledger
    - Commit new records only after the ledger accepted them
    """

    def __init__(
        self,
        ledger: AttributeLedger | None = None,
        state_path: str | Path | None = None,
    ):
        self.ledger = ledger if ledger is not None else InMemoryAttributeLedger()
        self.state_path = Path(state_path).expanduser() if state_path else None
        self._states: dict[str, ProgressionState] = {}
        self._lock = threading.RLock()
        self._reducer = Reducer()
        if self.state_path:
            self._load()

    def get(self, asset_id: str) -> ProgressionState | None:
        """Get a copy of an asset's record."""
        with self._lock:
            state = self._states.get(state_key(asset_id))
            return state.clone() if state else None

    def list_assets(self) -> list[str]:
        """List asset ids with a progression record."""
        with self._lock:
            states = list(self._states.values())
        return [state.asset_id for state in states]

    def __contains__(self, asset_id: str) -> bool:
        with self._lock:
            return state_key(asset_id) in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def apply(self, action: Action) -> ActionResult:
        """
        Apply an action and commit its outcome.

        The whole read-validate-write sequence holds the registry lock, so
        all records the action touches are exclusively held for its duration.
        """
        with self._lock:
            states = {}
            for asset_id in action.asset_ids:
                state = self._states.get(state_key(asset_id))
                if state is not None:
                    states[asset_id] = state

            result = self._reducer.apply(states, action)
            if not result.success:
                logger.warning(
                    "%s rejected for %s: %s (%s)",
                    action.action_type.value,
                    action.payload.asset_id,
                    result.error_code,
                    result.error,
                )
                return result

            new_state: ProgressionState = result.new_state
            if action.action_type == ActionType.MINT:
                self.ledger.create(
                    new_state.asset_id,
                    action.payload.name or "",
                    action.payload.uri or "",
                    result.attributes,
                )
            else:
                self.ledger.update(new_state.asset_id, result.attributes)

            self._states[new_state.key] = new_state
            if self.state_path:
                self._save()

            logger.info(
                "%s committed for %s at %d: %s",
                action.action_type.value,
                new_state.asset_id,
                action.timestamp,
                "; ".join(result.state_changes),
            )
            return result

    def mint(
        self,
        asset_id: str,
        name: str,
        uri: str,
        level: int,
        rarity: str,
        fusion_potential: int,
        now: int,
    ) -> ActionResult:
        return self.apply(Action.mint(asset_id, name, uri, level, rarity, fusion_potential, now))

    def update(
        self,
        asset_id: str,
        new_level: int,
        min_time_elapsed: int,
        now: int,
        new_rarity: str | None = None,
    ) -> ActionResult:
        return self.apply(Action.update(asset_id, new_level, min_time_elapsed, now, new_rarity))

    def evolve(self, asset_id: str, now: int) -> ActionResult:
        return self.apply(Action.evolve(asset_id, now))

    def fuse(
        self,
        first_id: str,
        second_id: str,
        result_id: str,
        fusion_type: str,
        now: int,
    ) -> ActionResult:
        return self.apply(Action.fuse(first_id, second_id, result_id, fusion_type, now))

    def appraise(self, asset_id: str, now: int) -> Appraisal | None:
        with self._lock:
            state = self._states.get(state_key(asset_id))
        return appraise(state, now) if state else None

    def _load(self):
        if not self.state_path.exists():
            return
        with open(self.state_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        for key, entry in data.items():
            state = ProgressionState.from_dict(entry)
            if key != state.key:
                raise ValueError(f"Stored key {key!r} does not match record {state.key!r}")
            violations = state.validate()
            if violations:
                raise ValueError(f"Invalid record {key!r}: {'; '.join(violations)}")
            self._states[key] = state
        logger.debug("loaded %d progression records from %s", len(self._states), self.state_path)

    def _save(self):
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: state.to_dict() for key, state in self._states.items()}
        with open(self.state_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
