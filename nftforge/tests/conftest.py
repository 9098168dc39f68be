"""
Pytest fixtures for nftforge tests.
"""

import pytest

from ..engine_core.rarity import Rarity
from ..engine_core.state import ProgressionState
from ..ledger import InMemoryAttributeLedger
from ..registry import AssetRegistry
from ..api.service import APIService

# 05:00 UTC on day 0 - outside the golden hours
MINT_TIME = 5 * 3600
DAY = 86400


def make_state(asset_id: str = "asset-1", **overrides) -> ProgressionState:
    """Build a progression record with sensible defaults."""
    fields = {
        "level": 1,
        "rarity": Rarity.COMMON,
        "mint_time": 0,
        "last_update_time": 0,
        "evolution_count": 0,
        "fusion_potential": 0,
        "achievement_points": 0,
    }
    fields.update(overrides)
    return ProgressionState(asset_id=asset_id, **fields)


@pytest.fixture
def rare_state() -> ProgressionState:
    """A level 5 Rare asset minted outside the golden hours."""
    return make_state(
        "rare-1",
        level=5,
        rarity=Rarity.RARE,
        mint_time=MINT_TIME,
        last_update_time=MINT_TIME,
        fusion_potential=2,
    )


@pytest.fixture
def fusion_pair() -> tuple[ProgressionState, ProgressionState]:
    """Two Rare assets ready to fuse."""
    a = make_state("fuse-a", level=10, rarity=Rarity.RARE, fusion_potential=1, evolution_count=2)
    b = make_state("fuse-b", level=20, rarity=Rarity.RARE, fusion_potential=3, evolution_count=1)
    return a, b


@pytest.fixture
def ledger() -> InMemoryAttributeLedger:
    return InMemoryAttributeLedger()


@pytest.fixture
def registry(ledger) -> AssetRegistry:
    """Registry with one Rare asset minted at MINT_TIME."""
    registry = AssetRegistry(ledger=ledger)
    result = registry.mint(
        asset_id="rare-1",
        name="Rare Blade",
        uri="https://example.com/rare-1.json",
        level=5,
        rarity="Rare",
        fusion_potential=2,
        now=MINT_TIME,
    )
    assert result.success
    return registry


@pytest.fixture
def service() -> APIService:
    """API service with a frozen clock at MINT_TIME."""
    return APIService(clock=lambda: MINT_TIME)
