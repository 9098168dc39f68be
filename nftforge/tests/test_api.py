"""
Tests for API layer.

Tests:
- API service methods
- Error mapping to structured responses
- HTTP status codes via the FastAPI app
"""

import pytest
from fastapi.testclient import TestClient

from ..api.schemas import (
    MintRequest,
    UpdateRequest,
    EvolveRequest,
    FuseRequest,
    TransitionResponse,
    ErrorResponse,
    ErrorCode,
    RarityName,
)
from ..api.service import APIService, error_code_for
from ..api.app import create_app
from .conftest import DAY, MINT_TIME


class TestAPIService:
    """Tests for APIService."""

    def test_mint(self, service):
        """Minting returns the committed record and attributes."""
        response = service.mint(MintRequest(
            asset_id="sword", name="Sword", uri="https://x/sword.json", level=3, rarity=RarityName.RARE,
        ))

        assert isinstance(response, TransitionResponse)
        assert response.created
        assert response.timestamp == MINT_TIME
        assert response.state.rarity == RarityName.RARE
        assert response.state.storage_key == "nft_state:sword"
        assert response.attributes[0].key == "level"

    def test_mint_generates_id(self, service):
        response = service.mint(MintRequest(name="Anon", uri="uri"))
        assert response.asset_id
        assert service.list_assets().count == 1

    def test_request_timestamp_overrides_clock(self, service):
        """A golden-hour timestamp in the request wins over the clock."""
        response = service.mint(MintRequest(asset_id="gold", name="G", uri="u", timestamp=12 * 3600))
        assert response.state.rarity == RarityName.LEGENDARY
        assert response.timestamp == 12 * 3600

    def test_update_too_soon(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u", rarity=RarityName.UNCOMMON))
        response = service.update("a", UpdateRequest(new_level=2, min_time_elapsed=60))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.UPDATE_TOO_SOON
        assert response.details["asset_id"] == "a"

    def test_update_with_rarity(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u"))
        response = service.update("a", UpdateRequest(new_level=5, new_rarity=RarityName.MYTHIC))

        assert response.state.level == 5
        assert response.state.rarity == RarityName.MYTHIC

    def test_evolve_without_body(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u"))
        response = service.evolve("a")
        assert response.error_code == ErrorCode.EVOLUTION_NOT_READY

        response = service.evolve("a", EvolveRequest(timestamp=MINT_TIME + DAY))
        assert response.state.level == 2
        assert response.state.evolution_count == 1

    def test_fuse(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u", level=4))
        service.mint(MintRequest(asset_id="b", name="B", uri="u", level=6))

        response = service.fuse(FuseRequest(
            first_asset_id="a", second_asset_id="b", result_asset_id="c", fusion_type="Speed",
        ))
        assert response.created
        assert response.state.level == 15
        assert response.state.rarity == RarityName.RARE

    def test_fuse_same(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u"))
        response = service.fuse(FuseRequest(first_asset_id="a", second_asset_id="a"))
        assert response.error_code == ErrorCode.CANNOT_FUSE_SAME_NFT

    def test_get_missing(self, service):
        assert service.get_asset("ghost").error_code == ErrorCode.ASSET_NOT_FOUND
        assert service.get_attributes("ghost").error_code == ErrorCode.ASSET_NOT_FOUND
        assert service.appraise("ghost").error_code == ErrorCode.ASSET_NOT_FOUND

    def test_attributes_match_ledger(self, service):
        service.mint(MintRequest(asset_id="a", name="A", uri="u", fusion_potential=3))
        record = service.get_attributes("a")
        assert record.name == "A"
        assert {"key": "fusion_bonus", "value": "30"} in [a.model_dump() for a in record.attributes]

    def test_rarity_ladder(self, service):
        tiers = service.rarity_ladder().tiers
        assert [t.rarity for t in tiers] == list(RarityName)
        assert tiers[-1].next_tier == RarityName.DIVINE

    def test_services_are_independent(self):
        first = APIService(clock=lambda: MINT_TIME)
        second = APIService(clock=lambda: MINT_TIME)
        first.mint(MintRequest(asset_id="a", name="A", uri="u"))
        assert second.list_assets().count == 0


class TestErrorMapping:
    """Tests for ActionResult code -> API ErrorCode."""

    @pytest.mark.parametrize("code,expected", [
        ("UpdateTooSoon", ErrorCode.UPDATE_TOO_SOON),
        ("CannotFuseSameNFT", ErrorCode.CANNOT_FUSE_SAME_NFT),
        ("FusionPotentialExhausted", ErrorCode.FUSION_POTENTIAL_EXHAUSTED),
        ("ASSET_NOT_FOUND", ErrorCode.ASSET_NOT_FOUND),
        ("VALIDATION_ERROR", ErrorCode.VALIDATION_ERROR),
        ("Nonsense", ErrorCode.INTERNAL_ERROR),
        (None, ErrorCode.INTERNAL_ERROR),
    ])
    def test_mapping(self, code, expected):
        assert error_code_for(code) is expected


class TestHTTP:
    """Tests for the FastAPI app."""

    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service=service))

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_mint_and_get(self, client):
        response = client.post("/api/v1/assets", json={
            "asset_id": "sword", "name": "Sword", "uri": "u", "level": 2, "rarity": "Epic",
        })
        assert response.status_code == 200
        assert response.json()["state"]["rarity"] == "Epic"

        response = client.get("/api/v1/assets/sword")
        assert response.status_code == 200
        assert response.json()["level"] == 2

    def test_missing_asset_is_404(self, client):
        response = client.get("/api/v1/assets/ghost")
        assert response.status_code == 404
        assert response.json()["error_code"] == "ASSET_NOT_FOUND"

    def test_rejected_transition_is_409(self, client):
        client.post("/api/v1/assets", json={"asset_id": "a", "name": "A", "uri": "u", "rarity": "Rare"})
        response = client.post("/api/v1/assets/a/update", json={"new_level": 2, "min_time_elapsed": 10})
        assert response.status_code == 409
        assert response.json()["error_code"] == "UPDATE_TOO_SOON"

    def test_duplicate_mint_is_409(self, client):
        body = {"asset_id": "a", "name": "A", "uri": "u"}
        client.post("/api/v1/assets", json=body)
        response = client.post("/api/v1/assets", json=body)
        assert response.status_code == 409
        assert response.json()["error_code"] == "ASSET_EXISTS"

    def test_unknown_rarity_is_422(self, client):
        response = client.post("/api/v1/assets", json={"name": "A", "uri": "u", "rarity": "Shiny"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_evolve_and_appraise(self, client):
        client.post("/api/v1/assets", json={"asset_id": "a", "name": "A", "uri": "u"})
        response = client.post("/api/v1/assets/a/evolve", json={"timestamp": MINT_TIME + DAY})
        assert response.status_code == 200
        assert response.json()["state"]["rarity"] == "Uncommon"

        response = client.get("/api/v1/assets/a/appraisal", params={"timestamp": MINT_TIME + DAY})
        assert response.status_code == 200
        assert response.json()["next_rarity"] == "Rare"

    def test_fusion_endpoint(self, client):
        client.post("/api/v1/assets", json={"asset_id": "a", "name": "A", "uri": "u"})
        client.post("/api/v1/assets", json={"asset_id": "b", "name": "B", "uri": "u"})
        response = client.post("/api/v1/fusions", json={
            "first_asset_id": "a", "second_asset_id": "b", "result_asset_id": "c",
        })
        assert response.status_code == 200
        assert response.json()["asset_id"] == "c"

        listing = client.get("/api/v1/assets").json()
        assert sorted(listing["assets"]) == ["a", "b", "c"]

    def test_fusion_into_source_is_422(self, client):
        client.post("/api/v1/assets", json={"asset_id": "a", "name": "A", "uri": "u", "level": 40})
        client.post("/api/v1/assets", json={"asset_id": "b", "name": "B", "uri": "u"})
        response = client.post("/api/v1/fusions", json={
            "first_asset_id": "a", "second_asset_id": "b", "result_asset_id": "a",
        })
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert client.get("/api/v1/assets/a").json()["level"] == 40
