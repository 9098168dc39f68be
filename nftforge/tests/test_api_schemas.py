"""
Tests for API schemas and OpenAPI generation.

Verifies:
- Request models validate their fields
- Error codes cover every engine and host failure
- OpenAPI schema generates with the response models
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    AssetState,
    ErrorCode,
    ErrorResponse,
    FuseRequest,
    MintRequest,
    RarityName,
    UpdateRequest,
)


class TestRequestSchemas:
    """Tests for request validation."""

    def test_mint_defaults(self):
        request = MintRequest(name="Sword", uri="https://x")
        assert request.asset_id is None
        assert request.level == 1
        assert request.rarity == RarityName.COMMON
        assert request.fusion_potential == 0
        assert request.timestamp is None

    def test_mint_requires_name_and_uri(self):
        with pytest.raises(ValidationError):
            MintRequest(uri="https://x")
        with pytest.raises(ValidationError):
            MintRequest(name="Sword")

    def test_mint_rejects_unknown_rarity(self):
        with pytest.raises(ValidationError):
            MintRequest(name="Sword", uri="u", rarity="Shiny")

    def test_mint_rejects_negative_values(self):
        with pytest.raises(ValidationError):
            MintRequest(name="Sword", uri="u", level=-1)
        with pytest.raises(ValidationError):
            MintRequest(name="Sword", uri="u", fusion_potential=-1)

    def test_update_requires_level(self):
        with pytest.raises(ValidationError):
            UpdateRequest()

    def test_update_rarity_from_label(self):
        request = UpdateRequest(new_level=3, new_rarity="Divine")
        assert request.new_rarity is RarityName.DIVINE

    def test_fuse_defaults_to_power(self):
        request = FuseRequest(first_asset_id="a", second_asset_id="b")
        assert request.fusion_type == "Power"
        assert request.result_asset_id is None

    def test_fuse_accepts_any_type(self):
        """Unknown fusion types are valid; the engine treats them as x1."""
        request = FuseRequest(first_asset_id="a", second_asset_id="b", fusion_type="Chaos")
        assert request.fusion_type == "Chaos"


class TestResponseSchemas:
    """Tests for response models."""

    def test_asset_state_from_attributes(self):
        """AssetState reads plain objects through from_attributes."""
        class Record:
            asset_id = "a"
            storage_key = "nft_state:a"
            level = 3
            rarity = "Rare"
            mint_time = 1
            last_update_time = 2
            evolution_count = 0
            fusion_potential = 1
            achievement_points = 0

        state = AssetState.model_validate(Record())
        assert state.rarity == RarityName.RARE

    def test_error_response_schema(self):
        response = ErrorResponse(error="Nope", error_code=ErrorCode.EVOLUTION_FAILED)
        data = response.model_dump(mode="json")
        assert data["error_code"] == "EVOLUTION_FAILED"
        assert data["api_version"] == "v1"
        assert data["details"] is None


class TestErrorCodes:
    """Tests for error code coverage."""

    def test_all_error_codes_defined(self):
        """Every engine error has an API code."""
        from nftforge.engine_core.errors import ErrorCode as EngineErrorCode

        for engine_code in EngineErrorCode:
            assert engine_code.name in ErrorCode.__members__, f"Missing error code: {engine_code.name}"

        for code in ["ASSET_NOT_FOUND", "ASSET_EXISTS", "VALIDATION_ERROR", "INTERNAL_ERROR"]:
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        for code in ErrorCode:
            assert isinstance(code.value, str)
            # Error codes should be UPPER_SNAKE_CASE
            assert code.value == code.value.upper()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def schema(self):
        from nftforge.api.app import app
        from fastapi.openapi.utils import get_openapi

        return get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

    def test_openapi_schema_generates(self, schema):
        """OpenAPI schema generates without errors."""
        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, schema):
        """Response models appear in OpenAPI schema."""
        schemas = schema["components"]["schemas"]

        required_schemas = [
            "TransitionResponse",
            "AssetState",
            "AppraisalResponse",
            "LedgerRecordResponse",
            "RarityLadderResponse",
            "ErrorResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_transition_endpoints(self, schema):
        """Transition endpoints declare success and rejection responses."""
        paths = schema["paths"]

        for path in [
            "/api/v1/assets",
            "/api/v1/assets/{asset_id}/update",
            "/api/v1/assets/{asset_id}/evolve",
            "/api/v1/fusions",
        ]:
            assert path in paths, f"Missing path: {path}"
            responses = paths[path]["post"]["responses"]
            assert "200" in responses
            assert "409" in responses
