"""
FastAPI Application - REST API for the progression engine.

Endpoints:
    GET    /api/v1/health                       Health check
    GET    /api/v1/rarities                     Rarity ladder
    POST   /api/v1/assets                       Mint an asset
    GET    /api/v1/assets                       List assets
    GET    /api/v1/assets/{id}                  Progression record
    GET    /api/v1/assets/{id}/attributes       Ledger attributes
    GET    /api/v1/assets/{id}/appraisal        Read-only valuation
    POST   /api/v1/assets/{id}/update           Raise level
    POST   /api/v1/assets/{id}/evolve           Evolve one tier
    POST   /api/v1/fusions                      Fuse two assets

All responses are JSON with explicit Pydantic schemas.
Requests may carry a `timestamp` (unix seconds); otherwise the server clock
is used.
"""

from typing import Annotated, Optional, Union
import logging
import os

from .. import __version__

# Environment configuration
NFTFORGE_ENV = os.getenv("NFTFORGE_ENV", "development")
NFTFORGE_STORE = os.getenv("NFTFORGE_STORE", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)

# HTTP status per error code; codes not listed here (engine rejections, ASSET_EXISTS) map to 409
_STATUS_BY_CODE = {
    "ASSET_NOT_FOUND": 404,
    "VALIDATION_ERROR": 422,
    "INTERNAL_ERROR": 500,
}


def create_service(store_dir: Optional[str] = None):
    """
    Build an APIService, file-backed when a store directory is given.
    """
    from pathlib import Path
    from .service import APIService
    from ..ledger import JsonFileLedger
    from ..registry import AssetRegistry

    if not store_dir:
        return APIService()
    root = Path(store_dir).expanduser()
    registry = AssetRegistry(
        ledger=JsonFileLedger(root / "ledger.json"),
        state_path=root / "states.json",
    )
    return APIService(registry=registry)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Query, Request
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .schemas import (
        # Request models
        MintRequest,
        UpdateRequest,
        EvolveRequest,
        FuseRequest,
        # Response models
        TransitionResponse,
        AssetState,
        AssetListResponse,
        LedgerRecordResponse,
        AppraisalResponse,
        RarityLadderResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="nftforge API",
        description="""
Progression engine for game assets: mint, update, evolve and fuse.

## Error Codes

| Code | Description |
|------|-------------|
| `UPDATE_TOO_SOON` | Cooldown (base x rarity multiplier) has not elapsed |
| `INVALID_LEVEL_PROGRESSION` | New level must be above the current level |
| `EVOLUTION_NOT_READY` | Not enough time since mint |
| `EVOLUTION_FAILED` | Evolution roll above the tier's chance |
| `CANNOT_FUSE_SAME_NFT` | Fusion sources must differ |
| `ASSET_NOT_FOUND` | No record for the asset |
| `ASSET_EXISTS` | Asset already minted |
| `VALIDATION_ERROR` | Request failed validation |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or create_service(NFTFORGE_STORE)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        status_code = _STATUS_BY_CODE.get(error.error_code.value, 409)
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorResponse(
                error="Request validation failed",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": [
                    {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                    for e in exc.errors()
                ]},
            )
        )

    error_responses = {
        404: {"model": ErrorResponse, "description": "Asset not found"},
        409: {"model": ErrorResponse, "description": "Transition rejected"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    }

    # =========================================================================
    # Meta Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="nftforge", version=__version__)

    @app.get(
        "/api/v1/rarities",
        response_model=RarityLadderResponse,
        tags=["Meta"],
        summary="Rarity ladder and per-tier multipliers",
    )
    async def rarities() -> RarityLadderResponse:
        return api_service.rarity_ladder()

    # =========================================================================
    # Asset Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/assets",
        response_model=TransitionResponse,
        responses=error_responses,
        tags=["Assets"],
        summary="Mint a new asset",
    )
    async def mint_asset(body: MintRequest) -> Union[TransitionResponse, JSONResponse]:
        """
        Mint a new asset.

        Minting during hour 0 or 12 (UTC) promotes the rarity to Legendary.
        """
        return respond(api_service.mint(body))

    @app.get(
        "/api/v1/assets",
        response_model=AssetListResponse,
        tags=["Assets"],
        summary="List assets",
    )
    async def list_assets() -> AssetListResponse:
        return api_service.list_assets()

    @app.get(
        "/api/v1/assets/{asset_id}",
        response_model=AssetState,
        responses={404: error_responses[404]},
        tags=["Assets"],
        summary="Get an asset's progression record",
    )
    async def get_asset(asset_id: str) -> Union[AssetState, JSONResponse]:
        return respond(api_service.get_asset(asset_id))

    @app.get(
        "/api/v1/assets/{asset_id}/attributes",
        response_model=LedgerRecordResponse,
        responses={404: error_responses[404]},
        tags=["Assets"],
        summary="Get an asset's ledger attributes",
    )
    async def get_attributes(asset_id: str) -> Union[LedgerRecordResponse, JSONResponse]:
        return respond(api_service.get_attributes(asset_id))

    @app.get(
        "/api/v1/assets/{asset_id}/appraisal",
        response_model=AppraisalResponse,
        responses={404: error_responses[404]},
        tags=["Assets"],
        summary="Appraise an asset",
    )
    async def appraise_asset(
        asset_id: str,
        timestamp: Annotated[Optional[int], Query(ge=0, description="Unix seconds")] = None,
    ) -> Union[AppraisalResponse, JSONResponse]:
        return respond(api_service.appraise(asset_id, timestamp))

    # =========================================================================
    # Transition Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/assets/{asset_id}/update",
        response_model=TransitionResponse,
        responses=error_responses,
        tags=["Transitions"],
        summary="Raise an asset's level",
    )
    async def update_asset(asset_id: str, body: UpdateRequest) -> Union[TransitionResponse, JSONResponse]:
        """
        Raise an asset's level.

        The cooldown is `min_time_elapsed` times the rarity's cooldown multiplier,
        counted from the last update.
        """
        return respond(api_service.update(asset_id, body))

    @app.post(
        "/api/v1/assets/{asset_id}/evolve",
        response_model=TransitionResponse,
        responses=error_responses,
        tags=["Transitions"],
        summary="Evolve an asset one tier",
    )
    async def evolve_asset(
        asset_id: str,
        body: Optional[EvolveRequest] = None,
    ) -> Union[TransitionResponse, JSONResponse]:
        return respond(api_service.evolve(asset_id, body))

    @app.post(
        "/api/v1/fusions",
        response_model=TransitionResponse,
        responses=error_responses,
        tags=["Transitions"],
        summary="Fuse two assets",
    )
    async def fuse_assets(body: FuseRequest) -> Union[TransitionResponse, JSONResponse]:
        return respond(api_service.fuse(body))

    logger.debug("nftforge API created (env=%s)", NFTFORGE_ENV)
    return app


# For running directly: uvicorn nftforge.api.app:app
app = create_app()
