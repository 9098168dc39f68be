"""
API Module - REST interface to the progression engine.

Exposes the engine via REST API. Clients:
1. Mint assets
2. Update, evolve and fuse them
3. Read back progression records, ledger attributes and appraisals

State lives in the AssetRegistry behind the service.
"""

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
    HealthResponse,
    # Shared
    AssetState,
    AttributeInfo,
    RarityInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app, create_service

__all__ = [
    # Requests
    "MintRequest",
    "UpdateRequest",
    "EvolveRequest",
    "FuseRequest",
    # Responses
    "TransitionResponse",
    "AssetListResponse",
    "LedgerRecordResponse",
    "AppraisalResponse",
    "RarityLadderResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "AssetState",
    "AttributeInfo",
    "RarityInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
    "create_service",
]
