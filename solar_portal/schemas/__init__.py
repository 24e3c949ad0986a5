"""Pydantic schemas for request/response validation."""

from solar_portal.schemas.commission import (
    CommissionRuleListResponse,
    CommissionRuleResponse,
    DealDetailResponse,
    PayoutPreviewResponse,
    ReconciliationResponse,
    RepSummaryResponse,
)

__all__ = [
    "CommissionRuleListResponse",
    "CommissionRuleResponse",
    "DealDetailResponse",
    "PayoutPreviewResponse",
    "ReconciliationResponse",
    "RepSummaryResponse",
]
