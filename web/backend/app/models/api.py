"""Pydantic models for API request/response serialization.

These models mirror the rtw dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Moderation models
# ---------------------------------------------------------------------------


class ModerateRequest(BaseModel):
    text: Optional[str] = None


class BulkModerateRequest(BaseModel):
    texts: list[Optional[str]] = Field(default_factory=list)


class SanitizeRequest(BaseModel):
    text: Optional[str] = None


class SanitizeResponse(BaseModel):
    text: str


class ModerationVerdictResponse(BaseModel):
    """Mirrors rtw.moderation.models.ModerationVerdict."""

    is_approved: bool
    reason: str = ""
    categories: list[str] = Field(default_factory=list)
    flagged_words: list[str] = Field(default_factory=list)
    confidence: float = 0.0
    content_length: int = 0
    processing_time_ms: float = 0.0
    moderated_at: str = ""
    failed_detectors: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Scoring models
# ---------------------------------------------------------------------------


class ReviewScoreRequest(BaseModel):
    upvotes: int = Field(ge=0)
    downvotes: int = Field(ge=0)


class ReviewScoreResponse(BaseModel):
    helpfulness_score: float


class ContributionRequest(BaseModel):
    """Mirrors rtw.scoring.models.RatedContribution."""

    rating: Decimal = Field(ge=Decimal("0.5"), le=Decimal(5))
    submitted_at: datetime
    is_active: bool = True
    is_published: bool = True
    is_verified: bool = False
    comment_type: str = ""


class CompanyScoreRequest(BaseModel):
    contributions: list[ContributionRequest] = Field(default_factory=list)
    now: Optional[datetime] = None


class CompanyScoreResponse(BaseModel):
    weighted_rating: Decimal
    average_rating: Decimal
    total_reviews: int
    verified_reviews: int
    verified_percentage: Decimal
    trust_tier: str
    rating_distribution: dict[int, int] = Field(default_factory=dict)
    category_averages: dict[str, Decimal] = Field(default_factory=dict)


class TrustTierRequest(BaseModel):
    average_rating: Decimal = Field(ge=0, le=5)
    verified_percentage: Decimal = Field(ge=0, le=100)


class TrustTierResponse(BaseModel):
    trust_score: Decimal
    trust_tier: str


class HiringRateRequest(BaseModel):
    successful_hires: int = Field(ge=0)
    total_postings: int = Field(ge=0)


class HiringRateResponse(BaseModel):
    hiring_rate: Decimal
