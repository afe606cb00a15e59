"""Scoring router -- review helpfulness and company reputation signals.

Prefix: ``/api/scoring``
"""

from __future__ import annotations

from fastapi import APIRouter

from rtw.scoring.engine import (
    company_statistics,
    hiring_rate,
    popularity_score,
    trust_score,
    trust_tier,
    weighted_average_rating,
)
from rtw.scoring.models import RatedContribution
from web.backend.app.models.api import (
    CompanyScoreRequest,
    CompanyScoreResponse,
    HiringRateRequest,
    HiringRateResponse,
    ReviewScoreRequest,
    ReviewScoreResponse,
    TrustTierRequest,
    TrustTierResponse,
)

router = APIRouter(prefix="/api/scoring", tags=["scoring"])


@router.post("/review", response_model=ReviewScoreResponse)
async def score_review(request: ReviewScoreRequest):
    """Helpfulness score for a review's vote tally."""
    return ReviewScoreResponse(helpfulness_score=popularity_score(request.upvotes, request.downvotes))


@router.post("/company", response_model=CompanyScoreResponse)
async def score_company(request: CompanyScoreRequest):
    """Weighted rating, statistics and trust tier for a company's reviews."""
    contributions = [RatedContribution.from_dict(c.model_dump()) for c in request.contributions]
    rating = weighted_average_rating(contributions, request.now)
    stats = company_statistics(contributions)

    return CompanyScoreResponse(
        weighted_rating=rating,
        average_rating=stats.average_rating,
        total_reviews=stats.total_reviews,
        verified_reviews=stats.verified_reviews,
        verified_percentage=stats.verified_percentage,
        trust_tier=trust_tier(rating, stats.verified_percentage).value,
        rating_distribution=stats.rating_distribution,
        category_averages=stats.category_averages,
    )


@router.post("/trust-tier", response_model=TrustTierResponse)
async def score_trust_tier(request: TrustTierRequest):
    """Trust tier from an average rating and a verified-review share."""
    return TrustTierResponse(
        trust_score=trust_score(request.average_rating, request.verified_percentage),
        trust_tier=trust_tier(request.average_rating, request.verified_percentage).value,
    )


@router.post("/hiring-rate", response_model=HiringRateResponse)
async def score_hiring_rate(request: HiringRateRequest):
    """Share of job postings that ended in a hire."""
    return HiringRateResponse(hiring_rate=hiring_rate(request.successful_hires, request.total_postings))
