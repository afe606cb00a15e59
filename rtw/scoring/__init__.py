"""Reputation scoring -- review helpfulness, company rating, trust tier.

Pure functions over supplied data; nothing here reads or writes storage.
"""

from rtw.scoring.engine import (
    company_risk_score,
    company_statistics,
    credibility_score,
    engagement_score,
    hiring_rate,
    popularity_score,
    recency_weight,
    score_company,
    score_review,
    trust_score,
    trust_tier,
    weighted_average_rating,
)
from rtw.scoring.models import CompanyReviewStatistics, RatedContribution, RiskAssessment, TrustTier

__all__ = [
    "CompanyReviewStatistics",
    "RatedContribution",
    "RiskAssessment",
    "TrustTier",
    "company_risk_score",
    "company_statistics",
    "credibility_score",
    "engagement_score",
    "hiring_rate",
    "popularity_score",
    "recency_weight",
    "score_company",
    "score_review",
    "trust_score",
    "trust_tier",
    "weighted_average_rating",
]
