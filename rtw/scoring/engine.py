"""Reputation scoring -- closed-form trust and ranking signals.

Every function here is pure: inputs in, number out.  Callers (vote handlers,
the recalculation job) write the results back onto reviews and companies.
Zero denominators are special-cased and return 0 instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from rtw.scoring.models import (
    CompanyReviewStatistics,
    RatedContribution,
    RiskAssessment,
    TrustTier,
    to_datetime,
    to_decimal,
)

DAYS_PER_YEAR = 365

# Tiers are checked top-down against the trust score (0 - 130).
TIER_THRESHOLDS: tuple[tuple[Decimal, TrustTier], ...] = (
    (Decimal(90), TrustTier.VERY_HIGH),
    (Decimal(75), TrustTier.HIGH),
    (Decimal(60), TrustTier.MEDIUM),
    (Decimal(40), TrustTier.LOW),
)

_RATING_WEIGHT = Decimal(20)
_VERIFIED_WEIGHT = Decimal("0.3")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


def popularity_score(upvotes: int, downvotes: int) -> float:
    """Helpfulness of a review from its votes, in [0, 100).

    The upvote ratio is scaled by a confidence term ``1 - 1/(T+1)`` that grows
    with the total vote count T, so 10 of 10 upvotes ranks above 1 of 1.
    """
    total = upvotes + downvotes
    if total == 0:
        return 0.0

    positive_ratio = upvotes / total
    confidence = 1 - 1 / (total + 1)
    return positive_ratio * confidence * 100


score_review = popularity_score


def engagement_score(upvotes: int, downvotes: int, view_count: int, share_count: int) -> Decimal:
    """How much readers interact with a review, capped at 100.

    Votes per view, the upvote share and shares all add points; reviews with
    fewer than three votes get half credit.
    """
    total_votes = upvotes + downvotes
    engagement_rate = Decimal(total_votes) / Decimal(view_count) if view_count > 0 else Decimal(0)

    score = engagement_rate * 50
    if total_votes > 0:
        score += Decimal(upvotes) / Decimal(total_votes) * 30
    if share_count > 0:
        score += min(Decimal(share_count * 5), Decimal(20))

    if total_votes < 3:
        score *= Decimal("0.5")

    return min(score, Decimal(100))


def credibility_score(is_verified: bool, user_review_count: int, user_average_score) -> Decimal:
    """Credibility of a reviewer: verification, experience and track record."""
    average = to_decimal(user_average_score)
    score = Decimal(0)

    if is_verified:
        score += 40

    if user_review_count >= 50:
        score += 30
    elif user_review_count >= 20:
        score += 20
    elif user_review_count >= 10:
        score += 15
    elif user_review_count >= 5:
        score += 10

    if average >= Decimal("4.5"):
        score += 30
    elif average >= Decimal("4.0"):
        score += 25
    elif average >= Decimal("3.5"):
        score += 20
    elif average >= Decimal("3.0"):
        score += 15
    elif average >= Decimal("2.5"):
        score += 10

    return min(score, Decimal(100))


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------


def recency_weight(submitted_at: datetime, now: datetime) -> Decimal:
    """Weight of a review submitted at *submitted_at*, as seen at *now*.

    1.0 on the day of submission, falling linearly by 1/365 per whole day and
    never below 1/365.
    """
    return Decimal(_weight_units(submitted_at, now)) / DAYS_PER_YEAR


def _weight_units(submitted_at: datetime, now: datetime) -> int:
    # Future timestamps (clock skew) count as today.
    days = max(0, (to_datetime(now) - to_datetime(submitted_at)).days)
    return max(1, DAYS_PER_YEAR - days)


def weighted_average_rating(
    contributions: Iterable[RatedContribution], now: Optional[datetime] = None
) -> Decimal:
    """Recency-weighted average rating of a company's active, published reviews.

    Returns 0 when no review counts.
    """
    now = to_datetime(now) if now is not None else datetime.now(timezone.utc)
    counted = [c for c in contributions if c.counts]
    if not counted:
        return Decimal(0)

    # Weights share the 1/365 denominator, so sum whole units for exactness.
    units = [_weight_units(c.submitted_at, now) for c in counted]
    weighted_sum = sum((to_decimal(c.rating) * u for c, u in zip(counted, units)), Decimal(0))
    return weighted_sum / Decimal(sum(units))


score_company = weighted_average_rating


def trust_score(average_rating, verified_percentage) -> Decimal:
    """``average_rating * 20 + verified_percentage * 0.3``, range 0 - 130."""
    return to_decimal(average_rating) * _RATING_WEIGHT + to_decimal(verified_percentage) * _VERIFIED_WEIGHT


def trust_tier(average_rating, verified_percentage) -> TrustTier:
    """Classify a company from its average rating (0-5) and verified share (0-100)."""
    score = trust_score(average_rating, verified_percentage)
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return TrustTier.VERY_LOW


def hiring_rate(successful_hires: int, total_postings: int) -> Decimal:
    """Share of job postings that ended in a hire; 0 when there are none."""
    if total_postings == 0:
        return Decimal(0)
    return Decimal(successful_hires) / Decimal(total_postings)


def company_statistics(contributions: Iterable[RatedContribution]) -> CompanyReviewStatistics:
    """Unweighted aggregates over a company's active, published reviews."""
    counted = [c for c in contributions if c.counts]
    if not counted:
        return CompanyReviewStatistics()

    ratings = [to_decimal(c.rating) for c in counted]
    total = len(counted)
    verified = sum(1 for c in counted if c.is_verified)

    distribution: dict[int, int] = {}
    for rating in ratings:
        bucket = int(rating)
        distribution[bucket] = distribution.get(bucket, 0) + 1

    by_type: dict[str, list[Decimal]] = {}
    for c, rating in zip(counted, ratings):
        if c.comment_type:
            by_type.setdefault(c.comment_type, []).append(rating)

    return CompanyReviewStatistics(
        average_rating=sum(ratings, Decimal(0)) / total,
        total_reviews=total,
        verified_reviews=verified,
        verified_percentage=Decimal(verified * 100) / Decimal(total),
        rating_distribution=dict(sorted(distribution.items())),
        category_averages={k: sum(v, Decimal(0)) / len(v) for k, v in by_type.items()},
    )


def company_risk_score(
    average_rating,
    review_count: int,
    report_count: int,
    is_company_approved: bool,
    company_age_days: float,
    days_since_last_review: Optional[float] = None,
) -> RiskAssessment:
    """Risk that a company profile is unreliable, from 0 (none) to 100.

    Low ratings, a high report ratio, an unapproved profile, a very new
    profile and a long silence since the last review each add risk.
    """
    average = float(to_decimal(average_rating))
    factors: dict[str, float] = {}

    factors["LowRating"] = (2.5 - average) * 20 if average < 2.5 else 0.0

    report_ratio = report_count / review_count if review_count > 0 else 0.0
    factors["HighReportRatio"] = min(report_ratio * 100, 30.0)

    factors["UnverifiedCompany"] = 0.0 if is_company_approved else 20.0

    factors["NewCompany"] = (90 - company_age_days) / 90 * 15 if company_age_days < 90 else 0.0

    if days_since_last_review is not None:
        factors["InactivePeriod"] = (
            min(days_since_last_review / 30, 15.0) if days_since_last_review > 180 else 0.0
        )

    total = round(min(sum(factors.values()), 100.0), 2)
    if total >= 70:
        level = "High"
    elif total >= 40:
        level = "Medium"
    elif total >= 20:
        level = "Low"
    else:
        level = "Minimal"

    return RiskAssessment(total_score=total, risk_level=level, factors=factors)
