"""Models for reputation scoring inputs and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any


class TrustTier(Enum):
    """Five-level company credibility class."""

    VERY_HIGH = "VeryHigh"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "VeryLow"


@dataclass(frozen=True)
class RatedContribution:
    """One review's rating as seen by company-level aggregation."""

    rating: Decimal  # 0.5 - 5.0
    submitted_at: datetime
    is_active: bool = True
    is_published: bool = True
    is_verified: bool = False  # backed by verifying evidence
    comment_type: str = ""

    @property
    def counts(self) -> bool:
        """Only active, published reviews take part in aggregation."""
        return self.is_active and self.is_published

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RatedContribution:
        return cls(
            rating=to_decimal(data["rating"]),
            submitted_at=to_datetime(data["submitted_at"]),
            is_active=bool(data.get("is_active", True)),
            is_published=bool(data.get("is_published", True)),
            is_verified=bool(data.get("is_verified", False)),
            comment_type=str(data.get("comment_type", "") or ""),
        )


@dataclass
class CompanyReviewStatistics:
    """Plain (unweighted) aggregates over a company's counted reviews."""

    average_rating: Decimal = Decimal(0)
    total_reviews: int = 0
    verified_reviews: int = 0
    verified_percentage: Decimal = Decimal(0)
    rating_distribution: dict[int, int] = field(default_factory=dict)  # floor(rating) -> count
    category_averages: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_rating": str(self.average_rating),
            "total_reviews": self.total_reviews,
            "verified_reviews": self.verified_reviews,
            "verified_percentage": str(self.verified_percentage),
            "rating_distribution": dict(self.rating_distribution),
            "category_averages": {k: str(v) for k, v in self.category_averages.items()},
        }


@dataclass
class RiskAssessment:
    """Company risk score with the factors that produced it."""

    total_score: float  # 0 - 100
    risk_level: str  # "High" | "Medium" | "Low" | "Minimal"
    factors: dict[str, float] = field(default_factory=dict)

    @property
    def primary_factor(self) -> str:
        positive = {k: v for k, v in self.factors.items() if v > 0}
        if not positive:
            return "None"
        return max(positive, key=positive.get)


def to_decimal(value: Any) -> Decimal:
    """Convert ints, floats and strings to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_datetime(value: Any) -> datetime:
    """Accept datetimes, dates and ISO strings; naive values are taken as UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time())
    if not isinstance(value, datetime):
        raise TypeError(f"Expected a datetime, date or ISO string, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
