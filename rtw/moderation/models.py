"""Data models for the content moderation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


class Category(Enum):
    """Kinds of violation a detector can report."""

    PROFANITY = "Profanity"
    PERSONAL_INFO = "PersonalInfo"
    SPAM = "Spam"
    THREAT = "Threat"
    DISCRIMINATION = "Discrimination"
    EMPTY = "Empty"


@dataclass(frozen=True)
class Finding:
    """What a single detector found in a piece of text."""

    category: Category
    clause: str  # human-readable, e.g. "contains profanity"
    terms: tuple[str, ...] = ()  # only the profanity detector fills this
    certainty: float = 1.0  # 0.0 - 1.0


@dataclass(frozen=True)
class ModerationVerdict:
    """Result of moderating one piece of text.

    Created fresh on every call and never persisted by this package.
    ``is_approved`` is true exactly when ``categories`` is empty.
    """

    is_approved: bool
    reason: str = ""
    categories: frozenset[Category] = frozenset()
    flagged_words: tuple[str, ...] = ()
    confidence: float = 0.0
    content_length: int = 0
    processing_time: timedelta = timedelta(microseconds=1)
    moderated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    failed_detectors: tuple[str, ...] = ()

    def has(self, category: Category) -> bool:
        return category in self.categories

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for API responses."""
        return {
            "is_approved": self.is_approved,
            "reason": self.reason,
            "categories": sorted(c.value for c in self.categories),
            "flagged_words": list(self.flagged_words),
            "confidence": self.confidence,
            "content_length": self.content_length,
            "processing_time_ms": self.processing_time / timedelta(milliseconds=1),
            "moderated_at": self.moderated_at.isoformat(),
            "failed_detectors": list(self.failed_detectors),
        }
