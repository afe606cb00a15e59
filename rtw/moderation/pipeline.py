"""Content moderation pipeline for review text.

Runs every detector over the submitted text (profanity, personal
information, spam, threats, discrimination) and folds their findings into a
single ModerationVerdict.  Nothing here touches storage: callers decide what
to do with the verdict.

A detector that raises does not abort the verdict.  The failure is logged and
the detector's category is reported as unverified, so a broken check can
never turn into an approval.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Iterable, Optional, Sequence

from rtw.moderation.detectors import DEFAULT_DETECTORS, Detector
from rtw.moderation.lexicon import Lexicon, default_lexicon
from rtw.moderation.models import Category, Finding, ModerationVerdict
from rtw.moderation.normalizer import NormalizedText, normalize

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REJECTED_PREFIX = "Content rejected: "
EMPTY_REASON = "Content is empty"

_KEYWORDS = {
    Category.PROFANITY: "profanity",
    Category.PERSONAL_INFO: "personal information",
    Category.SPAM: "spam",
    Category.THREAT: "threatening language",
    Category.DISCRIMINATION: "discriminatory language",
}

# Texts this long (after trimming) get full length credit in the confidence.
_FULL_CONFIDENCE_LENGTH = 200
_FAILED_CERTAINTY = 0.5

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
_USERNAME_SEPARATORS = re.compile(r"[_-]")
_USERNAME_MIN, _USERNAME_MAX = 3, 20
_COMPANY_NAME_MIN = 2

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_SCRIPT_OPEN = re.compile(r"<\s*script", re.IGNORECASE)
_UNSAFE_TOKENS = re.compile(r"javascript:|onclick|onerror", re.IGNORECASE)
_REPEATED_CHAR = re.compile(r"(.)\1{4,}")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ContentModerationPipeline:
    """Stateless moderation pipeline over a shared, read-only lexicon."""

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        detectors: Sequence[tuple[str, Category, Detector]] | None = None,
    ) -> None:
        self.lexicon = lexicon or default_lexicon()
        self.detectors = tuple(detectors if detectors is not None else DEFAULT_DETECTORS)
        self._mask_pattern = re.compile(self.lexicon.profanity_pattern.pattern, re.IGNORECASE)

    # -- public API ----------------------------------------------------------

    def moderate(self, text: Optional[str]) -> ModerationVerdict:
        """Moderate *text* and return a verdict.  Never raises."""
        started = time.perf_counter_ns()
        moderated_at = datetime.now(timezone.utc)

        if text is None or not str(text).strip():
            return ModerationVerdict(
                is_approved=False,
                reason=EMPTY_REASON,
                categories=frozenset({Category.EMPTY}),
                confidence=0.0,
                content_length=len(text) if text is not None else 0,
                processing_time=_elapsed(started),
                moderated_at=moderated_at,
            )

        text = str(text)
        findings, failed = self._run_detectors(text)
        verdict = self._aggregate(text, findings, failed, started, moderated_at)

        logger.debug(
            "Moderated %d chars: approved=%s categories=%s confidence=%.3f",
            verdict.content_length,
            verdict.is_approved,
            sorted(c.value for c in verdict.categories),
            verdict.confidence,
        )
        return verdict

    def moderate_many(self, texts: Iterable[Optional[str]]) -> list[ModerationVerdict]:
        """Moderate each text in order."""
        return [self.moderate(t) for t in texts]

    def moderate_username(self, username: Optional[str]) -> ModerationVerdict:
        """Moderate a username: content rules plus length and charset rules."""
        if username is None or not username.strip():
            return self.moderate(username)

        # "_" and "-" are word characters to the profanity pattern; split on them.
        folded = _USERNAME_SEPARATORS.sub(" ", username)
        # All separators ("___"): only the length and charset rules apply.
        verdict = self.moderate(folded if folded.strip() else username)

        if not _USERNAME_MIN <= len(username) <= _USERNAME_MAX:
            verdict = _add_violation(
                verdict,
                f"username must be between {_USERNAME_MIN} and {_USERNAME_MAX} characters (spam)",
            )
        if not _USERNAME_PATTERN.match(username):
            verdict = _add_violation(
                verdict,
                "username may only contain letters, digits, '-' and '_' (spam)",
            )
        return verdict

    def moderate_company_info(
        self, name: Optional[str], description: Optional[str] = None
    ) -> ModerationVerdict:
        """Moderate a company's name together with its description."""
        name = name or ""
        text = f"{name} {description}" if description else name
        verdict = self.moderate(text)
        if verdict.has(Category.EMPTY):
            return verdict

        if len(name.strip()) < _COMPANY_NAME_MIN:
            verdict = _add_violation(verdict, "company name too short (spam)")
        return verdict

    def sanitize(self, text: Optional[str]) -> str:
        """Strip markup and mask profanity so *text* is safe to display."""
        if text is None or not text.strip():
            return ""

        cleaned = _TAG_PATTERN.sub("", text)
        cleaned = _SCRIPT_OPEN.sub("&lt;script", cleaned)
        cleaned = _UNSAFE_TOKENS.sub("", cleaned)
        cleaned = _WHITESPACE.sub(" ", cleaned).strip()
        return self._mask_pattern.sub(_mask_root, cleaned)

    @staticmethod
    def content_quality_score(text: Optional[str]) -> float:
        """Rough 0-1 writing-quality signal: length, caps, punctuation, repetition."""
        if text is None or not text.strip():
            return 0.0

        score = 1.0
        if len(text) < 50:
            score -= 0.3
        elif len(text) > 500:
            score += 0.1

        upper_ratio = sum(c.isupper() for c in text) / len(text)
        if upper_ratio > 0.5:
            score -= 0.2

        if "." in text or "," in text:
            score += 0.1

        if _REPEATED_CHAR.search(text):
            score -= 0.3
        if "123456" in text:
            score -= 0.2

        return max(0.0, min(1.0, score))

    # -- internals -----------------------------------------------------------

    def _run_detectors(self, text: str) -> tuple[list[Finding], list[str]]:
        findings: list[Finding] = []
        failed: list[str] = []

        try:
            normalized = normalize(text, self.lexicon)
        except Exception:
            logger.exception("Normalization failed; matching against lower-cased text")
            normalized = NormalizedText(text=text.lower())

        for name, category, detector in self.detectors:
            try:
                finding = detector(text, normalized, self.lexicon)
            except Exception:
                logger.exception("Detector %r failed; reporting %s as unverified", name, category.value)
                failed.append(name)
                findings.append(
                    Finding(
                        category=category,
                        clause=f"could not be checked for {_KEYWORDS.get(category, category.value)}",
                        certainty=_FAILED_CERTAINTY,
                    )
                )
                continue
            if finding is not None:
                findings.append(finding)

        return findings, failed

    def _aggregate(
        self,
        text: str,
        findings: list[Finding],
        failed: list[str],
        started: int,
        moderated_at: datetime,
    ) -> ModerationVerdict:
        categories = frozenset(f.category for f in findings)
        flagged = tuple(term for f in findings for term in f.terms)
        reason = REJECTED_PREFIX + "; ".join(f.clause for f in findings) if findings else ""

        return ModerationVerdict(
            is_approved=not categories,
            reason=reason,
            categories=categories,
            flagged_words=flagged,
            confidence=_confidence(text, findings, failed),
            content_length=len(text),
            processing_time=_elapsed(started),
            moderated_at=moderated_at,
            failed_detectors=tuple(failed),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _confidence(text: str, findings: list[Finding], failed: list[str]) -> float:
    length_factor = min(1.0, len(text.strip()) / _FULL_CONFIDENCE_LENGTH)
    if findings:
        certainty = max(f.certainty for f in findings)
        confidence = certainty * (0.85 + 0.15 * length_factor)
    else:
        confidence = 0.6 + 0.35 * length_factor
    if failed:
        confidence *= 0.5
    return round(max(0.01, min(1.0, confidence)), 4)


def _elapsed(started_ns: int) -> timedelta:
    elapsed_us = (time.perf_counter_ns() - started_ns) // 1000
    return timedelta(microseconds=max(1, elapsed_us))


def _add_violation(verdict: ModerationVerdict, clause: str) -> ModerationVerdict:
    reason = f"{verdict.reason}; {clause}" if verdict.reason else REJECTED_PREFIX + clause
    return replace(
        verdict,
        is_approved=False,
        reason=reason,
        categories=verdict.categories | {Category.SPAM},
    )


def _mask_root(match: re.Match[str]) -> str:
    root_len = len(match.group("root"))
    return "*" * root_len + match.group(0)[root_len:]


@lru_cache(maxsize=1)
def default_pipeline() -> ContentModerationPipeline:
    """Return the process-wide pipeline built on the default lexicon."""
    return ContentModerationPipeline()


def moderate(text: Optional[str]) -> ModerationVerdict:
    """Moderate *text* with the default pipeline."""
    return default_pipeline().moderate(text)
