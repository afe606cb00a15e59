"""Detectors -- independent checks run over every submitted text.

Each detector is a plain function ``(raw, normalized, lexicon) -> Finding | None``.
They never look at each other's results; the pipeline runs all of them and
folds the findings into one verdict.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from rtw.moderation.lexicon import Lexicon
from rtw.moderation.models import Category, Finding
from rtw.moderation.normalizer import NormalizedText

Detector = Callable[[str, NormalizedText, Lexicon], Optional[Finding]]

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*\.[A-Za-z]{2,}"
)

# Digit groups separated by single spaces or dashes, optionally with a
# "+<country>" prefix and a parenthesised area code.  Digit counts are checked
# in code.
_PHONE_CANDIDATE = re.compile(
    r"(?<![\w.+])(?:\+\d{1,3}[ -]?)?(?:\(\d{1,4}\)[ -]?)?\d+(?:[ -]\d+)*"
)
_RANGE = re.compile(r"^(\d{4,})[ -](\d{4,})$")
_ISO_DATE = re.compile(r"^(?:19|20)\d{2}-(\d{2})-(\d{2})$")
_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})[ ./-](\d{1,2})[ ./-](?:19|20)\d{2}$")
_MIN_PHONE_DIGITS = 7
_MAX_PHONE_DIGITS = 15

_URL_PATTERN = re.compile(r"https?://\S+|\bwww\.\S+", re.IGNORECASE)
_EXCLAMATION_BURST = re.compile(r"!{2,}")
_SHOUT_BURST = re.compile(r"[!*]{2,}")

# Certainty of each kind of match, used for the verdict's confidence.
EXACT_MATCH = 0.95
DEOBFUSCATED_MATCH = 0.85
PATTERN_MATCH = 0.9
HEURISTIC_MATCH = 0.7


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------


def detect_profanity(raw: str, normalized: NormalizedText, lexicon: Lexicon) -> Optional[Finding]:
    """Match profanity roots (with inflections) in the de-obfuscated text."""
    terms = tuple(m.group("root") for m in lexicon.profanity_pattern.finditer(normalized.text))
    if not terms:
        return None

    certainty = EXACT_MATCH
    if normalized.deobfuscated:
        rewritten = " ".join(normalized.deobfuscated)
        if any(t in rewritten for t in terms):
            certainty = DEOBFUSCATED_MATCH

    return Finding(
        category=Category.PROFANITY,
        clause="contains profanity",
        terms=terms,
        certainty=certainty,
    )


def detect_personal_info(raw: str, normalized: NormalizedText, lexicon: Lexicon) -> Optional[Finding]:
    """Find email addresses and phone numbers in the raw text."""
    emails = _EMAIL_PATTERN.findall(raw)
    phones = find_phone_numbers(raw)
    if not emails and not phones:
        return None

    kinds = []
    if emails:
        kinds.append("email address" if len(emails) == 1 else f"{len(emails)} email addresses")
    if phones:
        kinds.append("phone number" if len(phones) == 1 else f"{len(phones)} phone numbers")

    return Finding(
        category=Category.PERSONAL_INFO,
        clause=f"contains personal information ({', '.join(kinds)})",
        certainty=EXACT_MATCH,
    )


def find_phone_numbers(text: str) -> list[str]:
    """Return the substrings of *text* that look like phone numbers."""
    found = []
    for m in _PHONE_CANDIDATE.finditer(text):
        candidate = m.group(0).strip()
        digits = sum(c.isdigit() for c in candidate)
        if not _MIN_PHONE_DIGITS <= digits <= _MAX_PHONE_DIGITS:
            continue
        if _is_range(candidate) or _is_date(candidate):
            continue
        found.append(candidate)
    return found


def _is_range(candidate: str) -> bool:
    # "2019-2021", "5000 6000", "8000-12000": ranges, not numbers to call
    rng = _RANGE.match(candidate)
    if not rng:
        return False
    low, high = rng.group(1), rng.group(2)
    if len(low) == len(high):
        return True
    return not low.startswith("0") and int(low) < int(high) <= int(low) * 10


def _is_date(candidate: str) -> bool:
    iso = _ISO_DATE.match(candidate)
    if iso:
        month, day = int(iso.group(1)), int(iso.group(2))
        return 1 <= month <= 12 and 1 <= day <= 31
    dmy = _DAY_MONTH_YEAR.match(candidate)
    if dmy:
        first, second = int(dmy.group(1)), int(dmy.group(2))
        # Either day-month or month-day order.
        return 1 <= first <= 31 and 1 <= second <= 31 and min(first, second) <= 12
    return False


def detect_spam(raw: str, normalized: NormalizedText, lexicon: Lexicon) -> Optional[Finding]:
    """Flag links and shouting."""
    clauses = []
    certainty = 0.0

    if _URL_PATTERN.search(raw):
        clauses.append("contains a URL")
        certainty = EXACT_MATCH

    if _is_shouting(raw, lexicon):
        clauses.append("looks like spam (excessive exclamation or shouting)")
        certainty = max(certainty, HEURISTIC_MATCH)

    if not clauses:
        return None
    return Finding(category=Category.SPAM, clause="; ".join(clauses), certainty=certainty)


def _is_shouting(raw: str, lexicon: Lexicon) -> bool:
    if _EXCLAMATION_BURST.search(raw):
        return True
    letters = [c for c in raw if c.isalpha()]
    if len(letters) < lexicon.min_letters:
        return False
    upper_ratio = sum(c.isupper() for c in letters) / len(letters)
    return upper_ratio > lexicon.caps_ratio and bool(_SHOUT_BURST.search(raw))


def detect_threat(raw: str, normalized: NormalizedText, lexicon: Lexicon) -> Optional[Finding]:
    if any(p.search(normalized.text) for p in lexicon.threat_patterns):
        return Finding(
            category=Category.THREAT,
            clause="contains threatening language",
            certainty=PATTERN_MATCH,
        )
    return None


def detect_discrimination(raw: str, normalized: NormalizedText, lexicon: Lexicon) -> Optional[Finding]:
    if any(p.search(normalized.text) for p in lexicon.discrimination_patterns):
        return Finding(
            category=Category.DISCRIMINATION,
            clause="contains discriminatory language",
            certainty=PATTERN_MATCH,
        )
    return None


# Run order is also the order of reason clauses and flagged words.
DEFAULT_DETECTORS: tuple[tuple[str, Category, Detector], ...] = (
    ("profanity", Category.PROFANITY, detect_profanity),
    ("personal_info", Category.PERSONAL_INFO, detect_personal_info),
    ("spam", Category.SPAM, detect_spam),
    ("threat", Category.THREAT, detect_threat),
    ("discrimination", Category.DISCRIMINATION, detect_discrimination),
)
