"""Lexicon -- the read-only word lists and patterns the detectors match against.

A lexicon is built once (usually from the bundled ``lexicon.yaml``) and then
shared by every pipeline in the process.  It is a frozen value: patterns are
compiled up front and all collections are tuples or read-only mappings.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

BUNDLED_LEXICON = Path(__file__).with_name("lexicon.yaml")
LEXICON_ENV_VAR = "RTW_LEXICON_PATH"


class LexiconError(ValueError):
    """Raised when a lexicon file or mapping cannot be turned into a Lexicon."""


@dataclass(frozen=True)
class Lexicon:
    """Immutable tables used by the normalizer and the detectors."""

    profanity_roots: tuple[str, ...]
    suffixes: tuple[str, ...] = ()
    substitutions: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    threat_patterns: tuple[re.Pattern[str], ...] = ()
    discrimination_patterns: tuple[re.Pattern[str], ...] = ()
    caps_ratio: float = 0.7
    min_letters: int = 8
    name: str = "unnamed"
    version: str = "1.0.0"
    source: str = "<dict>"

    @property
    def profanity_pattern(self) -> re.Pattern[str]:
        return _profanity_pattern(self.profanity_roots, self.suffixes)

    def summary(self) -> str:
        return (
            f"{self.name} v{self.version}: {len(self.profanity_roots)} profanity roots, "
            f"{len(self.threat_patterns)} threat patterns, "
            f"{len(self.discrimination_patterns)} discrimination patterns"
        )


@lru_cache(maxsize=32)
def _profanity_pattern(roots: tuple[str, ...], suffixes: tuple[str, ...]) -> re.Pattern[str]:
    # Longest roots first so "asshole" wins over "ass".
    ordered = sorted(roots, key=len, reverse=True)
    alternation = "|".join(re.escape(r) for r in ordered)
    if suffixes:
        suffix_alt = "|".join(re.escape(s) for s in sorted(suffixes, key=len, reverse=True))
        return re.compile(rf"\b(?P<root>{alternation})(?:{suffix_alt})?\b")
    return re.compile(rf"\b(?P<root>{alternation})\b")


def build_lexicon(data: dict[str, Any], source: str = "<dict>") -> Lexicon:
    """Build a Lexicon from a parsed mapping (the shape of ``lexicon.yaml``)."""
    if not isinstance(data, dict):
        raise LexiconError(f"{source}: lexicon must be a mapping, got {type(data).__name__}")

    profanity = _section(data, "profanity", dict, source)
    roots = tuple(
        str(r).strip().lower() for r in _section(profanity, "roots", list, source, "profanity.") if str(r).strip()
    )
    if not roots:
        raise LexiconError(f"{source}: profanity.roots must list at least one word")
    suffixes = tuple(
        str(s).strip().lower() for s in _section(profanity, "suffixes", list, source, "profanity.") if str(s).strip()
    )

    substitutions: dict[str, str] = {}
    for char, letter in _section(data, "substitutions", dict, source).items():
        char, letter = str(char), str(letter).lower()
        if len(char) != 1 or len(letter) != 1 or not letter.isalpha():
            raise LexiconError(
                f"{source}: substitution {char!r} -> {letter!r} must map one character to one letter"
            )
        substitutions[char] = letter

    spam = _section(data, "spam", dict, source)
    try:
        caps_ratio = float(spam.get("caps_ratio", 0.7))
        min_letters = int(spam.get("min_letters", 8))
    except (TypeError, ValueError) as e:
        raise LexiconError(f"{source}: invalid spam settings: {e}") from e

    return Lexicon(
        profanity_roots=roots,
        suffixes=suffixes,
        substitutions=MappingProxyType(substitutions),
        threat_patterns=_compile_all(_section(data, "threats", list, source), "threats", source),
        discrimination_patterns=_compile_all(
            _section(data, "discrimination", list, source), "discrimination", source
        ),
        caps_ratio=caps_ratio,
        min_letters=min_letters,
        name=str(data.get("name", "unnamed")),
        version=str(data.get("version", "1.0.0")),
        source=source,
    )


def _section(data: dict[str, Any], key: str, kind: type, source: str, prefix: str = "") -> Any:
    """Return ``data[key]`` (empty when missing), checking it has the expected shape."""
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        expected = "mapping" if kind is dict else "list"
        raise LexiconError(f"{source}: {prefix}{key} must be a {expected}, got {type(value).__name__}")
    return value


def _compile_all(patterns: list[str], section: str, source: str) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for i, pattern in enumerate(patterns):
        if not isinstance(pattern, str):
            raise LexiconError(f"{source}: {section}[{i}] must be a string, got {type(pattern).__name__}")
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            raise LexiconError(f"{source}: {section}[{i}] is not a valid pattern: {e}") from e
    return tuple(compiled)


def load_lexicon(path: str | Path) -> Lexicon:
    """Load a lexicon from a YAML file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise LexiconError(f"Cannot read lexicon {path}: {e}") from e
    except yaml.YAMLError as e:
        raise LexiconError(f"Lexicon {path} is not valid YAML: {e}") from e

    lexicon = build_lexicon(data, source=str(path))
    logger.info("Loaded lexicon %s", lexicon.summary())
    return lexicon


@lru_cache(maxsize=1)
def default_lexicon() -> Lexicon:
    """Return the process-wide lexicon, loading it on first use.

    Honors ``RTW_LEXICON_PATH``; falls back to the bundled ``lexicon.yaml``.
    """
    return load_lexicon(os.environ.get(LEXICON_ENV_VAR) or BUNDLED_LEXICON)
