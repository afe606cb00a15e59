"""Review moderation -- decides whether submitted text may be published.

Rule and pattern based: a lexicon of profanity roots and phrase patterns, a
de-obfuscating normalizer, and a fixed set of independent detectors.
"""

from rtw.moderation.lexicon import Lexicon, LexiconError, build_lexicon, default_lexicon, load_lexicon
from rtw.moderation.models import Category, Finding, ModerationVerdict
from rtw.moderation.normalizer import NormalizedText, normalize
from rtw.moderation.pipeline import ContentModerationPipeline, default_pipeline, moderate

__all__ = [
    "Category",
    "ContentModerationPipeline",
    "Finding",
    "Lexicon",
    "LexiconError",
    "ModerationVerdict",
    "NormalizedText",
    "build_lexicon",
    "default_lexicon",
    "default_pipeline",
    "load_lexicon",
    "moderate",
    "normalize",
]
