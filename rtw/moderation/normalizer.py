"""De-obfuscation of review text for matching.

``normalize`` lower-cases the text and scans it word by word, undoing the
usual ways people mask profanity:

- letter substitutes inside a word: ``sh!t`` -> ``shit``, ``@ss`` -> ``ass``
- runs of ``*`` after at least one letter, resolved against the lexicon's
  profanity roots: ``f**k`` -> ``fuck``, ``a**`` -> ``ass``,
  ``f***ing`` -> ``fucking``

The result is only ever used for matching.  Lengths, offsets and anything
reported back to the caller come from the raw text.
"""

from __future__ import annotations

from dataclasses import dataclass

from rtw.moderation.lexicon import Lexicon

MASK = "*"

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'", "`": "'"})


@dataclass(frozen=True)
class NormalizedText:
    """Lower-cased, de-obfuscated copy of a text."""

    text: str
    deobfuscated: tuple[str, ...] = ()  # words rewritten by the scan, in order

    def __str__(self) -> str:
        return self.text


def normalize(text: str, lexicon: Lexicon) -> NormalizedText:
    """Return the de-obfuscated form of *text* for matching."""
    lowered = text.lower().translate(_APOSTROPHES)
    substitutes = lexicon.substitutions

    out: list[str] = []
    rewritten: list[str] = []
    word: list[str] = []

    def flush() -> None:
        if not word:
            return
        raw = "".join(word)
        resolved = _resolve_word(raw, lexicon)
        if resolved != raw:
            rewritten.append(resolved)
        out.append(resolved)
        word.clear()

    for ch in lowered:
        if ch.isalpha() or ch == MASK or ch in substitutes:
            word.append(ch)
        else:
            flush()
            out.append(ch)
    flush()

    return NormalizedText(text="".join(out), deobfuscated=tuple(rewritten))


def _resolve_word(word: str, lexicon: Lexicon) -> str:
    if not any(c.isalpha() for c in word):
        return word
    word = _substitute(word, lexicon.substitutions)
    if MASK not in word:
        return word
    # Leftover substitutes at the edges are plain punctuation ("f**k!").
    start = next(i for i, c in enumerate(word) if c.isalpha())
    end = len(word)
    while end > start and not (word[end - 1].isalpha() or word[end - 1] == MASK):
        end -= 1
    resolved = unmask(word[start:end], lexicon)
    if resolved is None:
        return word
    return word[:start] + resolved + word[end:]


def _substitute(word: str, substitutes) -> str:
    """Replace substitute characters that sit inside a word.

    A run of substitutes is replaced when a letter follows it and either a
    letter precedes it, or it is a single character at the start of the word.
    """
    chars = list(word)
    i = 0
    n = len(chars)
    while i < n:
        if chars[i] not in substitutes or chars[i] == MASK:
            i += 1
            continue
        j = i
        while j < n and chars[j] in substitutes and chars[j] != MASK:
            j += 1
        followed = j < n and chars[j].isalpha()
        preceded = i > 0 and chars[i - 1].isalpha()
        leading = i == 0 and j - i == 1
        if followed and (preceded or leading):
            for k in range(i, j):
                chars[k] = substitutes[chars[k]]
        i = j
    return "".join(chars)


def unmask(word: str, lexicon: Lexicon) -> str | None:
    """Resolve a masked word like ``f***ing`` against the profanity roots.

    Each ``*`` stands for exactly one letter.  A root matches when it fits the
    start of the word and whatever follows is empty or a known suffix with no
    masking in it.  Longer roots are tried first; among roots of the same
    length the lexicon order decides.  Returns ``None`` when nothing fits.
    """
    if not word or not word[0].isalpha() or MASK not in word:
        return None
    if not all(c.isalpha() or c == MASK for c in word):
        return None

    suffixes = set(lexicon.suffixes)
    roots = sorted(lexicon.profanity_roots, key=len, reverse=True)
    for root in roots:
        if len(root) > len(word):
            continue
        head, tail = word[: len(root)], word[len(root):]
        if MASK in tail or (tail and tail not in suffixes):
            continue
        if MASK in head and _fits(head, root):
            return root + tail
    return None


def _fits(masked: str, root: str) -> bool:
    return all(m == MASK or m == r for m, r in zip(masked, root))
