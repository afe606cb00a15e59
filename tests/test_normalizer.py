"""Tests for the de-obfuscating normalizer."""

from rtw.moderation.lexicon import build_lexicon, default_lexicon
from rtw.moderation.normalizer import normalize, unmask


def _norm(text: str) -> str:
    return normalize(text, default_lexicon()).text


# --- Masked words ---


def test_masked_words_resolve_to_roots():
    assert _norm("f**k") == "fuck"
    assert _norm("sh*t") == "shit"
    assert _norm("a**") == "ass"
    assert _norm("f***") == "fuck"
    assert _norm("a**hole") == "asshole"


def test_masked_root_keeps_known_suffix():
    assert _norm("f***ing") == "fucking"
    assert _norm("sh*tty") == "shitty"


def test_masking_is_case_insensitive():
    assert _norm("This company is F**K") == "this company is fuck"
    assert _norm("S**t working conditions") == "shit working conditions"


def test_trailing_punctuation_is_kept():
    assert _norm("what a f**k!") == "what a fuck!"
    assert _norm("(sh*t)") == "(shit)"


def test_unresolvable_mask_is_left_alone():
    assert _norm("f**x") == "f**x"
    assert _norm("5 * 3") == "5 * 3"


def test_lexicon_order_breaks_ties():
    # "s**t" fits both "shit" and "slut"; the lexicon lists "shit" first.
    assert unmask("s**t", default_lexicon()) == "shit"


def test_unmask_requires_leading_letter_and_mask():
    lexicon = default_lexicon()
    assert unmask("**ck", lexicon) is None
    assert unmask("hello", lexicon) is None
    assert unmask("f***", lexicon) == "fuck"


# --- Substitutions ---


def test_substitutes_inside_words():
    assert _norm("sh!t") == "shit"
    assert _norm("@ss") == "ass"
    assert _norm("a$$hole") == "asshole"
    assert _norm("w0rk") == "work"


def test_trailing_and_leading_bursts_are_not_substituted():
    assert _norm("great!!") == "great!!"
    assert _norm("!!!urgent!!!") == "!!!urgent!!!"


def test_numbers_without_letters_are_untouched():
    assert _norm("rated 5 out of 10") == "rated 5 out of 10"
    assert _norm("covid19") == "covid19"


def test_typographic_apostrophes_are_folded():
    assert _norm("Women don’t belong") == "women don't belong"


# --- Result shape ---


def test_deobfuscated_words_are_recorded():
    result = normalize("This f**k and sh!t", default_lexicon())
    assert result.deobfuscated == ("fuck", "shit")
    assert str(result) == "this fuck and shit"


def test_clean_text_has_no_rewrites():
    result = normalize("Management could be better", default_lexicon())
    assert result.text == "management could be better"
    assert result.deobfuscated == ()


def test_normalizer_uses_the_given_lexicon():
    lexicon = build_lexicon({"profanity": {"roots": ["heck"]}, "substitutions": {"3": "e"}})
    assert normalize("h**k", lexicon).text == "heck"
    assert normalize("h3ck", lexicon).text == "heck"
    assert normalize("f**k", lexicon).text == "f**k"
