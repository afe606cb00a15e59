"""Tests for the rtw command line."""

import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from rtw import __version__
from rtw.cli import main


def _run(*args):
    return CliRunner().invoke(main, list(args))


def test_version():
    result = _run("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


# --- Moderation commands ---


def test_moderate_approved():
    result = _run("moderate", "Management could be better")
    assert result.exit_code == 0
    assert "approved" in result.output


def test_moderate_rejected():
    result = _run("moderate", "This company is f**k")
    assert result.exit_code == 1
    assert "rejected" in result.output
    assert "Profanity" in result.output


def test_moderate_with_missing_lexicon():
    result = _run("moderate", "hello", "--lexicon", "/nonexistent/lexicon.yaml")
    assert result.exit_code == 2
    assert "Lexicon error" in result.output


def test_sanitize():
    result = _run("sanitize", "<b>This shit</b> is bad")
    assert result.exit_code == 0
    assert "This **** is bad" in result.output


def test_lexicon_summary():
    result = _run("lexicon")
    assert result.exit_code == 0
    assert "profanity roots" in result.output


# --- Scoring commands ---


def test_score_review():
    result = _run("score-review", "10", "0")
    assert result.exit_code == 0
    assert "90.91" in result.output


def test_score_review_rejects_negative_votes():
    result = _run("score-review", "--", "-1", "0")
    assert result.exit_code != 0


def test_trust_tier():
    result = _run("trust-tier", "4.5", "100")
    assert result.exit_code == 0
    assert "VeryHigh" in result.output


def test_hiring_rate():
    result = _run("hiring-rate", "3", "10")
    assert result.exit_code == 0
    assert result.output.strip() == "0.3"


def test_score_company():
    reviews = [
        {"rating": 5, "submitted_at": "2026-10-19T00:00:00Z", "is_verified": True},
        {"rating": 4, "submitted_at": "2026-10-01T00:00:00Z", "is_verified": True},
        {"rating": 1, "submitted_at": "2026-01-01T00:00:00Z", "is_active": False},
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "reviews.yaml"
        path.write_text(yaml.dump(reviews))
        result = _run("score-company", str(path), "--now", "2026-10-19T12:00:00Z")

    assert result.exit_code == 0, result.output
    assert "Weighted rating" in result.output
    assert "2 counted reviews" in result.output
    assert "VeryHigh" in result.output


def test_score_company_missing_file():
    result = _run("score-company", "/nonexistent/reviews.yaml")
    assert result.exit_code == 2


def test_moderate_with_malformed_lexicon():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bad.yaml"
        path.write_text("profanity:\n  - fuck\n")
        result = _run("moderate", "hello", "--lexicon", str(path))

    assert result.exit_code == 2
    assert "Lexicon error" in result.output
