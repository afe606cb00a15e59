"""Tests for the REST API."""

from fastapi.testclient import TestClient

from web.backend.app.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root():
    data = client.get("/").json()
    assert data["name"] == "RTW Integrity API"


# --- Moderation Tests ---


def test_moderate_approved():
    response = client.post("/api/moderation/moderate", json={"text": "Great team and fair pay"})
    assert response.status_code == 200
    data = response.json()
    assert data["is_approved"] is True
    assert data["reason"] == ""
    assert data["categories"] == []


def test_moderate_rejected():
    data = client.post("/api/moderation/moderate", json={"text": "This company is sh*t"}).json()
    assert data["is_approved"] is False
    assert data["categories"] == ["Profanity"]
    assert data["flagged_words"] == ["shit"]
    assert data["reason"].startswith("Content rejected: ")


def test_moderate_empty():
    data = client.post("/api/moderation/moderate", json={}).json()
    assert data["is_approved"] is False
    assert data["categories"] == ["Empty"]
    assert data["confidence"] == 0.0


def test_bulk_keeps_order():
    response = client.post(
        "/api/moderation/bulk",
        json={"texts": ["Nice office", "Call me at 555-1234", None]},
    )
    assert response.status_code == 200
    data = response.json()
    assert [v["is_approved"] for v in data] == [True, False, False]
    assert data[1]["categories"] == ["PersonalInfo"]
    assert data[2]["categories"] == ["Empty"]


def test_sanitize():
    data = client.post("/api/moderation/sanitize", json={"text": "<i>Fucking</i> awful"}).json()
    assert data["text"] == "****ing awful"


# --- Scoring Tests ---


def test_score_review():
    response = client.post("/api/scoring/review", json={"upvotes": 1, "downvotes": 0})
    assert response.status_code == 200
    assert response.json()["helpfulness_score"] == 50.0


def test_score_review_rejects_negative_votes():
    response = client.post("/api/scoring/review", json={"upvotes": -1, "downvotes": 0})
    assert response.status_code == 422


def test_trust_tier():
    response = client.post(
        "/api/scoring/trust-tier", json={"average_rating": 4.5, "verified_percentage": 100}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["trust_tier"] == "VeryHigh"
    assert float(data["trust_score"]) == 120.0


def test_hiring_rate():
    data = client.post(
        "/api/scoring/hiring-rate", json={"successful_hires": 3, "total_postings": 10}
    ).json()
    assert data["hiring_rate"] == "0.3"


def test_hiring_rate_without_postings():
    data = client.post(
        "/api/scoring/hiring-rate", json={"successful_hires": 0, "total_postings": 0}
    ).json()
    assert float(data["hiring_rate"]) == 0.0


def test_score_company():
    response = client.post(
        "/api/scoring/company",
        json={
            "now": "2026-10-19T12:00:00Z",
            "contributions": [
                {"rating": 4, "submitted_at": "2026-10-19T08:00:00Z", "is_verified": True},
                {"rating": 4, "submitted_at": "2026-05-01T08:00:00Z", "comment_type": "Culture"},
                {"rating": 1, "submitted_at": "2026-10-18T08:00:00Z", "is_published": False},
            ],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert float(data["weighted_rating"]) == 4.0
    assert data["total_reviews"] == 2
    assert data["verified_reviews"] == 1
    assert float(data["verified_percentage"]) == 50.0
    assert data["trust_tier"] == "VeryHigh"
    assert data["rating_distribution"] == {"4": 2}


def test_score_company_rejects_out_of_range_rating():
    response = client.post(
        "/api/scoring/company",
        json={"contributions": [{"rating": 7, "submitted_at": "2026-10-19T08:00:00Z"}]},
    )
    assert response.status_code == 422
