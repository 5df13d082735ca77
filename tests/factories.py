"""Builders for API-shaped payloads used across the tests."""

from typing import Optional


def review_payload(review_id: str, status: Optional[str], rating: int = 4, **extra) -> dict:
    payload = {
        "id": review_id,
        "user": {"id": f"author-{review_id}", "name": f"Author {review_id}"},
        "isAnonymous": False,
        "rating": rating,
        "content": f"Review {review_id}",
        "moderationStatus": status,
        "createdAt": "2024-01-15T12:00:00Z",
    }
    payload.update(extra)
    return payload


def complaint_payload(complaint_id: str, status: Optional[str], **extra) -> dict:
    payload = {
        "id": complaint_id,
        "user": {"id": f"author-{complaint_id}", "name": f"Author {complaint_id}"},
        "isAnonymous": "false",
        "subject": f"Subject {complaint_id}",
        "content": f"Complaint {complaint_id}",
        "status": status,
        "createdAt": "2024-02-01T09:30:00Z",
    }
    payload.update(extra)
    return payload


def businesses_with(key: str, items: list) -> dict:
    """Wrap items as a ``user.businesses[0].<key>`` GraphQL response."""
    return {"data": {"user": {"businesses": [{"id": "biz-1", "name": "Harbour Bakery", key: items}]}}}
