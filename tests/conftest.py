"""
Shared fixtures for ReviewLens tests.
"""

import pandas as pd
import pytest

from reviewlens.data.fallback_reviews import load_fallback_reviews
from reviewlens.models.review import CategoryRating, RawReview


def build_raw_review(**overrides) -> RawReview:
    """RawReview with sensible defaults; keyword args override fields."""
    fields = {
        "id": 1,
        "listing_id": 101,
        "listing_name": "Shoreditch Loft",
        "channel": "airbnb",
        "type": "guest-to-host",
        "status": "published",
        "rating": 9.0,
        "public_review": "Lovely stay",
        "submitted_at": "2024-08-21T22:45:14Z",
        "private_review": None,
        "review_category": [CategoryRating("cleanliness", 9)],
        "guest_name": "Alex",
        "stay_date": "2024-08-15",
    }
    fields.update(overrides)
    return RawReview(**fields)


@pytest.fixture
def make_raw_review():
    """Factory fixture for RawReview objects."""
    return build_raw_review


@pytest.fixture
def fallback_reviews():
    """Fresh copy of the bundled dataset."""
    return load_fallback_reviews()


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2025-01-02T03:04:05Z."""
    instant = pd.Timestamp("2025-01-02T03:04:05Z")
    return lambda: instant
