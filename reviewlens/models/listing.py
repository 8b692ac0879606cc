"""
Normalized data model.

Presentation-ready reviews, per-listing analytics and the top-level
response payload. All records are immutable once built; to_dict()
produces the camelCase JSON shape consumed downstream.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class DataSource(str, Enum):
    """Where the reviews behind a response came from."""
    UPSTREAM = "hostaway-api"
    FALLBACK = "mock-data"


@dataclass(frozen=True)
class NormalizedCategoryRating:
    key: str  # Upstream category key, e.g. "check_in"
    label: str  # Display label, e.g. "Check In"
    rating: Optional[float]
    rating_out_of_five: Optional[float]

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "rating": self.rating,
            "ratingOutOfFive": self.rating_out_of_five,
        }


@dataclass(frozen=True)
class NormalizedReview:
    """
    One review, derived 1:1 from a RawReview.

    Identity and listing id are always strings so they can be used as
    grouping keys regardless of how the upstream typed them.
    """
    id: str
    listing_id: str
    listing_name: str
    channel: str
    type: str
    status: str
    rating: Optional[float]
    rating_out_of_five: Optional[float]
    categories: Tuple[NormalizedCategoryRating, ...]
    submitted_at: str  # Canonical ISO string, or the original if unparseable
    guest_name: str
    public_review: Optional[str]
    private_review: Optional[str]
    stay_date: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "listingId": self.listing_id,
            "listingName": self.listing_name,
            "channel": self.channel,
            "type": self.type,
            "status": self.status,
            "rating": self.rating,
            "ratingOutOfFive": self.rating_out_of_five,
            "categories": [c.to_dict() for c in self.categories],
            "submittedAt": self.submitted_at,
            "guestName": self.guest_name,
            "publicReview": self.public_review,
            "privateReview": self.private_review,
            "stayDate": self.stay_date,
        }


@dataclass(frozen=True)
class RatingDistribution:
    """Counts of rated reviews per score band (0-10 scale)."""
    low: int = 0  # < 5
    adequate: int = 0  # [5, 7)
    good: int = 0  # [7, 8.5)
    great: int = 0  # [8.5, 9.5)
    exceptional: int = 0  # >= 9.5

    def total(self) -> int:
        return self.low + self.adequate + self.good + self.great + self.exceptional

    def to_dict(self) -> dict:
        return {
            "low": self.low,
            "adequate": self.adequate,
            "good": self.good,
            "great": self.great,
            "exceptional": self.exceptional,
        }


@dataclass(frozen=True)
class TimeSeriesPoint:
    period: str  # YYYY-MM (UTC)
    average_rating: Optional[float]
    review_count: int  # Rated reviews in the period

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "averageRating": self.average_rating,
            "reviewCount": self.review_count,
        }


@dataclass(frozen=True)
class NormalizedListing:
    """Aggregated analytics for one listing."""
    listing_id: str
    listing_name: str
    channel: str
    total_reviews: int
    average_rating: Optional[float]
    average_rating_out_of_five: Optional[float]
    category_averages: Dict[str, float]
    last_review_date: Optional[str]
    rating_distribution: RatingDistribution
    time_series: Tuple[TimeSeriesPoint, ...]
    reviews: Tuple[NormalizedReview, ...]  # Newest first

    def to_dict(self) -> dict:
        return {
            "listingId": self.listing_id,
            "listingName": self.listing_name,
            "channel": self.channel,
            "totalReviews": self.total_reviews,
            "averageRating": self.average_rating,
            "averageRatingOutOfFive": self.average_rating_out_of_five,
            "categoryAverages": dict(self.category_averages),
            "lastReviewDate": self.last_review_date,
            "ratingDistribution": self.rating_distribution.to_dict(),
            "timeSeries": [point.to_dict() for point in self.time_series],
            "reviews": [review.to_dict() for review in self.reviews],
        }


@dataclass(frozen=True)
class ResponseSummary:
    total_listings: int
    total_reviews: int
    channels: Tuple[str, ...]
    generated_at: str
    data_source: DataSource
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "totalListings": self.total_listings,
            "totalReviews": self.total_reviews,
            "channels": list(self.channels),
            "generatedAt": self.generated_at,
            "dataSource": self.data_source.value,
            "filters": {
                "startDate": self.start_date,
                "endDate": self.end_date,
            },
        }


@dataclass(frozen=True)
class NormalizedReviewResponse:
    listings: Tuple[NormalizedListing, ...]
    summary: ResponseSummary
    upstream_error: Optional[str] = None

    def to_dict(self) -> dict:
        payload = {
            "listings": [listing.to_dict() for listing in self.listings],
            "summary": self.summary.to_dict(),
        }
        if self.upstream_error:
            payload["upstreamError"] = self.upstream_error
        return payload
