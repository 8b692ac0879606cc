"""
Review data model.

Represents raw reviews in the canonical upstream shape, plus the
query criteria used to select them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class CategoryRating:
    """A sub-score attached to a review (e.g. cleanliness)."""
    category: str  # Free-text category key, e.g. "check_in"
    rating: Optional[float] = None  # Same scale as the overall rating

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryRating":
        return cls(category=data["category"], rating=data.get("rating"))

    def to_dict(self) -> dict:
        return {"category": self.category, "rating": self.rating}


@dataclass
class RawReview:
    """
    Review in the canonical upstream shape.

    Produced by the record mapper for upstream data, or loaded directly
    from the fallback dataset. Field values are not validated: ratings are
    on a 0-10 scale by convention only, and status/type are free text.
    """
    id: int
    listing_id: Union[int, str]  # Numeric upstream, but compared as a string
    listing_name: str
    channel: Optional[str]  # None falls back to the default channel label
    type: str
    status: str
    rating: Optional[float]
    public_review: Optional[str]
    submitted_at: str  # Any parseable date/time string
    private_review: Optional[str] = None
    review_category: List[CategoryRating] = field(default_factory=list)
    guest_name: Optional[str] = None
    stay_date: Optional[str] = None
    language: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RawReview":
        """Create RawReview from a camelCase document (fallback dataset shape)."""
        return cls(
            id=data["id"],
            listing_id=data["listingId"],
            listing_name=data["listingName"],
            channel=data.get("channel"),
            type=data.get("type", ""),
            status=data.get("status", ""),
            rating=data.get("rating"),
            public_review=data.get("publicReview"),
            private_review=data.get("privateReview"),
            review_category=[
                CategoryRating.from_dict(item)
                for item in data.get("reviewCategory") or []
            ],
            submitted_at=data["submittedAt"],
            guest_name=data.get("guestName"),
            stay_date=data.get("stayDate"),
            language=data.get("language"),
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable camelCase dict."""
        return {
            "id": self.id,
            "listingId": self.listing_id,
            "listingName": self.listing_name,
            "channel": self.channel,
            "type": self.type,
            "status": self.status,
            "rating": self.rating,
            "publicReview": self.public_review,
            "privateReview": self.private_review,
            "reviewCategory": [c.to_dict() for c in self.review_category],
            "submittedAt": self.submitted_at,
            "guestName": self.guest_name,
            "stayDate": self.stay_date,
            "language": self.language,
        }


@dataclass
class ReviewQuery:
    """
    Criteria for selecting reviews.

    Dates are expected to be already validated as parseable by the caller.
    Empty values mean "no constraint".
    """
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    listing_id: Optional[Union[int, str]] = None
    channel: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.start_date or self.end_date or self.has_listing_id() or self.channel)

    def has_listing_id(self) -> bool:
        return self.listing_id is not None and str(self.listing_id) != ""

    def has_date_bounds(self) -> bool:
        return bool(self.start_date or self.end_date)

    def to_params(self) -> dict:
        """Non-empty criteria as upstream query parameters."""
        params = {}
        if self.start_date:
            params["startDate"] = self.start_date
        if self.end_date:
            params["endDate"] = self.end_date
        if self.has_listing_id():
            params["listingId"] = str(self.listing_id)
        if self.channel:
            params["channel"] = self.channel
        return params
