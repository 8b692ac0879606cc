"""
Per-Review Normalizer.

Converts canonical raw reviews into presentation-ready reviews:
ratings rounded, a five-point rating derived, category keys labelled,
timestamps made canonical.
"""

import logging
from typing import Iterable, List, Optional

from reviewlens.agents.mapping import resolve_number
from reviewlens.models.listing import NormalizedCategoryRating, NormalizedReview
from reviewlens.models.review import CategoryRating, RawReview
from reviewlens.utils.formatting import category_label, round_to, to_iso_string
import config.settings as settings

logger = logging.getLogger(__name__)


def normalize_rating(value) -> Optional[float]:
    """Round a rating to the configured precision; None stays None."""
    number = resolve_number(value)
    if number is None:
        return None
    return round_to(number)


def out_of_five(rating: Optional[float]) -> Optional[float]:
    """Convert a 0-10 rating to the five-point scale."""
    if rating is None:
        return None
    return round_to(rating / 2)


class ReviewNormalizer:
    """
    Normalizes RawReview objects 1:1.

    Total over RawReview: every input produces exactly one output, bad
    values degrade (null rating, original date string) rather than raise.
    Ratings are trusted as-is; out-of-range values are not clamped.
    """

    def __init__(
        self,
        default_channel: str = settings.DEFAULT_CHANNEL,
        default_guest_name: str = settings.DEFAULT_GUEST_NAME
    ):
        self.default_channel = default_channel
        self.default_guest_name = default_guest_name

    def normalize(self, review: RawReview) -> NormalizedReview:
        rating = normalize_rating(review.rating)
        listing_id = str(review.listing_id)

        return NormalizedReview(
            id=str(review.id),
            listing_id=listing_id,
            listing_name=review.listing_name or f"Listing {listing_id}",
            channel=review.channel or self.default_channel,
            type=review.type,
            status=review.status,
            rating=rating,
            rating_out_of_five=out_of_five(rating),
            categories=tuple(self._normalize_category(c) for c in review.review_category or []),
            submitted_at=to_iso_string(review.submitted_at),
            guest_name=review.guest_name or self.default_guest_name,
            public_review=review.public_review,
            private_review=review.private_review,
            stay_date=to_iso_string(review.stay_date) if review.stay_date else None,
        )

    def normalize_all(self, reviews: Iterable[RawReview]) -> List[NormalizedReview]:
        normalized = [self.normalize(review) for review in reviews]
        logger.debug(f"Normalized {len(normalized)} reviews")
        return normalized

    def _normalize_category(self, category: CategoryRating) -> NormalizedCategoryRating:
        key = str(category.category)
        rating = normalize_rating(category.rating)
        return NormalizedCategoryRating(
            key=key,
            label=category_label(key),
            rating=rating,
            rating_out_of_five=out_of_five(rating),
        )
