"""
Filter Stage.

Applies listing, channel and date-range criteria to a review sequence.
Works on anything exposing listing_id, channel and submitted_at, so the
same predicates serve raw and normalized reviews.
"""

import logging
from typing import List, Optional, Sequence, TypeVar

from reviewlens.models.review import ReviewQuery
from reviewlens.utils.formatting import parse_timestamp

logger = logging.getLogger(__name__)

ReviewT = TypeVar("ReviewT")


def filter_reviews(reviews: Sequence[ReviewT], query: Optional[ReviewQuery]) -> List[ReviewT]:
    """
    Order-preserving subsequence of reviews matching every criterion.

    Args:
        reviews: RawReview or NormalizedReview objects
        query: Selection criteria (None or empty keeps everything)

    Returns:
        Matching reviews, in input order
    """
    if query is None or query.is_empty():
        return list(reviews)

    wanted_listing = str(query.listing_id) if query.has_listing_id() else None
    wanted_channel = query.channel.lower() if query.channel else None
    start = parse_timestamp(query.start_date) if query.start_date else None
    end = parse_timestamp(query.end_date) if query.end_date else None
    check_dates = query.has_date_bounds()

    kept = []
    for review in reviews:
        if wanted_listing is not None and str(review.listing_id) != wanted_listing:
            continue

        if wanted_channel is not None:
            if not review.channel or review.channel.lower() != wanted_channel:
                continue

        if check_dates:
            submitted = parse_timestamp(review.submitted_at)
            # Undated reviews cannot be range-checked
            if submitted is None:
                continue
            if start is not None and submitted < start:
                continue
            if end is not None and submitted > end:
                continue

        kept.append(review)

    logger.debug(f"Filtered {len(reviews)} reviews down to {len(kept)}")
    return kept
