"""
Response Assembler.

Orders finalized listings and packages them with a global summary.
"""

import logging
from typing import Callable, Iterable, Optional, Sequence

import pandas as pd

from reviewlens.agents.aggregation import sort_listings
from reviewlens.models.listing import (
    DataSource,
    NormalizedListing,
    NormalizedReview,
    NormalizedReviewResponse,
    ResponseSummary,
)
from reviewlens.models.review import ReviewQuery
from reviewlens.utils.formatting import format_timestamp

logger = logging.getLogger(__name__)


class ResponseAssembler:
    """Builds the NormalizedReviewResponse payload."""

    def __init__(self, clock: Callable[[], pd.Timestamp] = lambda: pd.Timestamp.now(tz="UTC")):
        self.clock = clock

    def assemble(
        self,
        listings: Iterable[NormalizedListing],
        reviews: Sequence[NormalizedReview],
        data_source: DataSource,
        query: Optional[ReviewQuery] = None,
        upstream_error: Optional[str] = None
    ) -> NormalizedReviewResponse:
        """
        Package listings and summary.

        Args:
            listings: Finalized listings (any order)
            reviews: The filtered, normalized reviews behind the listings
            data_source: Upstream or fallback
            query: Criteria echoed back in summary.filters
            upstream_error: Advisory message when the upstream was unusable

        Returns:
            Response with listings sorted by average rating, best first
        """
        ordered = sort_listings(listings)
        channels = sorted({review.channel for review in reviews})
        query = query or ReviewQuery()

        summary = ResponseSummary(
            total_listings=len(ordered),
            total_reviews=len(reviews),
            channels=tuple(channels),
            generated_at=format_timestamp(self.clock()),
            data_source=data_source,
            start_date=query.start_date or None,
            end_date=query.end_date or None,
        )

        logger.info(
            f"Assembled response: {summary.total_listings} listings, "
            f"{summary.total_reviews} reviews, source={data_source.value}"
        )

        return NormalizedReviewResponse(
            listings=tuple(ordered),
            summary=summary,
            upstream_error=upstream_error or None,
        )
