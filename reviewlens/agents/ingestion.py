"""
Ingestion Agent.

Decides between live Hostaway reviews and the bundled fallback dataset,
and records why the fallback was used.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from reviewlens.agents.filtering import filter_reviews
from reviewlens.data.fallback_reviews import load_fallback_reviews
from reviewlens.models.listing import DataSource
from reviewlens.models.review import RawReview, ReviewQuery
from reviewlens.utils.hostaway_client import HostawayClient

logger = logging.getLogger(__name__)

NO_UPSTREAM_DATA = "Hostaway API returned no reviews"
UPSTREAM_DISABLED = "Upstream disabled by configuration"


@dataclass
class FetchResult:
    """Reviews selected for one request and where they came from."""
    reviews: List[RawReview] = field(default_factory=list)
    source: DataSource = DataSource.FALLBACK
    error: Optional[str] = None  # Why the upstream was not used
    dropped_records: int = 0  # Upstream records without a listing id


def describe_error(error: BaseException) -> str:
    """Display string for any exception, never empty."""
    message = str(error).strip()
    return message or type(error).__name__


class IngestionAgent:
    """
    Fetches reviews from Hostaway, falling back to the bundled dataset.

    Always produces a result: upstream failures become an advisory
    message on FetchResult.error instead of propagating. There is one
    upstream attempt per call and no state carried between calls.
    """

    def __init__(
        self,
        client: Optional[HostawayClient] = None,
        use_upstream: bool = True,
        fallback_loader: Callable[[], List[RawReview]] = load_fallback_reviews
    ):
        """
        Initialize ingestion agent.

        Args:
            client: Hostaway client (default built from settings)
            use_upstream: If False, go straight to the fallback dataset
            fallback_loader: Returns the fallback reviews
        """
        self.client = client or HostawayClient.from_settings()
        self.use_upstream = use_upstream
        self.fallback_loader = fallback_loader

        if use_upstream:
            logger.info("Initialized IngestionAgent in UPSTREAM mode")
        else:
            logger.info("Initialized IngestionAgent in FALLBACK mode")

    async def fetch_reviews(self, query: Optional[ReviewQuery] = None) -> FetchResult:
        """
        Fetch reviews matching the query.

        Args:
            query: Selection criteria, passed upstream and re-applied locally

        Returns:
            FetchResult tagged with the data source used
        """
        query = query or ReviewQuery()

        if not self.use_upstream:
            return self._fallback(query, UPSTREAM_DISABLED)

        dropped = 0
        try:
            batch = await self.client.fetch_reviews(query)
            dropped = batch.dropped_records
            if batch.reviews:
                reviews = filter_reviews(batch.reviews, query)
                logger.info(f"Using {len(reviews)} upstream reviews")
                return FetchResult(
                    reviews=reviews,
                    source=DataSource.UPSTREAM,
                    dropped_records=dropped,
                )
            error = NO_UPSTREAM_DATA
        except Exception as e:
            error = describe_error(e)

        result = self._fallback(query, error)
        result.dropped_records = dropped
        return result

    def _fallback(self, query: ReviewQuery, error: Optional[str]) -> FetchResult:
        logger.warning(f"Falling back to bundled reviews: {error}")
        reviews = filter_reviews(self.fallback_loader(), query)
        return FetchResult(reviews=reviews, source=DataSource.FALLBACK, error=error)
