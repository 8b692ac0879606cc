"""
Pipeline Orchestrator.

Coordinates one request: ingestion, filtering, normalization,
aggregation and response assembly.
"""

import asyncio
import logging
from typing import Iterable, Optional

from reviewlens.agents.aggregation import ListingAggregator
from reviewlens.agents.assembly import ResponseAssembler
from reviewlens.agents.filtering import filter_reviews
from reviewlens.agents.ingestion import IngestionAgent
from reviewlens.agents.normalization import ReviewNormalizer
from reviewlens.models.listing import DataSource, NormalizedReviewResponse
from reviewlens.models.review import RawReview, ReviewQuery
import config.settings as settings

logger = logging.getLogger(__name__)


class ReviewPipeline:
    """
    Builds the normalized review response for a query.

    Coordinates:
    1. Ingestion (upstream or fallback) → 2. Filtering → 3. Normalization
    → 4. Aggregation → 5. Assembly

    Nothing is cached: every call recomputes from the raw reviews.
    """

    def __init__(
        self,
        ingestion_agent: Optional[IngestionAgent] = None,
        normalizer: Optional[ReviewNormalizer] = None,
        aggregator: Optional[ListingAggregator] = None,
        assembler: Optional[ResponseAssembler] = None
    ):
        """
        Initialize pipeline.

        Args:
            ingestion_agent: Source selection (default from settings)
            normalizer: Per-review normalizer
            aggregator: Listing aggregator
            assembler: Response assembler
        """
        logger.info("Initializing pipeline components...")

        self.ingestion_agent = ingestion_agent or IngestionAgent(
            use_upstream=settings.USE_UPSTREAM
        )
        self.normalizer = normalizer or ReviewNormalizer()
        self.aggregator = aggregator or ListingAggregator()
        self.assembler = assembler or ResponseAssembler()

    async def run_async(self, query: Optional[ReviewQuery] = None) -> NormalizedReviewResponse:
        """
        Fetch reviews and build the response.

        Args:
            query: Selection criteria

        Returns:
            NormalizedReviewResponse (upstream problems only show up as
            upstream_error and a fallback data source)
        """
        query = query or ReviewQuery()

        # STAGE 1: Ingestion
        fetched = await self.ingestion_agent.fetch_reviews(query)
        if fetched.dropped_records:
            logger.info(f"Upstream records dropped during mapping: {fetched.dropped_records}")

        # STAGES 2-5
        return self.build_response(
            fetched.reviews,
            query=query,
            data_source=fetched.source,
            upstream_error=fetched.error,
        )

    def run(self, query: Optional[ReviewQuery] = None) -> NormalizedReviewResponse:
        """Synchronous wrapper around run_async()."""
        return asyncio.run(self.run_async(query))

    def build_response(
        self,
        reviews: Iterable[RawReview],
        query: Optional[ReviewQuery] = None,
        data_source: DataSource = DataSource.FALLBACK,
        upstream_error: Optional[str] = None
    ) -> NormalizedReviewResponse:
        """
        Turn raw reviews into the response payload.

        Pure and synchronous: no I/O happens past ingestion.
        """
        # STAGE 2: Filtering
        filtered = filter_reviews(list(reviews), query)
        logger.info(f"Filtered to {len(filtered)} reviews")

        # STAGE 3: Normalization
        normalized = self.normalizer.normalize_all(filtered)

        # STAGE 4: Aggregation
        listings = self.aggregator.aggregate(normalized)

        # STAGE 5: Assembly
        return self.assembler.assemble(
            listings,
            normalized,
            data_source=data_source,
            query=query,
            upstream_error=upstream_error,
        )
