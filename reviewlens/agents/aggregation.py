"""
Listing Aggregation Engine.

Folds normalized reviews into per-listing analytics in a single pass,
keeping running sums and counts, then finalizes each listing once.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import pandas as pd

from reviewlens.models.listing import (
    NormalizedListing,
    NormalizedReview,
    RatingDistribution,
    TimeSeriesPoint,
)
from reviewlens.utils.formatting import month_period, parse_timestamp, round_to
import config.settings as settings

logger = logging.getLogger(__name__)


# Lower bound of each band on the 0-10 scale, highest first
RATING_BANDS = (
    ("exceptional", 9.5),
    ("great", 8.5),
    ("good", 7.0),
    ("adequate", 5.0),
)


def rating_band(rating: float) -> str:
    """Distribution band for a rating; bands partition the number line."""
    for band, lower_bound in RATING_BANDS:
        if rating >= lower_bound:
            return band
    return "low"


@dataclass
class _RunningMean:
    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    def mean(self) -> Optional[float]:
        if self.count == 0:
            return None
        return round_to(self.total / self.count)


@dataclass
class _ListingAccumulator:
    """Mutable per-listing state, owned by a single aggregate() call."""
    listing_id: str
    listing_name: str
    total_reviews: int = 0
    ratings: _RunningMean = field(default_factory=_RunningMean)
    distribution: Dict[str, int] = field(default_factory=dict)
    categories: Dict[str, _RunningMean] = field(default_factory=dict)
    months: Dict[str, _RunningMean] = field(default_factory=dict)
    last_review_date: Optional[str] = None
    last_review_at: Optional[pd.Timestamp] = None
    reviews: List[NormalizedReview] = field(default_factory=list)

    def add(self, review: NormalizedReview) -> None:
        self.total_reviews += 1

        if review.rating is not None:
            self.ratings.add(review.rating)
            band = rating_band(review.rating)
            self.distribution[band] = self.distribution.get(band, 0) + 1

        submitted = parse_timestamp(review.submitted_at)
        if submitted is not None:
            if self.last_review_at is None or submitted > self.last_review_at:
                self.last_review_at = submitted
                self.last_review_date = review.submitted_at

            bucket = self.months.setdefault(month_period(submitted), _RunningMean())
            if review.rating is not None:
                bucket.add(review.rating)

        for category in review.categories:
            if category.rating is not None:
                self.categories.setdefault(category.key, _RunningMean()).add(category.rating)

        self.reviews.append(review)

    def finalize(self, channel: str) -> NormalizedListing:
        average = self.ratings.mean()

        return NormalizedListing(
            listing_id=self.listing_id,
            listing_name=self.listing_name,
            channel=channel,
            total_reviews=self.total_reviews,
            average_rating=average,
            average_rating_out_of_five=round_to(average / 2) if average is not None else None,
            category_averages={key: stats.mean() for key, stats in self.categories.items()},
            last_review_date=self.last_review_date,
            rating_distribution=RatingDistribution(**self.distribution),
            time_series=tuple(
                TimeSeriesPoint(period=period, average_rating=stats.mean(), review_count=stats.count)
                for period, stats in sorted(self.months.items())
            ),
            reviews=tuple(
                sorted(self.reviews, key=lambda r: r.submitted_at or "", reverse=True)
            ),
        )


def sort_listings(listings: Iterable[NormalizedListing]) -> List[NormalizedListing]:
    """Highest average first; unrated listings last."""
    return sorted(
        listings,
        key=lambda listing: (
            listing.average_rating if listing.average_rating is not None else float("-inf")
        ),
        reverse=True,
    )


class ListingAggregator:
    """
    Groups normalized reviews by listing and computes per-listing stats.

    Accumulators live only for the duration of one aggregate() call and are
    converted to immutable NormalizedListing objects before returning.
    """

    def __init__(self, listing_channel: str = settings.DEFAULT_CHANNEL):
        """
        Initialize aggregator.

        Args:
            listing_channel: Channel label stamped on every listing
        """
        self.listing_channel = listing_channel

    def aggregate(self, reviews: Iterable[NormalizedReview]) -> List[NormalizedListing]:
        """
        Fold reviews into listings.

        Args:
            reviews: Normalized reviews, already filtered

        Returns:
            One NormalizedListing per distinct listing id, in first-seen order
        """
        accumulators: Dict[str, _ListingAccumulator] = {}

        for review in reviews:
            accumulator = accumulators.get(review.listing_id)
            if accumulator is None:
                accumulator = _ListingAccumulator(
                    listing_id=review.listing_id,
                    listing_name=review.listing_name,
                )
                accumulators[review.listing_id] = accumulator
            accumulator.add(review)

        listings = [acc.finalize(self.listing_channel) for acc in accumulators.values()]

        logger.info(
            f"Aggregated {sum(l.total_reviews for l in listings)} reviews "
            f"into {len(listings)} listings"
        )
        return listings
