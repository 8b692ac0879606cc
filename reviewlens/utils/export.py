"""
Report export utility.

Writes a response as JSON, and a per-listing summary table as CSV.
"""

import json
import logging
import os

import pandas as pd

from reviewlens.models.listing import NormalizedReviewResponse

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Listing ID",
    "Listing",
    "Total Reviews",
    "Average Rating",
    "Average Rating (5)",
    "Last Review",
    "Low",
    "Adequate",
    "Good",
    "Great",
    "Exceptional",
]


class ReportExporter:
    """Serializes NormalizedReviewResponse objects to disk."""

    def to_json(self, response: NormalizedReviewResponse) -> str:
        return json.dumps(response.to_dict(), indent=2)

    def save_json(self, response: NormalizedReviewResponse, path: str) -> str:
        """
        Save the full response payload.

        Returns:
            Path written
        """
        self._ensure_parent(path)
        with open(path, "w") as f:
            f.write(self.to_json(response))
        logger.info(f"Response saved to {path}")
        return path

    def to_dataframe(self, response: NormalizedReviewResponse) -> pd.DataFrame:
        """
        One row per listing, in response order.

        Category averages become one column each ("cat_<key>"); listings
        without ratings for a category leave the cell empty.
        """
        rows = []
        for listing in response.listings:
            distribution = listing.rating_distribution
            row = {
                "Listing ID": listing.listing_id,
                "Listing": listing.listing_name,
                "Total Reviews": listing.total_reviews,
                "Average Rating": listing.average_rating,
                "Average Rating (5)": listing.average_rating_out_of_five,
                "Last Review": listing.last_review_date,
                "Low": distribution.low,
                "Adequate": distribution.adequate,
                "Good": distribution.good,
                "Great": distribution.great,
                "Exceptional": distribution.exceptional,
            }
            for key, average in listing.category_averages.items():
                row[f"cat_{key}"] = average
            rows.append(row)

        df = pd.DataFrame(rows)
        if df.empty:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)

        category_columns = sorted(col for col in df.columns if col not in SUMMARY_COLUMNS)
        return df[SUMMARY_COLUMNS + category_columns]

    def save_csv(self, response: NormalizedReviewResponse, path: str) -> str:
        """
        Save the per-listing summary table.

        Returns:
            Path written
        """
        self._ensure_parent(path)
        df = self.to_dataframe(response)
        df.to_csv(path, index=False)
        logger.info(f"Listing summary saved to {path} ({len(df)} listings)")
        return path

    def _ensure_parent(self, path: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
