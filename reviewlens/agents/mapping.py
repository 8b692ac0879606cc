"""
Raw Record Mapper.

Converts loosely-typed upstream review documents into the canonical
RawReview shape. Every logical field is resolved through a priority-ordered
table of key paths; the first path whose value resolves wins.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import pandas as pd

from reviewlens.models.review import CategoryRating, RawReview
from reviewlens.utils.formatting import format_timestamp
import config.settings as settings

logger = logging.getLogger(__name__)

KeyPath = Tuple[str, ...]
Number = Union[int, float]

# Plain ASCII decimal notation only; no digit separators
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def resolve_number(value: Any) -> Optional[Number]:
    """
    Resolve a finite number from a number or numeric string.

    Integral values come back as int so identifiers stringify cleanly
    ("101", not "101.0"). Booleans, blanks and non-finite values resolve
    to None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return None
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value

    if isinstance(value, str) and value.strip():
        text = value.strip()
        if _INTEGER_PATTERN.fullmatch(text):
            try:
                return resolve_number(int(text))
            except ValueError:
                pass
        if not _DECIMAL_PATTERN.fullmatch(text):
            return None
        return resolve_number(float(text))

    return None


def resolve_string(value: Any) -> Optional[str]:
    """Accept only non-empty strings."""
    if isinstance(value, str) and len(value) > 0:
        return value
    return None


def lookup(record: Any, path: KeyPath) -> Any:
    """Walk a key path through nested dicts; None if any step is missing."""
    current = record
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


@dataclass(frozen=True)
class FieldRule:
    """
    Extraction rule for one logical field.

    Attributes:
        name: Logical field name (for logging/tests)
        paths: Key paths to probe, highest priority first
        resolver: Converts a probed value, returning None to reject it
    """
    name: str
    paths: Tuple[KeyPath, ...]
    resolver: Callable[[Any], Any]

    def resolve(self, record: dict) -> Any:
        for path in self.paths:
            value = self.resolver(lookup(record, path))
            if value is not None:
                return value
        return None


def _rule(name: str, resolver: Callable[[Any], Any], *paths: str) -> FieldRule:
    return FieldRule(name, tuple(tuple(p.split(".")) for p in paths), resolver)


LISTING_ID_RULE = _rule("listingId", resolve_number, "listingId", "listing_id", "listing.id")
RATING_RULE = _rule("rating", resolve_number, "rating", "score", "overall")
SUBMITTED_AT_RULE = _rule(
    "submittedAt", resolve_string, "submittedAt", "submitted_at", "createdAt", "created_at"
)
REVIEW_ID_RULE = _rule("id", resolve_number, "id", "reviewId", "review_id", "externalId")
LISTING_NAME_RULE = _rule(
    "listingName", resolve_string,
    "listingName", "listing_name", "listing.name", "listing.listingName",
)
GUEST_NAME_RULE = _rule(
    "guestName", resolve_string, "guestName", "guest_name", "reviewerName", "author"
)
PUBLIC_REVIEW_RULE = _rule(
    "publicReview", resolve_string,
    "publicReview", "public_review", "comment", "publicComment", "public_comment",
)
PRIVATE_REVIEW_RULE = _rule(
    "privateReview", resolve_string,
    "privateReview", "private_review", "privateComment", "private_comment",
)
CHANNEL_RULE = _rule("channel", resolve_string, "channel", "source", "platform")
TYPE_RULE = _rule("type", resolve_string, "type", "reviewType")
STATUS_RULE = _rule("status", resolve_string, "status")
STAY_DATE_RULE = _rule(
    "stayDate", resolve_string, "stayDate", "stay_date", "arrivalDate", "arrival_date"
)
LANGUAGE_RULE = _rule("language", resolve_string, "language")

CATEGORY_CONTAINER_RULE = _rule(
    "reviewCategory",
    lambda value: value if isinstance(value, list) else None,
    "reviewCategory", "reviewCategories", "categories", "scores",
)
CATEGORY_NAME_RULE = _rule("category", resolve_string, "category", "name", "key")
CATEGORY_RATING_RULE = _rule("rating", resolve_number, "rating", "score", "value", "points")


def resolve_categories(record: dict) -> List[CategoryRating]:
    """
    Category ratings from the first list-valued container field.

    Entries without a resolvable category name are skipped.
    """
    container = CATEGORY_CONTAINER_RULE.resolve(record)
    if container is None:
        return []

    categories = []
    for item in container:
        if not isinstance(item, dict):
            continue
        name = CATEGORY_NAME_RULE.resolve(item)
        if name is None:
            continue
        categories.append(CategoryRating(category=name, rating=CATEGORY_RATING_RULE.resolve(item)))
    return categories


def _utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


class RecordMapper:
    """
    Maps upstream documents onto RawReview.

    Records without a resolvable listing id are dropped: they cannot be
    grouped. Records without a submission date get the current instant,
    which makes them look recent; this mirrors how the upstream has always
    been consumed and is logged at DEBUG so it stays visible.
    """

    def __init__(self, clock: Callable[[], pd.Timestamp] = _utc_now):
        """
        Initialize record mapper.

        Args:
            clock: Returns the current UTC instant (injectable for tests)
        """
        self.clock = clock

    def map_record(self, raw: Any, index: int = 0) -> Optional[RawReview]:
        """
        Map one upstream document.

        Args:
            raw: Arbitrary decoded JSON value
            index: Position in the batch, used to synthesize missing ids

        Returns:
            RawReview, or None if the record has no listing identity
        """
        if not isinstance(raw, dict):
            logger.debug(f"Dropping non-object upstream record at index {index}")
            return None

        listing_id = LISTING_ID_RULE.resolve(raw)
        if listing_id is None:
            logger.debug(f"Dropping upstream record at index {index}: no listing id")
            return None

        submitted_at = SUBMITTED_AT_RULE.resolve(raw)
        if submitted_at is None:
            submitted_at = format_timestamp(self.clock())
            logger.debug(
                f"Upstream record at index {index} has no submission date, "
                f"using current time {submitted_at}"
            )

        review_id = REVIEW_ID_RULE.resolve(raw)
        if review_id is None:
            review_id = self._synthesize_id(index)

        return RawReview(
            id=review_id,
            listing_id=listing_id,
            listing_name=LISTING_NAME_RULE.resolve(raw) or f"Listing {listing_id}",
            channel=CHANNEL_RULE.resolve(raw) or settings.DEFAULT_CHANNEL,
            type=TYPE_RULE.resolve(raw) or settings.DEFAULT_REVIEW_TYPE,
            status=STATUS_RULE.resolve(raw) or settings.DEFAULT_REVIEW_STATUS,
            rating=RATING_RULE.resolve(raw),
            public_review=PUBLIC_REVIEW_RULE.resolve(raw),
            private_review=PRIVATE_REVIEW_RULE.resolve(raw),
            review_category=resolve_categories(raw),
            submitted_at=submitted_at,
            guest_name=GUEST_NAME_RULE.resolve(raw) or settings.DEFAULT_GUEST_NAME,
            stay_date=STAY_DATE_RULE.resolve(raw),
            language=LANGUAGE_RULE.resolve(raw),
        )

    def map_batch(self, items: Iterable[Any]) -> Tuple[List[RawReview], int]:
        """
        Map a batch of upstream documents.

        Returns:
            (mapped reviews in input order, number of dropped records)
        """
        reviews = []
        dropped = 0
        for index, item in enumerate(items):
            review = self.map_record(item, index)
            if review is None:
                dropped += 1
            else:
                reviews.append(review)

        if dropped:
            logger.info(f"Dropped {dropped} upstream records without a listing id")

        return reviews, dropped

    def _synthesize_id(self, index: int) -> int:
        """Unique within a batch only: epoch millis followed by the index."""
        millis = int(self.clock().timestamp() * 1000)
        return int(f"{millis}{index}")
