"""
Hostaway API client.

Fetches guest reviews from the Hostaway reviews endpoint and maps each
item onto the canonical RawReview shape.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from reviewlens.agents.mapping import RecordMapper
from reviewlens.models.review import RawReview, ReviewQuery
import config.settings as settings

logger = logging.getLogger(__name__)

# Keys that may hold the review array, in priority order
PAYLOAD_ITEM_KEYS = ("result", "results", "data", "items")


class UpstreamError(Exception):
    """The upstream could not supply a usable review list."""


class UpstreamNotConfiguredError(UpstreamError):
    """Credentials are missing, so no request was attempted."""


@dataclass
class UpstreamBatch:
    """Reviews mapped from one upstream response."""
    reviews: List[RawReview] = field(default_factory=list)
    dropped_records: int = 0  # Items rejected by the mapper


def mask_secret(secret: str) -> str:
    """Keep only the first and last 4 characters of a secret."""
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}...{secret[-4:]}"


def extract_items(payload: Any) -> List[Any]:
    """First list-valued item container in the response, else empty."""
    if not isinstance(payload, dict):
        return []
    for key in PAYLOAD_ITEM_KEYS:
        items = payload.get(key)
        if isinstance(items, list):
            return items
    return []


class HostawayClient:
    """
    Async client for the Hostaway reviews endpoint.

    One request per call, no retries. Cancelling the awaiting task aborts
    the in-flight request.
    """

    def __init__(
        self,
        account_id: str,
        api_key: str,
        base_url: str = settings.HOSTAWAY_API_BASE,
        reviews_endpoint: str = settings.HOSTAWAY_REVIEWS_ENDPOINT,
        timeout_seconds: float = settings.HOSTAWAY_TIMEOUT_SECONDS,
        mapper: Optional[RecordMapper] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Hostaway client.

        Args:
            account_id: Hostaway account id
            api_key: Hostaway API key
            base_url: API base URL
            reviews_endpoint: Path (or absolute URL) of the reviews endpoint
            timeout_seconds: Request timeout
            mapper: Record mapper (default RecordMapper())
            transport: Optional httpx transport (used by tests)
        """
        self.account_id = account_id
        self.api_key = api_key
        self.base_url = base_url
        self.reviews_endpoint = reviews_endpoint
        self.timeout_seconds = timeout_seconds
        self.mapper = mapper or RecordMapper()
        self.transport = transport

    @classmethod
    def from_settings(cls) -> "HostawayClient":
        return cls(
            account_id=settings.HOSTAWAY_ACCOUNT_ID,
            api_key=settings.HOSTAWAY_API_KEY,
            base_url=settings.HOSTAWAY_API_BASE,
            reviews_endpoint=settings.HOSTAWAY_REVIEWS_ENDPOINT,
            timeout_seconds=settings.HOSTAWAY_TIMEOUT_SECONDS,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.account_id and self.api_key)

    def build_request_url(self) -> str:
        """Endpoint URL; absolute endpoints are used as-is."""
        if self.reviews_endpoint.startswith("http"):
            return self.reviews_endpoint

        base = self.base_url[:-1] if self.base_url.endswith("/") else self.base_url
        separator = "" if self.reviews_endpoint.startswith("/") else "/"
        return f"{base}{separator}{self.reviews_endpoint}"

    def build_params(self, query: ReviewQuery) -> Dict[str, str]:
        params = {"accountId": self.account_id}
        params.update(query.to_params())
        return params

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-Hostaway-API-Key": self.api_key,
            "X-Hostaway-Account-Id": self.account_id,
            "Accept": "application/json",
        }

    async def fetch_reviews(self, query: Optional[ReviewQuery] = None) -> UpstreamBatch:
        """
        Fetch and map reviews matching the query.

        Returns:
            UpstreamBatch (possibly empty if the service has no matching data)

        Raises:
            UpstreamNotConfiguredError: If credentials are missing
            UpstreamError: On HTTP, transport or decoding failure
        """
        if not self.is_configured:
            raise UpstreamNotConfiguredError("Hostaway credentials are not configured")

        query = query or ReviewQuery()
        url = self.build_request_url()
        params = self.build_params(query)

        logger.debug(
            f"Requesting {url} for account {self.account_id} "
            f"with key {mask_secret(self.api_key)}"
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport
            ) as client:
                response = await client.get(url, params=params, headers=self.build_headers())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Hostaway API request failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Unable to reach Hostaway API: {e}") from e
        except ValueError as e:
            raise UpstreamError("Hostaway API returned invalid JSON") from e

        items = extract_items(payload)
        reviews, dropped = self.mapper.map_batch(items)

        logger.info(f"Fetched {len(items)} upstream records, mapped {len(reviews)} reviews")
        return UpstreamBatch(reviews=reviews, dropped_records=dropped)
