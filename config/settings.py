"""
Configuration settings for ReviewLens.

Centralized configuration for the upstream client and pipeline defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Hostaway API Configuration
HOSTAWAY_ACCOUNT_ID = os.getenv("HOSTAWAY_ACCOUNT_ID", "")
HOSTAWAY_API_KEY = os.getenv("HOSTAWAY_API_KEY", "")
HOSTAWAY_API_BASE = os.getenv("HOSTAWAY_API_BASE", "https://api.hostaway.com")
HOSTAWAY_REVIEWS_ENDPOINT = os.getenv("HOSTAWAY_REVIEWS_ENDPOINT", "/v1/reviews")
HOSTAWAY_TIMEOUT_SECONDS = float(os.getenv("HOSTAWAY_TIMEOUT_SECONDS", "10"))

# Ingestion
USE_UPSTREAM = os.getenv("USE_UPSTREAM", "true").lower() not in ("0", "false", "no")

# Record defaults (applied when the upstream omits a field)
DEFAULT_CHANNEL = "hostaway"
DEFAULT_GUEST_NAME = "Guest"
DEFAULT_REVIEW_TYPE = "guest-to-host"
DEFAULT_REVIEW_STATUS = "published"

# Normalization
RATING_PRECISION = 2  # Decimal places kept on ratings and averages

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewlens.log"
