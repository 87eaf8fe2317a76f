"""Hand-maintained reference blocks copied into every aggregate document.

These describe the API account model and are not scraped; update them by hand
when the pricing or QPS pages change.
"""

from __future__ import annotations

import copy
from typing import Any

SOURCE_DESCRIPTION = "https://twitterapi.io + https://docs.twitterapi.io"
DOCUMENT_VERSION = "2.1"

AUTHENTICATION: dict[str, Any] = {
    "header": "x-api-key",
    "header_value": "YOUR_API_KEY",
    "base_url": "https://api.twitterapi.io",
    "dashboard_url": "https://twitterapi.io/dashboard",
}

QPS_LIMITS: dict[str, Any] = {
    "free": "1 request per 5 seconds",
    "paid": {
        "1000_credits": "3 QPS",
        "5000_credits": "6 QPS",
        "10000_credits": "10 QPS",
        "50000_credits": "20 QPS",
    },
}

PRICING: dict[str, Any] = {
    "credits_per_usd": 100000,
    "costs": {
        "tweets": "15 credits per tweet",
        "profiles": "18 credits per user",
        "followers": "15 credits per follower",
        "list_calls": "150 credits per call",
    },
    "minimum_charge": "15 credits ($0.00015) per request",
}


def static_blocks() -> dict[str, Any]:
    """Return fresh copies of the static blocks, keyed as they appear in output."""
    return {
        "authentication": copy.deepcopy(AUTHENTICATION),
        "qps_limits": copy.deepcopy(QPS_LIMITS),
        "pricing": copy.deepcopy(PRICING),
    }
