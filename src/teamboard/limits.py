"""Numeric limits and timeouts - no circular dependencies."""

from __future__ import annotations

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_REQUESTS = 1000
FIRST_PAGE = 1

CLICK_THRESHOLD_MS = 200
"""Same-column drops shorter than this count as a click on the card."""

REQUEST_TIMEOUT = 30.0

MAX_LOG_MESSAGE_LENGTH = 4096
