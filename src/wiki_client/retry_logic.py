"""Retry of throttled API calls with exponential backoff.

A call answered with 429 (too many requests) or 503 (service unavailable)
is repeated after 1s, 2s and 4s. Any other failure propagates at once.
"""

import logging
import time
from typing import Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3
RETRYABLE_STATUS_CODES = (429, 503)

_THROTTLE_PHRASES = ('429', 'too many requests', 'rate limit exceeded', 'rate limited')


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call ``func(*args, **kwargs)``, retrying while the server throttles.

    Raises:
        APIAccessError: If the server still throttles after the last retry
        Other exceptions: Propagated unchanged on the first occurrence

    Example:
        >>> response = retry_on_rate_limit(session.get, url, timeout=30)
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise
            if attempt == MAX_RETRIES:
                logger.error(f"Still throttled after {MAX_RETRIES} retries, giving up")
                raise APIAccessError(
                    f"Wiki API failure (after {MAX_RETRIES} retries)"
                ) from e

        delay = 2 ** attempt
        attempt += 1
        logger.info(f"Throttled by the server, retry {attempt}/{MAX_RETRIES} in {delay}s")
        time.sleep(delay)


def _is_rate_limit_error(exception: Exception) -> bool:
    """Tell whether an exception stands for a 429/503 response.

    Looks at ``status_code`` and ``response.status_code`` (requests and
    httpx errors), then at the message.
    """
    status_code = getattr(exception, 'status_code', None)
    if status_code is None:
        status_code = getattr(getattr(exception, 'response', None), 'status_code', None)
    if status_code is not None:
        return status_code in RETRYABLE_STATUS_CODES

    message = str(exception).lower()
    return any(phrase in message for phrase in _THROTTLE_PHRASES)
