"""
Shared GET helper for the product databases. Transient failures (timeouts, dropped
connections, 429/5xx) are retried with exponential backoff; anything else is handed back.
"""
import logging
import time
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0
USER_AGENT = "LabelCore/1.0 (ingredient safety scanner)"
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


def _backoff(attempt: int, initial_backoff: float) -> float:
    return initial_backoff * (2 ** attempt)


def get_with_retries(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: int = 10,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
) -> Tuple[Optional[requests.Response], Optional[str]]:
    """
    Returns (response, None) once a response is worth reading, (None, error) when every
    attempt failed at the transport level. A retryable status on the last attempt is
    returned as a response; callers map status codes to meaning.
    """
    request_headers = {"User-Agent": USER_AGENT}
    request_headers.update(headers or {})
    last_error: Optional[str] = None

    for attempt in range(max_retries):
        is_last = attempt == max_retries - 1
        try:
            resp = requests.get(url, params=params or {}, headers=request_headers, timeout=timeout)
        except requests.Timeout as e:
            last_error = f"Read timed out: {e}"
        except requests.RequestException as e:
            last_error = f"{type(e).__name__}: {e}"
        else:
            if resp.status_code not in RETRY_STATUSES or is_last:
                return (resp, None)
            last_error = f"HTTP {resp.status_code}"

        logger.warning(
            "EXTERNAL_API attempt=%d/%d url=%s error=%s",
            attempt + 1, max_retries, url[:60], last_error,
        )
        if not is_last:
            delay = _backoff(attempt, initial_backoff)
            logger.info("EXTERNAL_API backoff %.1fs", delay)
            time.sleep(delay)

    return (None, last_error)
