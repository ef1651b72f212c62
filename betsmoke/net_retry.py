# betsmoke/net_retry.py
"""Shared request helper for calls to the BetSmoke proxy."""
from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Iterable, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import setup_logger

_logger = setup_logger(__name__)

_DEFAULT_STATUS_FORCELIST = (429, 500, 502, 503, 504)
_DEFAULT_ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


def _normalize_status_list(status_forcelist: Iterable[int] | None) -> Tuple[int, ...]:
    if not status_forcelist:
        return tuple()
    return tuple(sorted(set(int(s) for s in status_forcelist)))


def scrub_url(url: Optional[str]) -> str:
    """Drop the query string (tokens, search terms) before logging a URL."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))
    except ValueError:
        return url


@lru_cache(maxsize=4)
def get_session() -> requests.Session:
    # Retries are driven by request_with_retries, the adapter itself never retries
    adapter = HTTPAdapter(max_retries=Retry(total=0, connect=0, read=0, raise_on_status=False))
    session = requests.Session()
    session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def request_with_retries(
    method: str,
    url: str,
    *,
    max_attempts: int = 1,
    backoff_factor: float = 0.5,
    status_forcelist: Iterable[int] | None = _DEFAULT_STATUS_FORCELIST,
    timeout: float = 7.0,
    logger: Optional[logging.Logger] = None,
    context: Optional[str] = None,
    session: Optional[Any] = None,  # anything with .request(...)
    **kwargs: Any,
) -> requests.Response:
    """
    Perform an HTTP request, retrying timeouts, connection errors and
    ``status_forcelist`` replies up to ``max_attempts`` in total.

    Other non-2xx replies raise ``requests.HTTPError`` immediately. The last
    exception is re-raised once attempts run out.
    """
    active_logger = logger or _logger
    session_obj = session or get_session()
    statuses = _normalize_status_list(status_forcelist)
    label = context or f"{method} {scrub_url(url)}"
    attempts_allowed = max(1, int(max_attempts))

    retry_state = Retry(
        total=attempts_allowed,
        backoff_factor=backoff_factor,
        status_forcelist=statuses,
        allowed_methods=_DEFAULT_ALLOWED_METHODS,
        raise_on_status=False,
    )
    last_exception: Optional[requests.exceptions.RequestException] = None

    for attempt in range(1, attempts_allowed + 1):
        response: Optional[requests.Response] = None
        try:
            response = session_obj.request(method, url, timeout=timeout, **kwargs)
            if response.status_code in statuses and attempt < attempts_allowed:
                raise requests.exceptions.HTTPError(
                    f"{response.status_code} Server Error: {response.reason}",
                    response=response,
                )
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as exc:
            last_exception = exc
            status_code = getattr(getattr(exc, "response", None), "status_code", None)
            retryable = isinstance(
                exc, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)
            ) or status_code in statuses
            if not retryable or attempt >= attempts_allowed:
                break

            retry_state = retry_state.increment(
                method=method,
                url=url,
                response=None,
                error=exc,
            )
            backoff = retry_state.get_backoff_time()
            active_logger.warning(
                "Retrying %s (%d/%d): %s",
                label,
                attempt,
                attempts_allowed,
                scrub_url(str(exc)),
            )
            if backoff > 0:
                time.sleep(backoff)

    if last_exception is None:
        raise RuntimeError("request_with_retries exited without attempting a request")
    active_logger.log(
        logging.WARNING if attempts_allowed == 1 else logging.ERROR,
        "Failed %s after %d attempt(s): %s",
        label,
        attempts_allowed,
        scrub_url(str(last_exception)),
    )
    raise last_exception


__all__ = ["get_session", "request_with_retries", "scrub_url"]
