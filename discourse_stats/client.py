"""
HTTP Client for the Discourse statistics endpoint.

Issues a single GET to {base_url}/site/statistics.json and returns the raw
body. There is no retry: one attempt, fail fast with FetchError.
"""

from typing import Any

import httpx

from discourse_stats.core.config import get_app_config, get_request_timeout
from discourse_stats.core.exceptions import FetchError, UsageError
from discourse_stats.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def normalize_base_url(value: str, default_scheme: str | None = None) -> str:
    """
    Normalize a user-supplied forum address into a base URL.

    A value without an http:// or https:// scheme gets the default scheme
    prepended. Trailing slashes are removed.

    Args:
        value: Raw BASE_URL argument (e.g. forum.example.com)
        default_scheme: Scheme to prepend. If None, reads application.yaml.

    Returns:
        Normalized base URL (e.g. https://forum.example.com)

    Raises:
        UsageError: If the value is empty or has no host
    """
    candidate = value.strip()
    if not candidate:
        raise UsageError("BASE_URL must not be empty")

    if not candidate.lower().startswith(("http://", "https://")):
        scheme = default_scheme or get_app_config().application.client.default_scheme
        candidate = f"{scheme}://{candidate}"

    candidate = candidate.rstrip("/")

    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as e:
        raise UsageError(f"Invalid BASE_URL '{value}': {e}") from e
    if not url.host:
        raise UsageError(f"Invalid BASE_URL '{value}': no host")

    return candidate


class StatisticsClient:
    """
    HTTP client for the forum statistics endpoint.

    Usage:
        with StatisticsClient("https://forum.example.com") as client:
            raw = client.fetch()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the statistics client.

        Args:
            base_url: Normalized forum base URL.
            timeout: Request timeout in seconds. If None, uses configuration.
            transport: Optional transport, mainly for tests.
        """
        client_config = get_app_config().application.client

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else get_request_timeout()
        self.statistics_path = client_config.statistics_path
        self.follow_redirects = client_config.follow_redirects
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            transport = self._transport or httpx.HTTPTransport(retries=0)
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=transport,
                follow_redirects=self.follow_redirects,
            )
        return self._client

    @property
    def statistics_url(self) -> str:
        """Absolute URL of the statistics document."""
        return f"{self.base_url}{self.statistics_path}"

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self) -> "StatisticsClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def fetch(self) -> bytes:
        """
        Retrieve the raw statistics document.

        Returns:
            Response body bytes

        Raises:
            FetchError: On transport failure, timeout, or non-2xx status
        """
        log_with_source(
            logger,
            "fetch",
            "debug",
            "Statistics request",
            url=self.statistics_url,
            timeout=self.timeout,
        )

        try:
            response = self.client.get(self.statistics_path)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise self._failure(f"timed out after {self.timeout:g}s", e) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise self._failure(
                f"HTTP {status} {e.response.reason_phrase}".rstrip(), e, status_code=status,
            ) from e
        except httpx.HTTPError as e:
            raise self._failure(str(e) or type(e).__name__, e) from e

        log_with_source(
            logger,
            "fetch",
            "debug",
            "Statistics response",
            url=self.statistics_url,
            status_code=response.status_code,
            size=len(response.content),
        )
        return response.content

    def _failure(
        self,
        cause: str,
        error: Exception,
        status_code: int | None = None,
    ) -> FetchError:
        log_with_source(
            logger,
            "fetch",
            "debug",
            "Statistics request failed",
            url=self.statistics_url,
            error=str(error),
        )
        return FetchError(
            f"failed to retrieve statistics from {self.base_url}: {cause}",
            base_url=self.base_url,
            status_code=status_code,
        )


def fetch_statistics(base_url: str, timeout: float | None = None) -> bytes:
    """Fetch the raw statistics document once and release the connection."""
    with StatisticsClient(base_url, timeout=timeout) as client:
        return client.fetch()
