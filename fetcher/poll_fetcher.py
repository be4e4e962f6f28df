"""HTTP fetcher for eldood poll documents."""
import logging

import requests

from processor.errors import TransportError, UsageError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://eldood.uk"


class PollFetcher:
    """Fetcher for the JSON view of an eldood poll."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 30):
        """
        Initialize the poll fetcher.

        Args:
            base_url: Root URL of the eldood instance (default: https://eldood.uk)
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def poll_url(self, token: str) -> str:
        """Return the JSON URL for a poll token."""
        return f"{self.base_url}/{token}/json"

    def fetch_poll(self, token: str) -> str:
        """
        Fetch the raw JSON body of a poll.

        The HTTP status code is not checked; the service reports problems
        through the status field of the body, which the decoder inspects.

        Args:
            token: Poll token

        Returns:
            Response body as text

        Raises:
            UsageError: If the token is empty
            TransportError: If the request could not be completed
        """
        if not token:
            raise UsageError("poll token must not be empty")

        url = self.poll_url(token)
        logger.info(f"Fetching poll from {url}")

        try:
            with requests.get(url, timeout=self.timeout) as response:
                # Body is UTF-8 even when no charset is declared
                response.encoding = 'utf-8'
                body = response.text
                logger.debug(
                    f"Received HTTP {response.status_code} "
                    f"({len(body)} characters)"
                )
                return body
        except requests.RequestException as e:
            logger.info(f"Request to {url} failed: {e}")
            raise TransportError(str(e)) from e
