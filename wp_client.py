"""WordPress.org REST API client for handbook collections."""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import requests
import urllib3

from fetchers.base_fetcher import FetchError

logger = logging.getLogger('handbook_markdown_sync.client')

TOTAL_PAGES_HEADER = 'X-WP-TotalPages'


def build_subdomain(subdomain: Optional[str]) -> str:
    """
    Return the host prefix for a subdomain setting.

    "make" (the default) becomes "make.", the literal "w.org" means the bare
    wordpress.org host and becomes "".
    """
    if not subdomain:
        subdomain = 'make'
    if subdomain == 'w.org':
        return ''
    return f"{subdomain}."


def build_site_url(subdomain: Optional[str], team: Optional[str]) -> str:
    """Return the site URL with a trailing slash, e.g. https://make.wordpress.org/core/."""
    url = f"https://{build_subdomain(subdomain)}wordpress.org/"
    team = (team or '').strip('/')
    if team:
        url += f"{team}/"
    return url


class HandbookClient:
    """WordPress REST API client fetching one page of a handbook collection at a time."""

    def __init__(
        self,
        site_url: str,
        handbook: str = 'handbook',
        verify_ssl: bool = True,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            site_url: Site URL (e.g., "https://make.wordpress.org/core/")
            handbook: Handbook post type, used as the collection route name
            verify_ssl: Whether to verify SSL certificates
            timeout: HTTP request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.site_url = site_url.rstrip('/') + '/'
        self.handbook = handbook
        self.timeout = timeout
        self.collection_url = f"{self.site_url}wp-json/wp/v2/{handbook}"

        self.session = session or requests.Session()
        self.session.headers.setdefault('Accept', 'application/json')

        self.session.verify = verify_ssl
        if not verify_ssl:
            logger.warning("SSL verification disabled - this is insecure!")
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        logger.debug(f"Client configured for {self.collection_url} with timeout={timeout}s")

    def get_collection_page(self, page: int, per_page: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Fetch one page of the handbook collection.

        Args:
            page: 1-based page number
            per_page: Number of items per page

        Returns:
            Tuple of (decoded JSON items, total page count from the response headers)

        Raises:
            FetchError: For network failures, non-200 responses or malformed bodies
        """
        params = {'page': page, 'per_page': per_page}

        start_time = time.time()
        logger.debug(f"API Request: GET {self.collection_url} page={page} per_page={per_page}")

        try:
            response = self.session.get(self.collection_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout after {self.timeout}s: GET {self.collection_url} (page {page})")
            raise FetchError(page, None, f"timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: GET {self.collection_url} (page {page}) - {str(e)}")
            raise FetchError(page, None, str(e)) from e

        elapsed = time.time() - start_time
        logger.debug(f"API Response: {response.status_code} {response.url} ({elapsed:.3f}s)")

        if response.status_code != 200:
            error_details = ''
            try:
                error_json = response.json()
                if isinstance(error_json, dict) and 'message' in error_json:
                    error_details = error_json['message']
            except ValueError:
                error_details = response.text[:500]
            logger.error(f"HTTP Error {response.status_code}: GET {response.url}")
            raise FetchError(page, response.status_code, error_details)

        try:
            items = response.json()
        except ValueError as e:
            raise FetchError(page, response.status_code, "response body is not valid JSON") from e

        if not isinstance(items, list):
            raise FetchError(page, response.status_code, "expected a JSON array")

        return items, self._parse_total_pages(response.headers.get(TOTAL_PAGES_HEADER))

    @staticmethod
    def _parse_total_pages(value: Optional[str]) -> int:
        """Parse the total page header, treating missing or malformed values as a single page."""
        try:
            return max(int(value), 1)
        except (TypeError, ValueError):
            return 1

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'HandbookClient':
        """
        Initialize client from configuration dictionary.

        Args:
            config: Configuration dictionary with handbook and advanced settings

        Returns:
            HandbookClient instance
        """
        handbook_config = config.get('handbook', {})
        advanced_config = config.get('advanced', {})

        return cls(
            site_url=build_site_url(handbook_config.get('subdomain'), handbook_config.get('team')),
            handbook=handbook_config.get('name') or 'handbook',
            verify_ssl=advanced_config.get('verify_ssl', True),
            timeout=advanced_config.get('request_timeout', 30)
        )


__all__ = ['HandbookClient', 'build_site_url', 'build_subdomain', 'TOTAL_PAGES_HEADER']
