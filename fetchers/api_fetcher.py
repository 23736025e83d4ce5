"""API fetcher retrieving a complete handbook collection via the WordPress REST API."""

import logging
from typing import Any, Dict, List, Optional

from models import HandbookItem
from .base_fetcher import BaseFetcher, EmptyCollectionError, FetchError

DEFAULT_PER_PAGE = 100


class ApiFetcher(BaseFetcher):
    """
    Fetches all pages of a collection strictly one request at a time.

    Page 1 is requested first to learn the total page count; pages 2..N follow
    in order. Results are concatenated preserving page and within-page order.
    """

    def __init__(self, client, per_page: int = DEFAULT_PER_PAGE, logger: Optional[logging.Logger] = None):
        """
        Initialize API fetcher.

        Args:
            client: Object exposing get_collection_page(page, per_page) -> (items, total_pages)
            per_page: Page size used for every request
            logger: Logger instance (optional)
        """
        super().__init__(logger or logging.getLogger('handbook_markdown_sync.fetcher.api'))
        self.client = client
        self.per_page = per_page
        self.requests_made = 0

    def fetch_all(self) -> List[HandbookItem]:
        """
        Fetch every item of the collection.

        Returns:
            List of HandbookItem objects

        Raises:
            FetchError: If any page fails; no retry is attempted
            EmptyCollectionError: If zero items were returned
        """
        self.requests_made = 0
        first_page, total_pages = self._fetch_page(1)
        collected = list(first_page)

        self.logger.info(f"Collection has {total_pages} page(s) of up to {self.per_page} items")

        for page in range(2, total_pages + 1):
            page_items, _ = self._fetch_page(page)
            collected.extend(page_items)
            self.logger.debug(f"Fetched page {page}/{total_pages} ({len(collected)} items so far)")

        if not collected:
            raise EmptyCollectionError("The collection returned no items")

        self.logger.info(f"Fetched {len(collected)} items in {self.requests_made} request(s)")
        return collected

    def _fetch_page(self, page: int):
        """Request one page and convert its JSON objects into items."""
        self.requests_made += 1
        raw_items, total_pages = self.client.get_collection_page(page, self.per_page)

        try:
            page_items = [HandbookItem.from_api(data) for data in raw_items]
        except ValueError as e:
            raise FetchError(page, 200, str(e)) from e

        return page_items, total_pages

    @classmethod
    def from_config(cls, config: Dict[str, Any], logger: Optional[logging.Logger] = None) -> 'ApiFetcher':
        """Create a fetcher and its HTTP client from configuration."""
        from wp_client import HandbookClient

        per_page = config.get('advanced', {}).get('per_page', DEFAULT_PER_PAGE)
        return cls(HandbookClient.from_config(config), per_page=per_page, logger=logger)


__all__ = ['ApiFetcher', 'DEFAULT_PER_PAGE']
