"""Abstract base fetcher interface and fetch errors."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from models import HandbookItem


class FetcherError(Exception):
    """Base exception for fetcher-related errors."""
    pass


class FetchError(FetcherError):
    """A collection page could not be retrieved. Fatal for the run, never retried."""

    def __init__(self, page: int, status_code: Optional[int] = None, message: str = ''):
        self.page = page
        self.status_code = status_code
        self.message = message

        status = f"HTTP {status_code}" if status_code is not None else "network error"
        detail = f": {message}" if message else ''
        super().__init__(f"Failed to fetch page {page} ({status}){detail}")


class EmptyCollectionError(FetcherError):
    """The collection was fetched successfully but contained no items."""
    pass


class BaseFetcher(ABC):
    """Abstract base class for handbook collection fetchers."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('handbook_markdown_sync.fetcher')

    @abstractmethod
    def fetch_all(self) -> List[HandbookItem]:
        """
        Fetch every item of the collection.

        Returns:
            Flat list of items in page-then-within-page order

        Raises:
            FetchError: If any page request fails
            EmptyCollectionError: If the collection has no items
        """
        pass


__all__ = ['BaseFetcher', 'FetcherError', 'FetchError', 'EmptyCollectionError']
