"""Fetchers package for retrieving handbook collections."""

from .base_fetcher import BaseFetcher, EmptyCollectionError, FetchError, FetcherError
from .api_fetcher import ApiFetcher

__all__ = [
    'BaseFetcher',
    'FetcherError',
    'FetchError',
    'EmptyCollectionError',
    'ApiFetcher'
]
