"""
Sync orchestrator coordinating the markdown sync pipeline.

Sequences the phases of one run:
(Clear) → Ensure directory → Fetch → Resolve paths → Render → Materialize.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from config_loader import get_nested, normalize_output_directory
from converters import MarkdownConverter
from exporters import MarkdownExporter, PathResolver
from fetchers import ApiFetcher, BaseFetcher, EmptyCollectionError
from logger import ProgressTracker, log_section
from models import HandbookItem, ResolvedItem
from .sync_report import SyncReport


class SyncOrchestrator:
    """Central coordinator for one fetch-render-write run."""

    def __init__(
        self,
        config: Dict[str, Any],
        fetcher: Optional[BaseFetcher] = None,
        resolver: Optional[PathResolver] = None,
        converter: Optional[MarkdownConverter] = None,
        exporter: Optional[MarkdownExporter] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sync orchestrator.

        Components not supplied are built from the configuration.

        Args:
            config: Configuration dictionary
            fetcher: Optional collection fetcher
            resolver: Optional path resolver
            converter: Optional markdown converter
            exporter: Optional markdown exporter
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger('handbook_markdown_sync.orchestrator')

        self.output_directory = normalize_output_directory(get_nested(config, 'export.output_directory'))
        self.regenerate = bool(get_nested(config, 'export.regenerate', False))

        self.fetcher = fetcher or ApiFetcher.from_config(config)
        self.resolver = resolver or PathResolver.from_config(config)
        self.converter = converter or MarkdownConverter()
        self.exporter = exporter or MarkdownExporter(self.output_directory)

    def run(self) -> SyncReport:
        """
        Execute one sync run.

        Returns:
            SyncReport with one outcome per written path

        Raises:
            DirectoryError: If the output directory cannot be cleared or created
            FetchError: If any collection page fails
            EmptyCollectionError: If the collection has no items
            FileIOError: If a markdown file cannot be read or written
        """
        start_time = time.time()
        report = SyncReport(output_directory=self.output_directory)

        log_section("Preparing output directory")
        self.exporter.prepare(regenerate=self.regenerate)

        log_section("Fetching collection")
        try:
            items = self.fetcher.fetch_all()
        except EmptyCollectionError:
            self.logger.warning("No items were returned by the collection; nothing to write")
            raise
        report.items_fetched = len(items)

        log_section("Resolving paths")
        resolved = self.resolve(items)
        report.collisions = list(self.resolver.collisions)

        log_section("Writing markdown")
        with ProgressTracker(total_items=len(resolved), item_type='documents') as tracker:
            for resolved_item in resolved:
                document = self.converter.render(resolved_item)
                outcome = self.exporter.write_document(document)
                report.record(document.filename, outcome)
                tracker.increment(outcome.value)

        report.finish(time.time() - start_time)
        self.logger.debug(f"Sync complete in {report.duration:.2f}s")
        return report

    def resolve(self, items: List[HandbookItem]) -> List[ResolvedItem]:
        """Resolve output paths for all fetched items."""
        resolved = self.resolver.resolve_all(items)
        self.logger.debug(f"Resolved {len(resolved)} output paths for {len(items)} items")
        return resolved


__all__ = ['SyncOrchestrator']
