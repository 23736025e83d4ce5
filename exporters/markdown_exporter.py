"""Writes rendered markdown documents to the output directory, only when content changed."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

from models import RenderedDocument, SyncOutcome


class ExportError(Exception):
    """Base exception for export-related errors."""
    pass


class DirectoryError(ExportError):
    """The output directory could not be cleared or created."""
    pass


class FileIOError(ExportError):
    """A markdown file could not be read or written."""
    pass


class MarkdownExporter:
    """
    Materializes RenderedDocuments under the output directory.

    Each document is written to ``output_directory / f"{path}.md"``:
    created when absent, overwritten when different, left untouched when
    identical. Files are UTF-8 and written without newline translation so the
    comparison is exact.
    """

    def __init__(self, output_directory: Union[str, Path], logger: Optional[logging.Logger] = None):
        """
        Initialize the markdown exporter.

        Args:
            output_directory: Root directory for markdown files
            logger: Logger instance
        """
        self.output_directory = Path(output_directory)
        self.logger = logger or logging.getLogger('handbook_markdown_sync.exporters.markdown_exporter')

    def prepare(self, regenerate: bool = False) -> None:
        """
        Ensure the output directory exists, optionally wiping it first.

        Args:
            regenerate: Remove the whole output directory before recreating it

        Raises:
            DirectoryError: If the directory cannot be removed or created
        """
        if regenerate:
            self.logger.info(f"Regenerate: removing {self.output_directory}")
            try:
                shutil.rmtree(self.output_directory)
            except FileNotFoundError:
                self.logger.debug(f"{self.output_directory} does not exist, nothing to remove")
            except OSError as e:
                self.logger.error(f"Failed to remove output directory {self.output_directory}: {e}")
                raise DirectoryError(f"Cannot remove output directory {self.output_directory}: {e}") from e

        try:
            self.output_directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Output directory ready: {self.output_directory}")
        except OSError as e:
            self.logger.error(f"Failed to create output directory: {e}")
            raise DirectoryError(f"Cannot create output directory {self.output_directory}: {e}") from e

    def write_document(self, document: RenderedDocument) -> SyncOutcome:
        """
        Write one document if its content differs from what is on disk.

        Args:
            document: Rendered document with its relative path

        Returns:
            SyncOutcome describing what happened

        Raises:
            FileIOError: For any I/O failure other than the file being absent
        """
        page_file = self.output_directory / document.filename

        try:
            page_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            parent = page_file.parent.parent
            self.logger.error(
                f"Cannot create directory {page_file.parent}: {e}. "
                f"Parent exists: {parent.exists()}, "
                f"writable: {os.access(str(parent), os.W_OK) if parent.exists() else False}"
            )
            raise FileIOError(f"Cannot create directory {page_file.parent}: {e}") from e

        existing_content = self._read_existing(page_file)

        if existing_content is None:
            outcome = SyncOutcome.CREATED
        elif existing_content == document.markdown:
            self.logger.debug(f"{document.filename} already exists and has exactly the same content. Skipping...")
            return SyncOutcome.SKIPPED
        else:
            outcome = SyncOutcome.UPDATED

        try:
            with open(page_file, 'w', encoding='utf-8', newline='') as f:
                f.write(document.markdown)
        except OSError as e:
            self.logger.error(f"IO error writing to {page_file}: {e}")
            raise FileIOError(f"Cannot write {page_file}: {e}") from e

        self.logger.info(f"{outcome.value.capitalize()} {document.filename}")
        return outcome

    def _read_existing(self, page_file: Path) -> Optional[str]:
        """Return current file content, or None when the file does not exist."""
        try:
            with open(page_file, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"IO error reading {page_file}: {e}")
            raise FileIOError(f"Cannot read {page_file}: {e}") from e


__all__ = ['MarkdownExporter', 'ExportError', 'DirectoryError', 'FileIOError']
