"""Exporters package for resolving output paths and writing markdown files."""

from .markdown_exporter import DirectoryError, ExportError, FileIOError, MarkdownExporter
from .path_resolver import INDEX_NAME, PathResolver

__all__ = [
    'MarkdownExporter',
    'ExportError',
    'DirectoryError',
    'FileIOError',
    'PathResolver',
    'INDEX_NAME'
]
