"""Tests for writing markdown documents to disk."""

import pytest

from exporters import DirectoryError, FileIOError, MarkdownExporter
from models import RenderedDocument, SyncOutcome


def read(path):
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / 'en'


@pytest.fixture
def exporter(output_dir):
    exporter = MarkdownExporter(output_dir)
    exporter.prepare()
    return exporter


class TestWriteDocument:
    """Test the create / update / skip decision."""

    def test_created_when_absent(self, exporter, output_dir):
        outcome = exporter.write_document(RenderedDocument('index', '# Home\n\nWelcome'))

        assert outcome is SyncOutcome.CREATED
        assert read(output_dir / 'index.md') == '# Home\n\nWelcome'

    def test_skipped_when_identical(self, exporter, output_dir):
        document = RenderedDocument('index', '# Home')
        exporter.write_document(document)
        mtime = (output_dir / 'index.md').stat().st_mtime_ns

        outcome = exporter.write_document(document)

        assert outcome is SyncOutcome.SKIPPED
        assert (output_dir / 'index.md').stat().st_mtime_ns == mtime

    def test_updated_when_different(self, exporter, output_dir):
        exporter.write_document(RenderedDocument('index', '# Home'))

        outcome = exporter.write_document(RenderedDocument('index', '# Home v2'))

        assert outcome is SyncOutcome.UPDATED
        assert read(output_dir / 'index.md') == '# Home v2'

    def test_comparison_is_exact(self, exporter, output_dir):
        """Line endings and trailing whitespace are significant."""
        (output_dir / 'faq.md').write_bytes(b'# FAQ\r\n')

        outcome = exporter.write_document(RenderedDocument('faq', '# FAQ\n'))

        assert outcome is SyncOutcome.UPDATED
        assert (output_dir / 'faq.md').read_bytes() == b'# FAQ\n'

    def test_nested_directories_created(self, exporter, output_dir):
        exporter.write_document(RenderedDocument('guide/install/linux', '# Linux'))

        assert read(output_dir / 'guide' / 'install' / 'linux.md') == '# Linux'

    def test_utf8_content(self, exporter, output_dir):
        exporter.write_document(RenderedDocument('intro', '# Plugins – Intro ✓'))

        assert (output_dir / 'intro.md').read_bytes() == '# Plugins – Intro ✓'.encode('utf-8')

    def test_directory_in_place_of_file(self, exporter, output_dir):
        (output_dir / 'index.md').mkdir()

        with pytest.raises(FileIOError):
            exporter.write_document(RenderedDocument('index', '# Home'))

    def test_file_in_place_of_directory(self, exporter, output_dir):
        (output_dir / 'guide').write_text('not a directory')

        with pytest.raises(FileIOError):
            exporter.write_document(RenderedDocument('guide/install', '# Install'))


class TestPrepare:
    """Test output directory preparation."""

    def test_creates_missing_directory(self, output_dir):
        MarkdownExporter(output_dir / 'nested').prepare()

        assert (output_dir / 'nested').is_dir()

    def test_keeps_existing_files_without_regenerate(self, output_dir):
        output_dir.mkdir()
        (output_dir / 'stale.md').write_text('old')

        MarkdownExporter(output_dir).prepare(regenerate=False)

        assert (output_dir / 'stale.md').exists()

    def test_regenerate_removes_existing_files(self, output_dir):
        (output_dir / 'sub').mkdir(parents=True)
        (output_dir / 'sub' / 'stale.md').write_text('old')
        (output_dir / 'notes.txt').write_text('unrelated')

        MarkdownExporter(output_dir).prepare(regenerate=True)

        assert output_dir.is_dir()
        assert list(output_dir.iterdir()) == []

    def test_regenerate_when_directory_absent(self, output_dir):
        MarkdownExporter(output_dir).prepare(regenerate=True)

        assert output_dir.is_dir()

    def test_output_path_is_a_file(self, tmp_path):
        target = tmp_path / 'en'
        target.write_text('occupied')

        with pytest.raises(DirectoryError):
            MarkdownExporter(target).prepare()
