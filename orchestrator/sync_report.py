"""
Sync report aggregating per-document outcomes of one run.

Formats the outcome for console display and JSON export.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models import PathCollision, SyncOutcome


@dataclass
class SyncReport:
    """Outcome of one sync run."""

    output_directory: str
    items_fetched: int = 0
    outcomes: Dict[str, SyncOutcome] = field(default_factory=dict)
    collisions: List[PathCollision] = field(default_factory=list)
    duration: float = 0.0
    finished_at: Optional[str] = None

    def record(self, filename: str, outcome: SyncOutcome) -> None:
        self.outcomes[filename] = outcome

    def count(self, outcome: SyncOutcome) -> int:
        return sum(1 for value in self.outcomes.values() if value is outcome)

    @property
    def created(self) -> int:
        return self.count(SyncOutcome.CREATED)

    @property
    def updated(self) -> int:
        return self.count(SyncOutcome.UPDATED)

    @property
    def skipped(self) -> int:
        return self.count(SyncOutcome.SKIPPED)

    @property
    def changed(self) -> bool:
        """True if any file was created or updated."""
        return self.created + self.updated > 0

    def finish(self, duration: float) -> None:
        self.duration = duration
        self.finished_at = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize report to dictionary."""
        return {
            'summary': {
                'output_directory': self.output_directory,
                'items_fetched': self.items_fetched,
                'documents': len(self.outcomes),
                'created': self.created,
                'updated': self.updated,
                'skipped': self.skipped,
                'collisions': len(self.collisions),
                'duration_seconds': round(self.duration, 3),
                'finished_at': self.finished_at
            },
            'files': {filename: outcome.value for filename, outcome in self.outcomes.items()},
            'collisions': [collision.to_dict() for collision in self.collisions]
        }

    def format_console_report(self) -> str:
        """Format a short human-readable summary."""
        lines = [
            "=" * 60,
            "HANDBOOK SYNC SUMMARY",
            "=" * 60,
            f"Output directory: {self.output_directory}",
            f"Items fetched:    {self.items_fetched}",
            f"Created:          {self.created}",
            f"Updated:          {self.updated}",
            f"Unchanged:        {self.skipped}",
        ]
        if self.collisions:
            lines.append(f"Path collisions:  {len(self.collisions)}")
            for collision in self.collisions:
                lines.append(
                    f"  - {collision.path}.md: kept {collision.kept_id}, dropped {collision.dropped_id}"
                )
        lines.append(f"Duration:         {self.duration:.2f}s")
        lines.append("=" * 60)
        return '\n'.join(lines)

    def export_json(self, filepath: str, logger: Optional[logging.Logger] = None) -> None:
        """
        Export report to JSON file.

        Args:
            filepath: Output file path
            logger: Optional logger instance
        """
        logger = logger or logging.getLogger('handbook_markdown_sync.orchestrator.sync_report')
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"JSON report exported to {filepath}")


__all__ = ['SyncReport']
