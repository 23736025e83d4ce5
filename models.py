"""Data models for the handbook to markdown sync pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SyncOutcome(Enum):
    """Result of materializing one document on disk."""
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


def _rendered(value: Any) -> str:
    """Return the rendered text of a WordPress rich text field."""
    if isinstance(value, dict):
        return value.get('rendered') or ''
    return value or ''


@dataclass(frozen=True)
class HandbookItem:
    """Represents one handbook page as returned by the WordPress REST API."""

    id: int
    parent: int
    link: str
    slug: str
    title: str  # Rendered title (may contain HTML entities)
    content: str  # Rendered HTML body

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'HandbookItem':
        """
        Build an item from one element of the collection JSON array.

        Args:
            data: Decoded JSON object for a single handbook page

        Returns:
            HandbookItem instance

        Raises:
            ValueError: If the object lacks a link or slug
        """
        link = data.get('link')
        slug = data.get('slug')
        if not link or slug is None:
            raise ValueError(f"Handbook item {data.get('id')!r} is missing 'link' or 'slug'")

        try:
            parent = int(data.get('parent') or 0)
        except (TypeError, ValueError):
            raise ValueError(f"Handbook item {data.get('id')!r} has invalid parent {data.get('parent')!r}")

        return cls(
            id=data.get('id'),
            parent=parent,
            link=link,
            slug=slug,
            title=_rendered(data.get('title')),
            content=_rendered(data.get('content'))
        )

    def is_root(self) -> bool:
        """Check if this item is a top-level page."""
        return self.parent == 0


@dataclass(frozen=True)
class ResolvedItem:
    """An item paired with its relative output path (without extension)."""

    item: HandbookItem
    path: str

    @property
    def directory(self) -> str:
        """Directory part of the path, empty for files directly under the output directory."""
        if '/' not in self.path:
            return ''
        return self.path[:self.path.rindex('/')]

    @property
    def filename(self) -> str:
        return f"{self.path}.md"


@dataclass(frozen=True)
class RenderedDocument:
    """Final markdown text for one item, ready to be written."""

    path: str
    markdown: str

    @property
    def filename(self) -> str:
        return f"{self.path}.md"


@dataclass
class PathCollision:
    """Two items that resolved to the same output path."""

    path: str
    kept_id: Any
    dropped_id: Any

    def to_dict(self) -> Dict[str, Any]:
        """Serialize collision to dictionary."""
        return {
            'path': self.path,
            'kept_id': self.kept_id,
            'dropped_id': self.dropped_id
        }


__all__ = [
    'SyncOutcome',
    'HandbookItem',
    'ResolvedItem',
    'RenderedDocument',
    'PathCollision'
]
