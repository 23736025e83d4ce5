"""Maps handbook items to relative output paths derived from their links."""

import logging
from typing import Any, Dict, List, Optional

from models import HandbookItem, PathCollision, ResolvedItem

INDEX_NAME = 'index'


class PathResolver:
    """
    Derives a stable relative path for every item from a shared root link.

    The root link is derived from the first item with ``parent == 0`` in the
    order the items were received, so root discovery depends on fetch order.
    When no such item exists the configured handbook base is used.
    """

    def __init__(self, fallback_root: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the resolver.

        Args:
            fallback_root: Root URL used when the collection has no top-level item
            logger: Logger instance (optional)
        """
        self.fallback_root = _with_trailing_slash(fallback_root)
        self.logger = logger or logging.getLogger('handbook_markdown_sync.exporters.path_resolver')
        self.collisions: List[PathCollision] = []

    @classmethod
    def from_config(cls, config: Dict[str, Any], logger: Optional[logging.Logger] = None) -> 'PathResolver':
        """Build the fallback root with the same convention as the API endpoint."""
        from wp_client import build_site_url

        handbook_config = config.get('handbook', {})
        site_url = build_site_url(handbook_config.get('subdomain'), handbook_config.get('team'))
        handbook = handbook_config.get('name') or 'handbook'
        return cls(f"{site_url}{handbook}/", logger=logger)

    def find_root_path(self, items: List[HandbookItem]) -> str:
        """
        Return the root path for the collection.

        Args:
            items: Items in received order

        Returns:
            Root URL ending with '/'
        """
        for item in items:
            if item.is_root():
                root_path = self._root_from_top_level(item)
                self.logger.debug(f"Using item {item.id} ({item.slug}) to derive handbook root: {root_path}")
                return root_path

        self.logger.warning(f"No top-level item found, falling back to {self.fallback_root}")
        return self.fallback_root

    def _root_from_top_level(self, item: HandbookItem) -> str:
        """
        Derive the root path from a top-level item.

        The landing page links to the handbook base itself and is used as is.
        Any other top-level page sits one level below the root, so its
        trailing ``{slug}/`` segment is removed.
        """
        link = _with_trailing_slash(item.link)
        if link == self.fallback_root:
            return link

        suffix = f"/{item.slug}/"
        if item.slug and link.endswith(suffix):
            return link[:-len(suffix) + 1]

        self.logger.warning(f"Top-level link {link} does not end with slug '{item.slug}', using it as root")
        return link

    def resolve_path(self, item: HandbookItem, root_path: str) -> str:
        """
        Return the relative path (without extension) for one item.

        Links outside the root path fall back to the item's slug; the root
        itself becomes 'index'.
        """
        if item.link.startswith(root_path):
            relative = item.link[len(root_path):]
        elif _with_trailing_slash(item.link) == root_path:
            relative = ''
        else:
            self.logger.debug(f"Link {item.link} is outside {root_path}, using slug '{item.slug}'")
            relative = item.slug

        relative = relative.strip('/')
        return relative or INDEX_NAME

    def resolve_all(self, items: List[HandbookItem]) -> List[ResolvedItem]:
        """
        Resolve every item, keeping the last item when two share a path.

        Collisions are logged and recorded in ``self.collisions``.

        Args:
            items: Items in received order

        Returns:
            List of ResolvedItem in received order of the kept items
        """
        self.collisions = []
        root_path = self.find_root_path(items)

        by_path: Dict[str, ResolvedItem] = {}
        for item in items:
            path = self.resolve_path(item, root_path)
            previous = by_path.pop(path, None)
            if previous is not None:
                self.logger.warning(
                    f"Items {previous.item.id} and {item.id} both resolve to {path}.md; "
                    f"keeping item {item.id}"
                )
                self.collisions.append(PathCollision(path=path, kept_id=item.id, dropped_id=previous.item.id))
            by_path[path] = ResolvedItem(item=item, path=path)

        return list(by_path.values())


def _with_trailing_slash(url: str) -> str:
    return url.rstrip('/') + '/'


__all__ = ['PathResolver', 'INDEX_NAME']
