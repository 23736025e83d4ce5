"""Tests for output path resolution."""

import pytest

from exporters.path_resolver import PathResolver
from models import HandbookItem


def make_item(item_id, parent, link, slug):
    return HandbookItem(id=item_id, parent=parent, link=link, slug=slug, title=slug, content='')


@pytest.fixture
def resolver():
    return PathResolver('https://x/team/hb/')


class TestRootDiscovery:
    """Test root path selection."""

    def test_root_and_child(self, resolver):
        """The top-level item becomes index, children are relative to it."""
        items = [
            make_item(1, 0, 'https://x/team/hb/', 'hb'),
            make_item(2, 1, 'https://x/team/hb/sub-page/', 'sub-page'),
        ]

        resolved = resolver.resolve_all(items)

        assert [r.path for r in resolved] == ['index', 'sub-page']

    def test_first_root_in_received_order_wins(self, resolver):
        items = [
            make_item(5, 3, 'https://x/team/hb/a/', 'a'),
            make_item(3, 0, 'https://x/team/hb/', 'hb'),
            make_item(9, 0, 'https://x/team/other/', 'other'),
        ]

        assert resolver.find_root_path(items) == 'https://x/team/hb/'

    def test_root_link_without_trailing_slash(self, resolver):
        items = [make_item(1, 0, 'https://x/team/hb', 'hb')]

        assert resolver.find_root_path(items) == 'https://x/team/hb/'
        assert resolver.resolve_all(items)[0].path == 'index'

    def test_several_top_level_pages(self):
        """A top-level page that is not the landing page yields its parent as root."""
        base = 'https://make.wordpress.org/core/handbook/'
        resolver = PathResolver(base)
        items = [
            make_item(1, 0, base + 'about/', 'about'),
            make_item(2, 0, base + 'tutorials/', 'tutorials'),
            make_item(3, 2, base + 'tutorials/intro/', 'intro'),
            make_item(4, 0, base + 'best-practices/', 'best-practices'),
            make_item(5, 4, base + 'best-practices/intro/', 'intro'),
        ]

        resolved = resolver.resolve_all(items)

        assert resolver.find_root_path(items) == base
        assert [r.path for r in resolved] == [
            'about', 'tutorials', 'tutorials/intro', 'best-practices', 'best-practices/intro'
        ]
        assert resolver.collisions == []

    def test_top_level_page_under_different_base(self):
        """The slug is stripped even when the link is not under the configured base."""
        resolver = PathResolver('https://make.wordpress.org/core/handbook/')
        items = [
            make_item(1, 0, 'https://make.wordpress.org/core/docs/guide/', 'guide'),
            make_item(2, 1, 'https://make.wordpress.org/core/docs/guide/setup/', 'setup'),
        ]

        assert [r.path for r in resolver.resolve_all(items)] == ['guide', 'guide/setup']

    def test_fallback_root_when_no_top_level_item(self):
        resolver = PathResolver('https://make.wordpress.org/core/handbook')
        items = [make_item(2, 1, 'https://make.wordpress.org/core/handbook/tutorials/', 'tutorials')]

        assert resolver.find_root_path(items) == 'https://make.wordpress.org/core/handbook/'
        assert resolver.resolve_all(items)[0].path == 'tutorials'


class TestPathResolution:
    """Test per-item path computation."""

    def test_nested_path_and_directory(self, resolver):
        items = [
            make_item(1, 0, 'https://x/team/hb/', 'hb'),
            make_item(4, 2, 'https://x/team/hb/guide/install/linux/', 'linux'),
        ]

        resolved = resolver.resolve_all(items)[1]

        assert resolved.path == 'guide/install/linux'
        assert resolved.directory == 'guide/install'
        assert resolved.filename == 'guide/install/linux.md'

    def test_top_level_path_has_no_directory(self, resolver):
        items = [make_item(1, 0, 'https://x/team/hb/', 'hb')]

        assert resolver.resolve_all(items)[0].directory == ''

    def test_link_outside_root_uses_slug(self, resolver):
        item = make_item(8, 1, 'https://elsewhere/page/', 'moved-page')

        assert resolver.resolve_path(item, 'https://x/team/hb/') == 'moved-page'

    def test_empty_slug_outside_root_is_index(self, resolver):
        item = make_item(8, 1, 'https://elsewhere/', '')

        assert resolver.resolve_path(item, 'https://x/team/hb/') == 'index'


class TestCollisions:
    """Test duplicate path handling."""

    def test_later_item_kept_and_collision_recorded(self, resolver):
        items = [
            make_item(1, 0, 'https://x/team/hb/', 'hb'),
            make_item(2, 1, 'https://x/team/hb/faq/', 'faq'),
            make_item(3, 1, 'https://x/team/hb/faq', 'faq'),
        ]

        resolved = resolver.resolve_all(items)

        assert [r.item.id for r in resolved] == [1, 3]
        assert len(resolver.collisions) == 1
        collision = resolver.collisions[0]
        assert collision.path == 'faq'
        assert collision.kept_id == 3
        assert collision.dropped_id == 2

    def test_collisions_reset_between_runs(self, resolver):
        items = [make_item(1, 0, 'https://x/team/hb/', 'hb'), make_item(2, 1, 'https://x/team/hb/', 'hb')]
        resolver.resolve_all(items)

        resolver.resolve_all(items[:1])

        assert resolver.collisions == []


class TestFromConfig:
    """Fallback root follows the endpoint convention."""

    @pytest.mark.parametrize('handbook, expected', [
        ({'team': 'core', 'name': 'handbook', 'subdomain': 'make'}, 'https://make.wordpress.org/core/handbook/'),
        ({'team': 'plugins', 'name': 'plugin-handbook', 'subdomain': 'developer'},
         'https://developer.wordpress.org/plugins/plugin-handbook/'),
        ({'team': 'support', 'name': 'handbook', 'subdomain': 'w.org'}, 'https://wordpress.org/support/handbook/'),
        ({'team': '', 'name': 'handbook', 'subdomain': 'make'}, 'https://make.wordpress.org/handbook/'),
    ])
    def test_fallback_root(self, handbook, expected):
        resolver = PathResolver.from_config({'handbook': handbook})

        assert resolver.fallback_root == expected
