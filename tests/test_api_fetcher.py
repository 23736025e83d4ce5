"""Tests for paginated collection fetching and the REST client."""

from unittest import mock

import pytest
import requests

from fetchers import ApiFetcher, EmptyCollectionError, FetchError
from wp_client import HandbookClient, build_site_url


def api_item(item_id, parent=1):
    return {
        'id': item_id,
        'parent': parent,
        'link': f'https://make.wordpress.org/core/handbook/page-{item_id}/',
        'slug': f'page-{item_id}',
        'title': {'rendered': f'Page {item_id}'},
        'content': {'rendered': f'<p>Body {item_id}</p>'}
    }


class FakeClient:
    """Serves pre-built pages and records requested page numbers."""

    def __init__(self, pages, fail_on=None):
        self.pages = pages
        self.fail_on = fail_on
        self.requested = []

    def get_collection_page(self, page, per_page):
        self.requested.append((page, per_page))
        if page == self.fail_on:
            raise FetchError(page, 500, 'Internal Server Error')
        return self.pages[page - 1], len(self.pages)


class TestApiFetcher:
    """Test pagination behaviour."""

    def test_all_pages_fetched_in_order(self):
        """P pages of size S yield every item in page-then-within-page order."""
        pages = [
            [api_item(1, 0), api_item(2)],
            [api_item(3), api_item(4)],
            [api_item(5)],
        ]
        client = FakeClient(pages)
        fetcher = ApiFetcher(client, per_page=2)

        items = fetcher.fetch_all()

        assert [item.id for item in items] == [1, 2, 3, 4, 5]
        assert client.requested == [(1, 2), (2, 2), (3, 2)]
        assert fetcher.requests_made == 3

    def test_single_page(self):
        client = FakeClient([[api_item(1, 0)]])

        items = ApiFetcher(client).fetch_all()

        assert len(items) == 1
        assert client.requested == [(1, 100)]

    def test_items_are_parsed(self):
        client = FakeClient([[api_item(1, 0)]])

        item = ApiFetcher(client).fetch_all()[0]

        assert item.parent == 0
        assert item.slug == 'page-1'
        assert item.title == 'Page 1'
        assert item.content == '<p>Body 1</p>'

    def test_failure_aborts_remaining_pages(self):
        """A failing page stops the fetch; later pages are never requested."""
        pages = [[api_item(1)], [api_item(2)], [api_item(3)]]
        client = FakeClient(pages, fail_on=2)

        with pytest.raises(FetchError) as excinfo:
            ApiFetcher(client, per_page=1).fetch_all()

        assert excinfo.value.page == 2
        assert excinfo.value.status_code == 500
        assert [page for page, _ in client.requested] == [1, 2]

    def test_empty_collection(self):
        client = FakeClient([[]])

        with pytest.raises(EmptyCollectionError):
            ApiFetcher(client).fetch_all()

    def test_malformed_item_is_fetch_error(self):
        broken = api_item(2)
        del broken['link']
        client = FakeClient([[api_item(1), broken]])

        with pytest.raises(FetchError) as excinfo:
            ApiFetcher(client).fetch_all()

        assert excinfo.value.page == 1

    def test_from_config(self):
        config = {
            'handbook': {'team': 'core', 'name': 'handbook', 'subdomain': 'make'},
            'advanced': {'per_page': 50, 'request_timeout': 10, 'verify_ssl': True}
        }

        fetcher = ApiFetcher.from_config(config)

        assert fetcher.per_page == 50
        assert fetcher.client.collection_url == 'https://make.wordpress.org/core/wp-json/wp/v2/handbook'
        assert fetcher.client.timeout == 10


def make_response(status_code=200, body=None, headers=None):
    response = mock.Mock()
    response.status_code = status_code
    response.url = 'https://make.wordpress.org/core/wp-json/wp/v2/handbook'
    response.headers = headers or {}
    response.text = ''
    response.json.return_value = body if body is not None else []
    return response


class TestHandbookClient:
    """Test the REST client with a mocked session."""

    def setup_method(self):
        self.session = mock.Mock()
        self.session.headers = {}
        self.client = HandbookClient('https://make.wordpress.org/core/', session=self.session, timeout=5)

    def test_requests_page_with_page_size(self):
        self.session.get.return_value = make_response(body=[api_item(1)], headers={'X-WP-TotalPages': '3'})

        items, total_pages = self.client.get_collection_page(2, 100)

        self.session.get.assert_called_once_with(
            'https://make.wordpress.org/core/wp-json/wp/v2/handbook',
            params={'page': 2, 'per_page': 100},
            timeout=5
        )
        assert items == [api_item(1)]
        assert total_pages == 3

    def test_missing_total_pages_header_means_one_page(self):
        self.session.get.return_value = make_response(body=[])

        _, total_pages = self.client.get_collection_page(1, 100)

        assert total_pages == 1

    def test_non_success_status(self):
        response = make_response(status_code=404, body={'code': 'rest_no_route', 'message': 'No route'})
        self.session.get.return_value = response

        with pytest.raises(FetchError) as excinfo:
            self.client.get_collection_page(1, 100)

        assert excinfo.value.page == 1
        assert excinfo.value.status_code == 404
        assert 'No route' in str(excinfo.value)

    def test_network_error(self):
        self.session.get.side_effect = requests.exceptions.ConnectionError('connection refused')

        with pytest.raises(FetchError) as excinfo:
            self.client.get_collection_page(3, 100)

        assert excinfo.value.page == 3
        assert excinfo.value.status_code is None

    def test_body_must_be_array(self):
        self.session.get.return_value = make_response(body={'unexpected': True})

        with pytest.raises(FetchError):
            self.client.get_collection_page(1, 100)


class TestSiteUrl:
    @pytest.mark.parametrize('subdomain, team, expected', [
        ('make', 'core', 'https://make.wordpress.org/core/'),
        (None, 'core', 'https://make.wordpress.org/core/'),
        ('developer', 'plugins', 'https://developer.wordpress.org/plugins/'),
        ('w.org', 'support', 'https://wordpress.org/support/'),
        ('make', '', 'https://make.wordpress.org/'),
    ])
    def test_build_site_url(self, subdomain, team, expected):
        assert build_site_url(subdomain, team) == expected
