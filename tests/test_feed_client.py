"""Tests for the Steam news feed client."""

from unittest.mock import Mock, patch

import pytest
import requests

from patchping.configuration.feed_settings import FeedSettings
from patchping.datatypes.errors import FeedDecodeError, FeedNetworkError, FeedSchemaError
from patchping.feed.feed_client import FeedClient, extract_news_items

from conftest import make_raw_item


def make_response(payload=None, *, json_error=None, status_error=None):
    response = Mock()
    response.raise_for_status = Mock(side_effect=status_error)
    if json_error is not None:
        response.json = Mock(side_effect=json_error)
    else:
        response.json = Mock(return_value=payload)
    return response


@pytest.fixture
def client() -> FeedClient:
    return FeedClient(FeedSettings({"app_id": 570, "count": 10, "max_length": 300, "timeout_seconds": 15}))


class TestFetch:
    """Tests for FeedClient.fetch."""

    @patch("patchping.feed.feed_client.requests.get")
    def test_successful_fetch_returns_raw_items(self, mock_get, client):
        items = [make_raw_item(gid="1"), make_raw_item(gid="2", tags=("news",))]
        mock_get.return_value = make_response({"appnews": {"appid": 570, "newsitems": items}})

        assert client.fetch() == items

        args, kwargs = mock_get.call_args
        assert args[0] == "http://api.steampowered.com/ISteamNews/GetNewsForApp/v0002/"
        assert kwargs["params"] == {"appid": 570, "count": 10, "maxlength": 300, "format": "json"}
        assert kwargs["timeout"] == 15

    @pytest.mark.parametrize(
        "exc",
        [requests.ConnectionError("dns"), requests.Timeout("slow"), requests.TooManyRedirects("loop")],
    )
    @patch("patchping.feed.feed_client.requests.get")
    def test_transport_failures_are_network_errors(self, mock_get, exc, client):
        mock_get.side_effect = exc
        with pytest.raises(FeedNetworkError):
            client.fetch()

    @patch("patchping.feed.feed_client.requests.get")
    def test_bad_status_is_network_error(self, mock_get, client):
        mock_get.return_value = make_response(status_error=requests.HTTPError("503 Service Unavailable"))
        with pytest.raises(FeedNetworkError) as excinfo:
            client.fetch()
        assert excinfo.value.kind == "network"

    @patch("patchping.feed.feed_client.requests.get")
    def test_invalid_json_is_decode_error(self, mock_get, client):
        mock_get.return_value = make_response(json_error=ValueError("Expecting value"))
        with pytest.raises(FeedDecodeError) as excinfo:
            client.fetch()
        assert excinfo.value.kind == "decode"

    @patch("patchping.feed.feed_client.requests.get")
    def test_missing_container_is_schema_error(self, mock_get, client):
        mock_get.return_value = make_response({"unexpected": {}})
        with pytest.raises(FeedSchemaError):
            client.fetch()

    @pytest.mark.asyncio
    @patch("patchping.feed.feed_client.requests.get")
    async def test_fetch_async_runs_in_thread(self, mock_get, client):
        mock_get.return_value = make_response({"appnews": {"newsitems": []}})
        assert await client.fetch_async() == []
        mock_get.assert_called_once()


class TestExtractNewsItems:
    """Tests for the response envelope validation."""

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "appnews",
            {"appnews": []},
            {"appnews": {}},
            {"appnews": {"newsitems": {"0": {}}}},
            {"appnews": {"newsitems": None}},
        ],
    )
    def test_bad_shapes_raise_schema_error(self, payload):
        with pytest.raises(FeedSchemaError) as excinfo:
            extract_news_items(payload)
        assert excinfo.value.kind == "schema"

    def test_items_are_returned_unfiltered(self):
        items = [{"gid": "1"}, "junk"]
        assert extract_news_items({"appnews": {"newsitems": items}}) == items
