"""Tests for the concurrent fetch dispatcher."""

import asyncio

import pytest

from funding_news.core.http_client import HttpClient
from funding_news.core.models import FetchResult, NormalizedItem, SourceSpec
from funding_news.strategies.base import FetchStrategy
from funding_news.strategies.dispatcher import FetchDispatcher, host_contains
from funding_news.strategies.feed import FeedStrategy
from funding_news.strategies.listing import ListingStrategy
from funding_news.strategies.report_api import ReportApiStrategy


class EchoStrategy(FetchStrategy):
    """Returns one item per call, optionally after a delay."""

    def __init__(self, delay: float = 0.0, count: int = 1):
        super().__init__(http_client=None)
        self.delay = delay
        self.count = count

    async def fetch(self, source_url, cap, zone):
        await asyncio.sleep(self.delay)
        items = [
            NormalizedItem(
                title=f"{source_url} #{i}",
                url=f"{source_url}/{i}",
                source="echo",
                match_text=f"{source_url} #{i} echo",
            )
            for i in range(self.count)
        ]
        return FetchResult(source_label=source_url, items=items)


class ExplodingStrategy(FetchStrategy):
    """Fails with an unexpected error."""

    def __init__(self):
        super().__init__(http_client=None)

    async def fetch(self, source_url, cap, zone):
        raise ValueError("malformed response")


class TestHostContains:
    """Tests for host_contains predicate."""

    def test_matches_host(self):
        assert host_contains("reliefweb.int")("https://api.reliefweb.int/v1/reports") is True

    def test_ignores_path(self):
        assert host_contains("reliefweb.int")("https://example.com/reliefweb.int") is False

    def test_invalid_url(self):
        assert host_contains("reliefweb.int")("not a url") is False


class TestSelect:
    """Tests for strategy selection."""

    @pytest.mark.asyncio
    async def test_default_routes(self):
        async with HttpClient() as client:
            dispatcher = FetchDispatcher(client)

            assert isinstance(dispatcher.select("https://reliefweb.int/updates"), ReportApiStrategy)
            assert isinstance(dispatcher.select("https://donortracker.org/policy_updates"), ListingStrategy)
            assert isinstance(dispatcher.select("https://www.theguardian.com/rss"), FeedStrategy)

    @pytest.mark.asyncio
    async def test_first_matching_route_wins(self):
        first, second = EchoStrategy(), EchoStrategy()
        async with HttpClient() as client:
            dispatcher = FetchDispatcher(
                client,
                routes=[(host_contains("example"), first), (host_contains("example.org"), second)],
            )

            assert dispatcher.select("https://example.org/feed") is first


class TestDispatch:
    """Tests for dispatch."""

    @pytest.mark.asyncio
    async def test_one_result_per_source_in_order(self, utc):
        sources = [
            SourceSpec(url="https://slow.example/feed", cap=5),
            SourceSpec(url="https://broken.example/feed", cap=5),
            SourceSpec(url="https://fast.example/feed", cap=5),
        ]

        async with HttpClient() as client:
            dispatcher = FetchDispatcher(
                client,
                routes=[
                    (host_contains("slow"), EchoStrategy(delay=0.05)),
                    (host_contains("broken"), ExplodingStrategy()),
                ],
                default=EchoStrategy(),
            )
            results = await dispatcher.dispatch(sources, utc)

        assert len(results) == 3
        assert results[0].source_label == "https://slow.example/feed"
        assert results[2].source_label == "https://fast.example/feed"

        failed = results[1]
        assert failed.source_label == "https://broken.example/feed"
        assert failed.errors == ["malformed response"]
        assert len(failed.items) == 1
        assert failed.items[0].title == "Failed to fetch: https://broken.example/feed"
        assert failed.items[0].is_error

    @pytest.mark.asyncio
    async def test_items_truncated_to_cap(self, utc):
        async with HttpClient() as client:
            dispatcher = FetchDispatcher(client, routes=[], default=EchoStrategy(count=5))
            results = await dispatcher.dispatch([SourceSpec(url="https://a.example", cap=2)], utc)

        assert len(results[0].items) == 2

    @pytest.mark.asyncio
    async def test_empty_source_list(self, utc):
        async with HttpClient() as client:
            assert await FetchDispatcher(client).dispatch([], utc) == []

    @pytest.mark.asyncio
    async def test_report_api_http_500(self, make_transport, utc):
        transport = make_transport({"https://api.reliefweb.int/v1/reports": (500, "oops")})

        async with HttpClient(transport=transport) as client:
            results = await FetchDispatcher(client).dispatch(
                [SourceSpec(url="https://reliefweb.int/updates", cap=5)], utc
            )

        assert results[0].items == []
        assert results[0].errors == ["HTTP 500"]

    @pytest.mark.asyncio
    async def test_feed_failure_becomes_sentinel(self, make_transport, utc):
        transport = make_transport({"https://broken.example/feed": (200, "plain text, no feed")})

        async with HttpClient(transport=transport) as client:
            results = await FetchDispatcher(client).dispatch(
                [SourceSpec(url="https://broken.example/feed", cap=5)], utc
            )

        result = results[0]
        assert result.source_label == "https://broken.example/feed"
        assert [i.is_error for i in result.items] == [True]
        assert result.fetched_items == []
        assert result.errors
        assert result.errors[0].startswith("https://broken.example/feed -> ")

    @pytest.mark.asyncio
    async def test_malformed_json_becomes_sentinel(self, make_transport, utc):
        transport = make_transport({
            "https://api.reliefweb.int/v1/reports": (200, "{not json", "application/json"),
        })

        async with HttpClient(transport=transport) as client:
            results = await FetchDispatcher(client).dispatch(
                [SourceSpec(url="https://reliefweb.int/updates", cap=5)], utc
            )

        assert results[0].items[0].is_error
        assert len(results[0].errors) == 1
