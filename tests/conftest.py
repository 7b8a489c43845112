"""Shared fixtures: fake HTTP transport, zones and a fixed evaluation instant."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import httpx
import pytest


def build_transport(routes: dict) -> httpx.MockTransport:
    """
    Build a MockTransport from ``{"https://host/path": route}``.

    A route is ``(status, body)``, ``(status, body, content_type)`` or a
    callable taking the request. Unknown URLs answer 404. Requested URLs
    are recorded on ``transport.calls``.
    """
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request):
        calls.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        route = routes.get(key)
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        status, body, *rest = route
        content_type = rest[0] if rest else "text/html; charset=utf-8"
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body, headers={"Content-Type": content_type})

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


@pytest.fixture
def make_transport():
    """Factory fixture for fake transports."""
    return build_transport


@pytest.fixture
def utc():
    return ZoneInfo("UTC")


@pytest.fixture
def now():
    """Fixed evaluation instant."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Global development | The Guardian</title>
    <link>https://www.theguardian.com/global-development</link>
    <description>Latest global development news</description>
    <item>
      <title>UK aid budget cut hits Africa programmes</title>
      <link>https://www.theguardian.com/global-development/uk-aid-cut</link>
      <pubDate>Fri, 14 Jun 2024 08:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Undated explainer</title>
      <link>https://www.theguardian.com/global-development/explainer</link>
    </item>
    <item>
      <title>Kenya floods worsen</title>
      <link>https://www.theguardian.com/global-development/kenya-floods</link>
      <pubDate>Thu, 13 Jun 2024 18:30:00 GMT</pubDate>
    </item>
  </channel>
</rss>
"""

RELIEFWEB_PAYLOAD = {
    "data": [
        {
            "fields": {
                "title": "Sahel: donors pledge new funding",
                "url": "https://reliefweb.int/report/sahel-pledge",
                "date": {
                    "created": "2024-06-14T10:00:00+00:00",
                    "original": "2024-06-01T00:00:00+00:00",
                },
            }
        },
        {
            "fields": {
                "title": "Weekly situation report",
                "url": "https://reliefweb.int/report/weekly",
                "date": {"original": "2024-06-12T00:00:00+00:00"},
            }
        },
        {
            "fields": {
                "url": "https://reliefweb.int/report/untitled",
            }
        },
    ]
}

LISTING_HTML = """
<html>
<body>
  <div class="views-row">
    <time datetime="2024-06-14T09:00:00Z">14 June 2024</time>
    <a href="/policy-updates/germany-development-budget">Germany  cuts
      development budget</a>
    <a href="https://www.bundesregierung.de/news/123">Original announcement</a>
  </div>
  <div class="views-row">
    <a href="https://donortracker.org/policy-updates/uk-aid">UK aid update</a>
  </div>
  <div class="views-row"><span>No link in this card</span></div>
  <div class="views-row">
    <a href="https://example.org/report">External only</a>
  </div>
</body>
</html>
"""


@pytest.fixture
def rss_feed():
    return RSS_FEED


@pytest.fixture
def reliefweb_payload():
    return RELIEFWEB_PAYLOAD


@pytest.fixture
def listing_html():
    return LISTING_HTML
