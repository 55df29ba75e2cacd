import json
import re

import httpx
import pytest

from wikipedia_mcp.application.article_service import ArticleService, set_article_service
from wikipedia_mcp.infrastructure.config.settings import WikipediaSettings
from wikipedia_mcp.infrastructure.wikipedia.client import WikipediaClient


REST_PREFIX = "/api/rest_v1"
HTML_PREFIX = REST_PREFIX + "/page/html/"

# 12000 bytes of ASCII HTML, the size used throughout the pagination scenarios
CAT_HTML = ("<html><body>" + "<p>cats</p>" * 1088).ljust(12000, " ").encode("ascii")
assert len(CAT_HTML) == 12000


class FakeWikipedia:
    """In-memory stand-in for the Wikipedia REST and action APIs."""

    def __init__(self):
        self.documents = {"Cat": CAT_HTML}
        self.json_routes = {}
        self.search_payload = {"query": {"search": []}}
        self.honour_ranges = True
        self.content_range_override = None
        self.requests = []

    def _html(self, request, title):
        doc = self.documents.get(title)
        if doc is None:
            return httpx.Response(404, json={"type": "not_found"})

        match = re.match(r"bytes=(\d+)-(\d+)", request.headers.get("range", ""))
        if not self.honour_ranges or not match:
            return httpx.Response(200, content=doc, headers={"content-type": "text/html"})

        first, last = int(match.group(1)), int(match.group(2))
        if first >= len(doc):
            return httpx.Response(416, headers={"content-range": f"bytes */{len(doc)}"})
        last = min(last, len(doc) - 1)
        headers = {"content-type": "text/html"}
        if self.content_range_override is not None:
            if self.content_range_override:
                headers["content-range"] = self.content_range_override
        else:
            headers["content-range"] = f"bytes {first}-{last}/{len(doc)}"
        return httpx.Response(206, content=doc[first:last + 1], headers=headers)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(HTML_PREFIX):
            return self._html(request, path[len(HTML_PREFIX):])
        if path == "/w/api.php":
            return httpx.Response(200, json=self.search_payload)
        route = self.json_routes.get(path[len(REST_PREFIX):])
        if route is None:
            return httpx.Response(404, json={"type": "not_found"})
        status, payload = route
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, content=json.dumps(payload).encode())


@pytest.fixture
def provider():
    return FakeWikipedia()


@pytest.fixture
def wikipedia_settings():
    return WikipediaSettings(
        rest_base_url="https://en.wikipedia.org/api/rest_v1",
        action_api_url="https://en.wikipedia.org/w/api.php",
        user_agent="wikipedia-mcp-tests/1.0",
        timeout_s=5,
    )


@pytest.fixture
def client(provider, wikipedia_settings):
    return WikipediaClient(settings=wikipedia_settings, transport=httpx.MockTransport(provider.handler))


@pytest.fixture
def service(client):
    """Article service wired to the fake provider and installed as the plugin default."""
    svc = ArticleService(source=client)
    set_article_service(svc)
    yield svc
    set_article_service(None)


@pytest.fixture
def cat_html():
    return CAT_HTML
