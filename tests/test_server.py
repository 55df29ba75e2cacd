import httpx
import pytest
from mcp import types
from mcp.shared.exceptions import McpError

from wikipedia_mcp.application.article_service import ArticleService, set_article_service
from wikipedia_mcp.infrastructure.tools.registry import DefaultToolRegistry
from wikipedia_mcp.infrastructure.wikipedia.client import WikipediaClient
from wikipedia_mcp.plugin_loader import reload_plugins
from wikipedia_mcp.server import (
    SUMMARY_RESOURCE_TEMPLATE,
    create_server,
    dispatch_tool_call,
    parse_summary_uri,
    read_summary_resource,
    to_mcp_tool,
)


@pytest.fixture
def registry():
    reload_plugins()
    return DefaultToolRegistry()


@pytest.mark.asyncio
async def test_content_call_returns_text_chunk(service, registry):
    result = await dispatch_tool_call(registry, "get-article-content", {"title": "Cat", "start": 0, "length": 5000})

    assert isinstance(result, types.CallToolResult)
    assert result.isError is False
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert "request starting from 5000" in result.content[0].text


@pytest.mark.asyncio
async def test_provider_error_sets_is_error_with_status_code(service, registry):
    result = await dispatch_tool_call(registry, "get-article-content", {"title": "Dog"})

    assert result.isError is True
    assert "404" in result.content[0].text
    assert result.content[0].text.startswith("Error retrieving article content:")


@pytest.mark.asyncio
async def test_missing_arguments_are_an_error_result(service, registry):
    result = await dispatch_tool_call(registry, "get-article-content", None)

    assert result.isError is True
    assert "title" in result.content[0].text


@pytest.mark.asyncio
async def test_unknown_tool_is_an_error_result(registry):
    result = await dispatch_tool_call(registry, "delete-article", {})

    assert result.isError is True
    assert result.content[0].text == "Tool 'delete-article' not found"


def test_to_mcp_tool_uses_parameter_schema(registry):
    tool = to_mcp_tool(registry.get_tool("search-wikipedia").get_schema())

    assert tool.name == "search-wikipedia"
    assert tool.inputSchema["required"] == ["query"]
    assert tool.description


@pytest.mark.parametrize("uri,title", [
    ("wikipedia://article/Cat/summary", "Cat"),
    ("wikipedia://article/Albert%20Einstein/summary", "Albert Einstein"),
    ("wikipedia://article/AC%2FDC/summary", "AC/DC"),
])
def test_parse_summary_uri(uri, title):
    assert parse_summary_uri(uri) == title


def test_parse_summary_uri_rejects_other_resources():
    with pytest.raises(McpError):
        parse_summary_uri("wikipedia://article/Cat/html")


@pytest.mark.asyncio
async def test_read_summary_resource(service, provider):
    provider.json_routes["/page/summary/Cat"] = (200, {"extract": "Cats purr."})

    assert await read_summary_resource(service, "wikipedia://article/Cat/summary") == "Cats purr."


@pytest.mark.asyncio
async def test_read_summary_resource_failure_raises(service):
    with pytest.raises(McpError) as excinfo:
        await read_summary_resource(service, "wikipedia://article/Dog/summary")

    assert "404" in excinfo.value.error.message


@pytest.mark.asyncio
async def test_created_server_lists_plugin_tools(service, registry):
    app = create_server(registry=registry, service=service, name="test-wikipedia")

    handler = app.request_handlers[types.ListToolsRequest]
    response = await handler(types.ListToolsRequest(method="tools/list"))

    assert app.name == "test-wikipedia"
    assert {tool.name for tool in response.root.tools} >= {"get-article-content", "search-wikipedia"}


def test_summary_template_shape():
    assert SUMMARY_RESOURCE_TEMPLATE.format(title="Cat") == "wikipedia://article/Cat/summary"


@pytest.mark.asyncio
async def test_connection_failure_is_an_error_result(wikipedia_settings, registry):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = WikipediaClient(settings=wikipedia_settings, transport=httpx.MockTransport(refuse))
    set_article_service(ArticleService(source=client))
    try:
        result = await dispatch_tool_call(registry, "get-article-content", {"title": "Cat"})
    finally:
        set_article_service(None)

    assert result.isError is True
    assert result.content[0].text.startswith(
        "Error retrieving article content: Wikipedia API request failed: connection refused"
    )


@pytest.mark.asyncio
async def test_malformed_json_arguments_report_the_decode_error(service, registry):
    result = await dispatch_tool_call(registry, "get-article-summary", '{"title": ')

    assert result.isError is True
    assert result.content[0].text.startswith("Invalid JSON arguments for get-article-summary")
