#!/usr/bin/env python3
"""
Main CLI application for Wikipedia MCP.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import after loading env vars to ensure proper configuration
from . import __version__
from .domain.models.tool import ToolCall, ToolExecutionContext
from .infrastructure.config.settings import reload_settings
from .utils import setup_logging


def _parse_tool_args(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError("--args must be a JSON object")
    return value


async def _run_tool_once(name: str, arguments: Dict[str, Any], print_limit: Optional[int]) -> int:
    from .infrastructure.tools.registry import DefaultToolRegistry

    registry = DefaultToolRegistry()
    result = await registry.execute_tool(
        ToolCall.from_request(name, arguments),
        ToolExecutionContext(print_limit=print_limit)
    )
    if result.success:
        print(result.content)
        return 0
    print(result.text, file=sys.stderr)
    return 1


def main(argv: Optional[list] = None) -> int:
    """Main entry point for Wikipedia MCP."""
    parser = argparse.ArgumentParser(
        prog="wikipedia-mcp",
        description="Model Context Protocol server for Wikipedia articles, summaries and search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                                   # Serve MCP over stdio
  %(prog)s --list-tools                                      # Show available tools
  %(prog)s --tool get-article-summary --args '{"title": "Cat"}'
  %(prog)s --tool get-article-content --args '{"title": "Cat", "start": 5000}'
        """
    )

    parser.add_argument('--tool',
                        help='Invoke a single tool once and print its result instead of serving')
    parser.add_argument('--args',
                        help='JSON object with arguments for --tool')
    parser.add_argument('--list-tools',
                        action='store_true',
                        help='List registered tools and exit')
    env_tool_print = os.getenv('TOOL_PRINT_LIMIT', '')
    parser.add_argument('--tool-print-limit',
                        type=int,
                        default=int(env_tool_print) if env_tool_print.isdigit() else None,
                        help='Character limit when printing a --tool result (default: no limit)')
    parser.add_argument('--log-level',
                        default=os.getenv('LOG_LEVEL', 'INFO'),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Set logging level')
    parser.add_argument('--version',
                        action='version',
                        version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    settings = reload_settings()
    setup_logging(args.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    if args.list_tools:
        from .infrastructure.tools.registry import DefaultToolRegistry

        for schema in DefaultToolRegistry().get_schemas():
            print(f"{schema.name}: {schema.description}")
        return 0

    if args.tool:
        try:
            tool_args = _parse_tool_args(args.args)
        except ValueError as e:
            print(f"Error: invalid --args: {e}", file=sys.stderr)
            return 2
        return asyncio.run(_run_tool_once(args.tool, tool_args, args.tool_print_limit))

    from .server import serve

    logger.info(f"Starting {settings.mcp_server.name} server on stdio")
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Server interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
