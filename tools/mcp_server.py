# =============================================================================
# tools/mcp_server.py  —  MCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds the tool catalog (cms/registry.py) and the Dispatcher to the MCP
#   protocol.  The server has exactly two request handlers:
#
#     list_tools  → the registry descriptors, schemas served as declared
#     call_tool   → dispatcher.call(name, arguments), one text block back
#
# HOW IT WORKS (the flow):
#   1. An agent lists tools and gets the seven registry entries
#   2. The agent calls a tool by name (e.g. "get_item")
#   3. The call goes straight to the Dispatcher, which does the name lookup
#      and the argument validation itself
#   4. The agent receives the text: pretty-printed JSON, a confirmation
#      sentence, or an "Error: ..." message.  The protocol envelope never
#      reports an error.
#
# SDK INPUT VALIDATION IS OFF:
#   call_tool(validate_input=False) hands unknown names and malformed
#   arguments to the Dispatcher, so they come back as "Error: ..." text
#   like every other failure.
#
# DEPENDENCY INJECTION:
#   There is no module-level client.  create_server() receives a Dispatcher
#   (which owns the authenticated client), so tests can build a server
#   around a substitute client.
#
# RUNNING THIS SERVER:
#   python main.py   (or the directus-mcp-server console script)
#   The agent connects over stdio.
# =============================================================================

import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from cms.dispatcher import Dispatcher
from cms.registry import list_tools

SERVER_NAME = "directus-mcp-server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout carries the MCP JSON messages.  Anything
# printed to stdout would corrupt the protocol stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status (errors rendered as text)
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status messages
_RESET = "\033[0m"

_MAX_LOGGED_RESPONSE = 500


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the (truncated) tool response in GREEN, then return it."""
    shown = text if len(text) <= _MAX_LOGGED_RESPONSE else text[:_MAX_LOGGED_RESPONSE] + "…"
    logging.info(f"{_GREEN}  ← {tool_name} response: {shown}{_RESET}")
    return text


def _run(dispatcher: Dispatcher, tool_name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
    _log_request(tool_name, **(arguments if isinstance(arguments, dict) else {}))
    result = dispatcher.call(tool_name, arguments)
    if result.is_error:
        _log_status(f"{tool_name} failed")
    _log_response(tool_name, result.text)
    return [TextContent(**block) for block in result.to_content()["content"]]


# =============================================================================
# Server factory
# =============================================================================
def create_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server exposing the seven Directus tools."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[Tool]:
        return [Tool(**descriptor.to_dict()) for descriptor in list_tools()]

    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        # Remote calls are blocking httpx requests; keep them off the event loop.
        return await asyncio.to_thread(_run, dispatcher, name, arguments)

    return server


async def serve(server: Server) -> None:
    """Serve over stdio until the agent disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
