"""Stdio MCP server for context-stash.

Tools:
    context.create(markdown)  → {"ref": ..., "file": ...}
    context.get(ref)          → {"markdown": ...}
    context.list()            → {"entries": [{"ref", "file"}, ...]}
    context.search(query)     → {"results": [{"ref", "file", "snippet"}, ...]}

Protocol: JSON-RPC 2.0 over stdin/stdout (Model Context Protocol), one message per line.
Requests are handled one at a time in arrival order.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ctxstash import __version__
from ctxstash.errors import StashError
from ctxstash.store import EntryStore

logger = logging.getLogger("ctxstash.mcp")

_PROTOCOL_VERSION = "2024-11-05"


def _tool_defs() -> list[dict[str, Any]]:
    return [
        {
            "name": "context.create",
            "description": "Create a new immutable context entry",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "markdown": {"type": "string", "description": "Markdown content for the context entry"},
                },
                "required": ["markdown"],
            },
        },
        {
            "name": "context.get",
            "description": "Retrieve the contents of a context entry",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "ref": {"type": "string", "description": 'Reference number (e.g., "00012")'},
                },
                "required": ["ref"],
            },
        },
        {
            "name": "context.list",
            "description": "List all context entries",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "context.search",
            "description": "Search context entries by keyword (case-insensitive, first matching line per entry)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Search query string"},
                },
                "required": ["query"],
            },
        },
    ]


def _require_str(args: dict[str, Any], name: str) -> str:
    value = args.get(name)
    if not isinstance(value, str):
        msg = f"{name} must be a string"
        raise ValueError(msg)
    return value


class StashServer:
    def __init__(self, root: Path | str) -> None:
        self.store = EntryStore(root)

    def _call_create(self, args: dict[str, Any]) -> dict[str, Any]:
        entry = self.store.create(_require_str(args, "markdown"))
        return entry.to_dict()

    def _call_get(self, args: dict[str, Any]) -> dict[str, Any]:
        return {"markdown": self.store.get(_require_str(args, "ref"))}

    def _call_list(self, args: dict[str, Any]) -> dict[str, Any]:
        return {"entries": [e.to_dict() for e in self.store.list()]}

    def _call_search(self, args: dict[str, Any]) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.store.search(_require_str(args, "query"))]}

    def call_tool(self, name: str, arguments: dict[str, Any]) -> str:
        dispatch = {
            "context.create": self._call_create,
            "context.get": self._call_get,
            "context.list": self._call_list,
            "context.search": self._call_search,
        }
        if name not in dispatch:
            msg = f"Unknown tool: {name}"
            raise ValueError(msg)
        return json.dumps(dispatch[name](arguments), indent=2)


def _tool_result(text: str, *, is_error: bool) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


def _error(msg_id: Any, code: int, message: str) -> dict[str, Any] | None:
    if msg_id is None:
        return None
    return {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}


def handle_message(server: StashServer, msg: dict[str, Any]) -> dict[str, Any] | None:
    """Return the JSON-RPC response for msg, or None for notifications."""
    method = msg.get("method", "")
    msg_id = msg.get("id")

    if method == "initialize":
        result: dict[str, Any] = {
            "protocolVersion": _PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "context-stash", "version": __version__},
        }
    elif method == "ping":
        result = {}
    elif method == "tools/list":
        result = {"tools": _tool_defs()}
    elif method == "tools/call":
        params = msg.get("params") or {}
        if not isinstance(params, dict):
            return _error(msg_id, -32602, "Invalid params: expected an object")
        tool_name = params.get("name", "")
        arguments = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not isinstance(arguments, dict):
            return _error(msg_id, -32602, "Invalid params: name must be a string and arguments an object")
        try:
            result = _tool_result(server.call_tool(tool_name, arguments), is_error=False)
        except (StashError, ValueError) as exc:
            logger.info("%s failed: %s", tool_name, exc)
            result = _tool_result(f"Error: {exc}", is_error=True)
        except Exception as exc:
            logger.exception("%s crashed", tool_name)
            result = _tool_result(f"Error: {exc}", is_error=True)
    elif msg_id is None:
        # notifications/initialized and any other notification
        return None
    else:
        return _error(msg_id, -32601, f"Method not found: {method}")

    if msg_id is None:
        return None
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


async def _run_server(root: Path) -> None:
    server = StashServer(root)
    reader = asyncio.StreamReader()
    loop = asyncio.get_running_loop()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)

    writer_transport, _ = await loop.connect_write_pipe(asyncio.BaseProtocol, sys.stdout.buffer)

    def write_json(obj: Any) -> None:
        line = json.dumps(obj) + "\n"
        writer_transport.write(line.encode())

    logger.info("serving workspace %s", root)
    while True:
        try:
            line = await reader.readline()
        except (asyncio.IncompleteReadError, EOFError):
            break
        if not line:
            break
        try:
            msg = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("ignoring malformed message: %r", line[:200])
            continue
        if not isinstance(msg, dict):
            continue

        response = handle_message(server, msg)
        if response is not None:
            write_json(response)


def run_server(root: Path) -> None:
    """Entry point for `context-stash serve`."""
    asyncio.run(_run_server(root))
