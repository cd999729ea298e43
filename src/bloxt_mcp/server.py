"""MCP Server for rearranging markdown documents block by block."""

import asyncio
import json
import logging
import os
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.parse_blocks import (
    parse_blocks as do_parse_blocks,
    get_block_tree as do_get_block_tree,
    reorder_blocks as do_reorder_blocks,
)
from .tools.sessions import (
    open_document as do_open_document,
    update_document as do_update_document,
    get_document_tree as do_get_document_tree,
    move_block as do_move_block,
    close_document as do_close_document,
    list_documents as do_list_documents,
)
from .tools.settings import (
    get_settings as do_get_settings,
    update_settings as do_update_settings,
    reset_settings as do_reset_settings,
)

logger = logging.getLogger(__name__)

_CONTENT_PROPERTY = {
    "type": "string",
    "description": "Full markdown text of the document",
}
_SESSION_PROPERTY = {
    "type": "string",
    "description": "Session ID returned by open_document",
}


# Create MCP server
server = Server("bloxt-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="parse_blocks",
            description="""Split a markdown document into blocks.

Every header line is a block; consecutive non-blank lines form a paragraph
block. A leading --- delimited front-matter is returned separately and is
never a block.""",
            inputSchema={
                "type": "object",
                "properties": {"content": _CONTENT_PROPERTY},
                "required": ["content"],
            },
        ),
        Tool(
            name="get_block_tree",
            description="""Get a document's blocks nested under their headers.

A header owns the blocks up to the next header of the same or higher rank.
Each block carries a draggable flag derived from the settings.""",
            inputSchema={
                "type": "object",
                "properties": {"content": _CONTENT_PROPERTY},
                "required": ["content"],
            },
        ),
        Tool(
            name="reorder_blocks",
            description="""Move one block to another position and return the new document.

Indexes refer to the flat list returned by parse_blocks. Blocks are
re-joined with a single blank line between them.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": _CONTENT_PROPERTY,
                    "from_index": {
                        "type": "integer",
                        "description": "Index of the block to move",
                    },
                    "to_index": {
                        "type": "integer",
                        "description": "Index the block should end up at",
                    },
                },
                "required": ["content", "from_index", "to_index"],
            },
        ),
        Tool(
            name="open_document",
            description="""Open an edit session for a document.

Returns a session ID and the block tree. Block IDs stay valid across
move_block calls within the session.""",
            inputSchema={
                "type": "object",
                "properties": {"content": _CONTENT_PROPERTY},
                "required": ["content"],
            },
        ),
        Tool(
            name="update_document",
            description="""Report the document's current text to a session.

The document is re-parsed only if the text changed since the session last
saw it; block IDs are reassigned in that case.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "session_id": _SESSION_PROPERTY,
                    "content": _CONTENT_PROPERTY,
                },
                "required": ["session_id", "content"],
            },
        ),
        Tool(
            name="get_document_tree",
            description="Get the current block tree of an open session.",
            inputSchema={
                "type": "object",
                "properties": {"session_id": _SESSION_PROPERTY},
                "required": ["session_id"],
            },
        ),
        Tool(
            name="move_block",
            description="""Move a block within an open document.

With nested blocks enabled the block moves together with everything nested
under it and lands right after the target block. Otherwise it takes the
target block's position. Returns the new document text when it changed.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "session_id": _SESSION_PROPERTY,
                    "source_id": {
                        "type": "string",
                        "description": "ID of the block to move",
                    },
                    "target_id": {
                        "type": "string",
                        "description": "ID of the block to move next to",
                    },
                },
                "required": ["session_id", "source_id", "target_id"],
            },
        ),
        Tool(
            name="close_document",
            description="Close an edit session.",
            inputSchema={
                "type": "object",
                "properties": {"session_id": _SESSION_PROPERTY},
                "required": ["session_id"],
            },
        ),
        Tool(
            name="list_documents",
            description="List open edit sessions.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_settings",
            description="Get the block editor settings.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="update_settings",
            description="""Change block editor settings.

Fields: enabled, enable_nested_blocks, and exclude_from_dragging with
h1..h6, frontmatter and paragraphs. Omitted fields keep their value.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "changes": {
                        "type": "object",
                        "description": "Partial settings, e.g. {\"exclude_from_dragging\": {\"h1\": false}}",
                    },
                },
                "required": ["changes"],
            },
        ),
        Tool(
            name="reset_settings",
            description="Restore the default block editor settings.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "parse_blocks":
            result = do_parse_blocks(content=arguments["content"])
        elif name == "get_block_tree":
            result = do_get_block_tree(content=arguments["content"])
        elif name == "reorder_blocks":
            result = do_reorder_blocks(
                content=arguments["content"],
                from_index=arguments["from_index"],
                to_index=arguments["to_index"],
            )
        elif name == "open_document":
            result = do_open_document(content=arguments["content"])
        elif name == "update_document":
            result = do_update_document(
                session_id=arguments["session_id"],
                content=arguments["content"],
            )
        elif name == "get_document_tree":
            result = do_get_document_tree(session_id=arguments["session_id"])
        elif name == "move_block":
            result = do_move_block(
                session_id=arguments["session_id"],
                source_id=arguments["source_id"],
                target_id=arguments["target_id"],
            )
        elif name == "close_document":
            result = do_close_document(session_id=arguments["session_id"])
        elif name == "list_documents":
            result = do_list_documents()
        elif name == "get_settings":
            result = do_get_settings()
        elif name == "update_settings":
            result = do_update_settings(changes=arguments["changes"])
        elif name == "reset_settings":
            result = do_reset_settings()
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=os.environ.get("BLOXT_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
