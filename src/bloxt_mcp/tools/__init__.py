"""MCP tool implementations."""

from .parse_blocks import parse_blocks, get_block_tree, reorder_blocks
from .sessions import open_document, update_document, get_document_tree, move_block, close_document, list_documents
from .settings import get_settings, update_settings, reset_settings

__all__ = [
    "parse_blocks",
    "get_block_tree",
    "reorder_blocks",
    "open_document",
    "update_document",
    "get_document_tree",
    "move_block",
    "close_document",
    "list_documents",
    "get_settings",
    "update_settings",
    "reset_settings",
]
