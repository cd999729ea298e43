"""Markdown block segmentation, nesting and reordering over MCP."""
