"""Markdown block parsing utilities."""

from .markdown import Block, parse_markdown_to_blocks
from .hierarchy import build_block_tree, flatten_block_tree
from .serializer import blocks_to_markdown

__all__ = ["Block", "parse_markdown_to_blocks", "build_block_tree", "flatten_block_tree", "blocks_to_markdown"]
