"""Stateless tools: parse a document into blocks, build its tree, reorder it."""

from typing import Optional

from ..parser.markdown import parse_markdown_to_blocks
from ..parser.hierarchy import build_block_tree
from ..parser.serializer import blocks_to_markdown
from ..storage.session_store import normalize_content
from ..storage.settings_store import SettingsStore


def parse_blocks(content: str) -> dict:
    """
    Split a markdown document into its flat list of blocks.

    Args:
        content: Full document text

    Returns:
        Dict with the preamble (if any) and blocks in document order
    """
    preamble, blocks = parse_markdown_to_blocks(normalize_content(content))
    return {
        "preamble": preamble,
        "block_count": len(blocks),
        "blocks": [b.to_dict(include_children=False) for b in blocks],
    }


def get_block_tree(content: str, storage_path: Optional[str] = None) -> dict:
    """
    Get the blocks of a document nested under their headers.

    Args:
        content: Full document text
        storage_path: Custom storage path for settings (defaults to ~/.bloxt)

    Returns:
        Dict with the block forest, built with the stored settings
    """
    settings = SettingsStore(storage_path).load()
    preamble, blocks = parse_markdown_to_blocks(normalize_content(content))
    tree = build_block_tree(blocks, settings)
    return {
        "nested": settings.enable_nested_blocks,
        "preamble": preamble,
        "block_count": len(blocks),
        "tree": [node.to_dict() for node in tree],
    }


def reorder_blocks(content: str, from_index: int, to_index: int) -> dict:
    """
    Move one block of a flat document to another position.

    Indexes refer to the flat block list returned by parse_blocks.

    Returns:
        Dict with whether the text changed and the resulting text
    """
    content = normalize_content(content)
    _, blocks = parse_markdown_to_blocks(content)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < len(blocks):
            return {"error": f"{name} out of range: {index} (document has {len(blocks)} blocks)"}

    if from_index == to_index:
        return {"changed": False, "content": content}

    reordered = list(blocks)
    reordered.insert(to_index, reordered.pop(from_index))
    new_content = blocks_to_markdown(reordered, content)
    return {
        "changed": new_content != content,
        "content": new_content,
    }
