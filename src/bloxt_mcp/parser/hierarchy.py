"""Build a block forest from flat blocks, flatten it back, and move blocks."""

import logging
from dataclasses import replace
from typing import Optional

from ..config import BloxtSettings
from .markdown import Block

logger = logging.getLogger(__name__)


def is_block_draggable(block: Block, settings: BloxtSettings) -> bool:
    """Check whether settings allow a block to be dragged."""
    exclude = settings.exclude_from_dragging
    if block.is_header and block.level:
        return not exclude.header_excluded(block.level)
    return not exclude.paragraphs


def build_block_tree(blocks: list[Block], settings: BloxtSettings) -> list[Block]:
    """
    Build a forest from flat blocks.

    A header owns every following block up to the next header of the same
    or a more significant level. Blocks before the first header are roots.
    With nesting disabled every block is a root.

    The input is not modified; every returned block is a fresh copy.

    Returns a list of root blocks.
    """
    copies = [
        replace(block, draggable=is_block_draggable(block, settings), children=[])
        for block in blocks
    ]
    if not settings.enable_nested_blocks:
        return copies

    roots: list[Block] = []
    stack: list[Block] = []  # open headers, outermost first

    for block in copies:
        if block.is_header:
            while stack and stack[-1].level >= block.level:
                stack.pop()

        if stack:
            stack[-1].children.append(block)
        else:
            roots.append(block)

        if block.is_header:
            stack.append(block)

    logger.debug("Nested %d blocks into %d roots", len(copies), len(roots))
    return roots


def flatten_block_tree(nodes: list[Block]) -> list[Block]:
    """Flatten a forest back to document order (pre-order, childless copies)."""
    result: list[Block] = []
    for node in nodes:
        result.append(replace(node, children=[]))
        result.extend(flatten_block_tree(node.children))
    return result


def find_block(nodes: list[Block], block_id: str) -> Optional[Block]:
    """Find a block anywhere in a forest."""
    for node in nodes:
        if node.id == block_id:
            return node
        found = find_block(node.children, block_id)
        if found:
            return found
    return None


def get_block_path(nodes: list[Block], block_id: str) -> list[str]:
    """Get the path from root to a block (list of block IDs), empty if absent."""
    for node in nodes:
        if node.id == block_id:
            return [node.id]
        sub_path = get_block_path(node.children, block_id)
        if sub_path:
            return [node.id] + sub_path
    return []


def move_block(blocks: list[Block], source_id: str, target_id: str) -> list[Block]:
    """
    Move a block in a flat list to the position held by the target.

    Moving down places the source after the target, moving up places it
    before. An unknown source leaves the order unchanged; an unknown target
    sends the source to the end.
    """
    result = list(blocks)
    if source_id == target_id:
        return result

    ids = [b.id for b in result]
    if source_id not in ids:
        logger.warning("Move source not found: %s", source_id)
        return result

    old_index = ids.index(source_id)
    if target_id not in ids:
        logger.warning("Move target not found: %s, appending %s at end", target_id, source_id)
        result.append(result.pop(old_index))
        return result

    new_index = ids.index(target_id)
    result.insert(new_index, result.pop(old_index))
    return result


def _detach(nodes: list[Block], block_id: str) -> tuple[list[Block], Optional[Block]]:
    """Return a copy of the forest without the block, plus the removed block."""
    kept: list[Block] = []
    removed: Optional[Block] = None
    for node in nodes:
        if removed is None and node.id == block_id:
            removed = node
            continue
        if removed is None:
            children, removed = _detach(node.children, block_id)
            kept.append(replace(node, children=children))
        else:
            kept.append(node)
    return kept, removed


def _insert_after(nodes: list[Block], target_id: str, block: Block) -> tuple[list[Block], bool]:
    """Return a copy of the forest with block placed right after the target."""
    result: list[Block] = []
    inserted = False
    for node in nodes:
        if inserted:
            result.append(node)
            continue
        if node.id == target_id:
            result.extend([node, block])
            inserted = True
            continue
        children, inserted = _insert_after(node.children, target_id, block)
        result.append(replace(node, children=children) if inserted else node)
    return result, inserted


def move_nested_block(nodes: list[Block], source_id: str, target_id: str) -> list[Block]:
    """
    Move a block together with its subtree to just after the target.

    The target may sit at any depth; the source becomes its next sibling.
    If the source is unknown the forest is returned unchanged. If the target
    cannot be found (including a target inside the moved subtree) the
    subtree is appended as the last root.

    The input forest is never modified.
    """
    if source_id == target_id:
        return list(nodes)

    remaining, source = _detach(nodes, source_id)
    if source is None:
        logger.warning("Move source not found: %s", source_id)
        return list(nodes)

    moved, inserted = _insert_after(remaining, target_id, source)
    if not inserted:
        logger.warning("Move target not found: %s, appending %s at end", target_id, source_id)
        moved = remaining + [source]
    return moved
