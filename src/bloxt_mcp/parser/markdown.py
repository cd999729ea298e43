"""Markdown segmentation into header and paragraph blocks."""

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)

HEADER = "header"
PARAGRAPH = "paragraph"

HEADER_PATTERN = re.compile(r'^(#{1,6})\s+(.+)$')
PREAMBLE_DELIMITER = '---'


@dataclass
class Block:
    """A header or paragraph extracted from markdown."""
    id: str
    kind: str
    text: str
    start_line: int
    end_line: int
    level: Optional[int] = None
    draggable: bool = True
    children: list["Block"] = field(default_factory=list)

    @property
    def is_header(self) -> bool:
        return self.kind == HEADER

    @property
    def title(self) -> str:
        """Display text: header without its hashes, paragraph stripped."""
        stripped = self.text.strip()
        if self.is_header:
            return re.sub(r'^#{1,6}\s+', '', stripped)
        return stripped

    def to_dict(self, include_children: bool = True) -> dict:
        data = {
            "id": self.id,
            "kind": self.kind,
            "title": self.title,
            "text": self.text,
            "level": self.level,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "draggable": self.draggable,
        }
        if include_children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def new_block_id() -> str:
    """Generate an opaque block ID."""
    return uuid.uuid4().hex


def find_preamble_end(lines: list[str]) -> Optional[int]:
    """
    Find the closing delimiter of a leading `---` preamble.

    Returns the index of the closing `---` line, or None when the document
    does not open with a delimiter or the delimiter is never closed.
    """
    if not lines or lines[0].strip() != PREAMBLE_DELIMITER:
        return None
    for i in range(1, len(lines)):
        if lines[i].strip() == PREAMBLE_DELIMITER:
            return i
    return None


def split_preamble(content: str) -> tuple[Optional[str], int]:
    """
    Separate a leading preamble (e.g. YAML front-matter) from the body.

    Returns:
        Tuple of (preamble text or None, first body line index)
    """
    lines = content.split('\n')
    end = find_preamble_end(lines)
    if end is None:
        return None, 0
    return '\n'.join(lines[:end + 1]), end + 1


def parse_markdown_to_blocks(
    content: str,
    id_factory: Optional[Callable[[], str]] = None,
) -> tuple[Optional[str], list[Block]]:
    """
    Parse markdown content into a flat, document-ordered list of blocks.

    A header line always starts its own block. Consecutive non-blank lines
    form one paragraph; blank lines close whatever block is open. A leading
    `---` delimited preamble is never turned into a block.

    Returns:
        Tuple of (preamble text or None, blocks)
    """
    make_id = id_factory or new_block_id
    lines = content.split('\n')
    preamble, body_start = split_preamble(content)
    if preamble is not None:
        logger.debug("Preamble spans lines 0-%d", body_start - 1)

    blocks: list[Block] = []
    current: Optional[Block] = None

    for line_num in range(body_start, len(lines)):
        line = lines[line_num]
        stripped = line.strip()

        match = HEADER_PATTERN.match(stripped)
        if match:
            if current:
                blocks.append(current)
            current = Block(
                id=make_id(),
                kind=HEADER,
                text=line,
                start_line=line_num,
                end_line=line_num,
                level=len(match.group(1)),
            )
            continue

        if not stripped:
            if current:
                blocks.append(current)
                current = None
            continue

        if current is None or current.is_header:
            if current:
                blocks.append(current)
            current = Block(
                id=make_id(),
                kind=PARAGRAPH,
                text=line,
                start_line=line_num,
                end_line=line_num,
            )
        else:
            current.text += '\n' + line
            current.end_line = line_num

    if current:
        blocks.append(current)

    logger.debug("Parsed %d blocks from %d lines", len(blocks), len(lines))
    return preamble, blocks
