"""Serialize blocks back to markdown text."""

from typing import Optional

from .markdown import Block, split_preamble

BLOCK_SEPARATOR = '\n\n'


def blocks_to_markdown(blocks: list[Block], original_content: Optional[str] = None) -> str:
    """
    Join blocks into markdown, one blank line between blocks.

    A preamble found at the top of original_content is emitted first,
    verbatim, followed by one blank line. Extra blank lines and trailing
    whitespace from the original document are not kept.
    """
    preamble = None
    if original_content:
        preamble, _ = split_preamble(original_content)

    body = BLOCK_SEPARATOR.join(block.text for block in blocks)
    if preamble is None:
        return body
    return preamble + BLOCK_SEPARATOR + body

