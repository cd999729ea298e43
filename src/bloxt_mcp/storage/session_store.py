"""In-memory edit sessions over a single document's text."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..config import BloxtSettings
from ..parser.markdown import Block, parse_markdown_to_blocks
from ..parser.hierarchy import build_block_tree, flatten_block_tree, move_block, move_nested_block
from ..parser.serializer import blocks_to_markdown

logger = logging.getLogger(__name__)


def normalize_content(content: str) -> str:
    """Normalize line endings to \\n."""
    return content.replace('\r\n', '\n')


def _reparse_keeping_ids(content: str, moved: list[Block]) -> tuple[Optional[str], list[Block]]:
    """
    Re-parse serialized text, carrying block IDs over from the moved blocks.

    IDs are only kept when the re-parse yields the same block texts in the
    same order. Otherwise (e.g. a moved `---` paragraph now reads as a
    preamble) the fresh IDs of the re-parse are used.
    """
    preamble, blocks = parse_markdown_to_blocks(content)
    if [b.text for b in blocks] != [b.text for b in moved]:
        logger.info("Block structure changed after move (%d -> %d blocks), IDs reassigned",
                    len(moved), len(blocks))
        return preamble, blocks
    for block, old in zip(blocks, moved):
        block.id = old.id
    return preamble, blocks


@dataclass
class DocumentSession:
    """The most recently observed text of a document and its flat blocks."""
    session_id: str
    content: str
    preamble: Optional[str]
    blocks: list[Block]
    opened_at: str = field(default_factory=lambda: datetime.now().isoformat())
    revision: int = 0

    @classmethod
    def open(cls, content: str, session_id: Optional[str] = None) -> "DocumentSession":
        content = normalize_content(content)
        preamble, blocks = parse_markdown_to_blocks(content)
        return cls(
            session_id=session_id or uuid.uuid4().hex,
            content=content,
            preamble=preamble,
            blocks=blocks,
        )

    def sync(self, content: str) -> bool:
        """
        Observe the document text. Re-parses only if it changed.

        Block IDs are reassigned on re-parse. Returns True if it changed.
        """
        content = normalize_content(content)
        if content == self.content:
            return False
        self.content = content
        self.preamble, self.blocks = parse_markdown_to_blocks(content)
        self.revision += 1
        logger.info("Session %s re-parsed (revision %d, %d blocks)",
                    self.session_id, self.revision, len(self.blocks))
        return True

    def tree(self, settings: BloxtSettings) -> list[Block]:
        return build_block_tree(self.blocks, settings)

    def move(self, source_id: str, target_id: str, settings: BloxtSettings) -> Optional[str]:
        """
        Move a block and serialize the result.

        In nested mode the block carries its subtree along. The new text is
        re-parsed so blocks, line offsets and preamble always describe it;
        block IDs survive unless the move changed how the text segments.
        Returns the new text, or None if the text is unchanged.
        """
        if settings.enable_nested_blocks:
            forest = move_nested_block(self.tree(settings), source_id, target_id)
            flat = flatten_block_tree(forest)
        else:
            flat = move_block(self.blocks, source_id, target_id)

        if [b.id for b in flat] == [b.id for b in self.blocks]:
            return None

        new_content = blocks_to_markdown(flat, self.content)
        if new_content == self.content:
            return None

        self.content = new_content
        self.preamble, self.blocks = _reparse_keeping_ids(new_content, flat)
        self.revision += 1
        logger.info("Session %s moved block %s to %s (revision %d)",
                    self.session_id, source_id, target_id, self.revision)
        return new_content

    def summary(self) -> dict:
        return {
            "session_id": self.session_id,
            "opened_at": self.opened_at,
            "revision": self.revision,
            "block_count": len(self.blocks),
            "has_preamble": self.preamble is not None,
        }


DEFAULT_MAX_SESSIONS = 32


class SessionStore:
    """Registry of open document sessions, oldest evicted past max_sessions."""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: dict[str, DocumentSession] = {}  # insertion order = opened order

    def open(self, content: str) -> DocumentSession:
        session = DocumentSession.open(content)
        self._sessions[session.session_id] = session
        logger.info("Opened session %s (%d blocks)", session.session_id, len(session.blocks))
        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info("Evicted session %s (limit %d)", oldest, self.max_sessions)
        return session

    def get(self, session_id: str) -> Optional[DocumentSession]:
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session:
            logger.info("Closed session %s", session_id)
        return session is not None

    def list_sessions(self) -> list[dict]:
        return [s.summary() for s in self._sessions.values()]
