"""Session tools: keep a document open and move its blocks by ID."""

from typing import Optional

from ..parser.hierarchy import find_block, get_block_path
from ..storage.session_store import SessionStore, DocumentSession
from ..storage.settings_store import SettingsStore

_default_store = SessionStore()


def _resolve_session(store: Optional[SessionStore], session_id: str) -> tuple[Optional[DocumentSession], Optional[dict]]:
    """Look up a session and return (session, error_dict)."""
    session = (store or _default_store).get(session_id)
    if session is None:
        return None, {"error": f"Session not found: {session_id}"}
    return session, None


def _tree_payload(session: DocumentSession, storage_path: Optional[str]) -> dict:
    settings = SettingsStore(storage_path).load()
    return {
        "session_id": session.session_id,
        "revision": session.revision,
        "nested": settings.enable_nested_blocks,
        "preamble": session.preamble,
        "tree": [node.to_dict() for node in session.tree(settings)],
    }


def open_document(
    content: str,
    storage_path: Optional[str] = None,
    store: Optional[SessionStore] = None,
) -> dict:
    """
    Open an edit session for a document.

    Args:
        content: Full document text
        storage_path: Custom storage path for settings (defaults to ~/.bloxt)
        store: Session store (defaults to the process-wide one)

    Returns:
        Dict with the session ID and the block tree
    """
    session = (store or _default_store).open(content)
    return _tree_payload(session, storage_path)


def update_document(
    session_id: str,
    content: str,
    storage_path: Optional[str] = None,
    store: Optional[SessionStore] = None,
) -> dict:
    """
    Report the document's current text to a session.

    The document is only re-parsed (and block IDs reassigned) when the text
    differs from what the session last saw.
    """
    session, err = _resolve_session(store, session_id)
    if err:
        return err

    changed = session.sync(content)
    result = _tree_payload(session, storage_path)
    result["changed"] = changed
    return result


def get_document_tree(
    session_id: str,
    storage_path: Optional[str] = None,
    store: Optional[SessionStore] = None,
) -> dict:
    """Get the block tree of an open session."""
    session, err = _resolve_session(store, session_id)
    if err:
        return err
    return _tree_payload(session, storage_path)


def move_block(
    session_id: str,
    source_id: str,
    target_id: str,
    storage_path: Optional[str] = None,
    store: Optional[SessionStore] = None,
) -> dict:
    """
    Move a block within an open document.

    With nested blocks enabled the block moves with everything under it and
    lands right after the target. Otherwise it takes the target's position.
    Blocks excluded from dragging cannot be moved. An unknown target sends
    the block to the end of the document.

    Returns:
        Dict with whether the text changed and the current text
    """
    session, err = _resolve_session(store, session_id)
    if err:
        return err

    settings = SettingsStore(storage_path).load()
    if not settings.enabled:
        return {"error": "Block editing is disabled in settings"}

    source = find_block(session.tree(settings), source_id)
    if source is None:
        return {"error": f"Block not found: {source_id}"}
    if not source.draggable:
        return {"error": f"Block is not draggable: {source.title}"}

    new_content = session.move(source_id, target_id, settings)
    return {
        "session_id": session.session_id,
        "revision": session.revision,
        "changed": new_content is not None,
        "path": get_block_path(session.tree(settings), source_id),
        "content": session.content,
    }


def close_document(session_id: str, store: Optional[SessionStore] = None) -> dict:
    """Close an edit session."""
    if (store or _default_store).close(session_id):
        return {"success": True, "message": f"Session closed: {session_id}"}
    return {"success": False, "error": f"Session not found: {session_id}"}


def list_documents(store: Optional[SessionStore] = None) -> dict:
    """List open edit sessions."""
    sessions = (store or _default_store).list_sessions()
    return {"count": len(sessions), "sessions": sessions}
