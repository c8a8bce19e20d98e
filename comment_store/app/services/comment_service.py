"""
Service layer for comment records.

Every operation is a stateless load‑modify‑save cycle over the JSON
document managed by ``core.storage``: the collection is read, changed
in memory and written back whole.  Records are stored exactly as the
client sent them, in insertion order.

By default the cycle runs under a process‑wide lock so that two
requests handled at the same time cannot overwrite each other's
changes.  With ``settings.serialize_writes`` turned off the lock is
skipped and concurrent writers may lose updates, which is how the
store originally behaved.  Separate processes sharing one document
are never coordinated.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from starlette.concurrency import run_in_threadpool

from comment_store.app.core import storage
from comment_store.app.core.config import settings
from comment_store.app.schemas.comment import REQUIRED_FIELDS


logger = logging.getLogger(__name__)

_write_lock = threading.Lock()


@contextmanager
def _write_cycle() -> Iterator[None]:
    if not settings.serialize_writes:
        yield
        return
    with _write_lock:
        yield


class CommentService:
    """Service class for listing, creating and deleting comments.

    The public methods are coroutines; the file I/O behind them runs in
    Starlette's thread pool so the event loop keeps serving requests
    while a document is read or written.
    """

    @staticmethod
    def missing_fields(payload: Any) -> List[str]:
        """Return the required fields that are absent or empty in ``payload``.

        Anything other than a JSON object is missing every field.
        """
        if not isinstance(payload, dict):
            return list(REQUIRED_FIELDS)
        return [name for name in REQUIRED_FIELDS if not payload.get(name)]

    @classmethod
    async def list_comments(cls) -> List[Dict[str, Any]]:
        """Return every stored comment in storage order.

        Filtering by file is left to clients.
        """
        return await run_in_threadpool(storage.load)

    @classmethod
    async def create_comment(cls, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Append ``payload`` to the collection and return it.

        The caller is expected to have checked ``missing_fields`` first;
        a payload failing that check raises ``ValueError`` here and
        nothing is written.
        """
        missing = cls.missing_fields(payload)
        if missing:
            raise ValueError(f"Missing required comment fields: {', '.join(missing)}")
        await run_in_threadpool(cls._append, payload)
        logger.info("Added comment: %s for file %s", payload["id"], payload["file"])
        return payload

    @classmethod
    async def delete_comment(cls, comment_id: str) -> bool:
        """Delete every comment whose id equals ``comment_id``.

        Returns ``True`` if at least one record was removed, ``False``
        otherwise.  The document is only rewritten when something was
        removed.
        """
        deleted = await run_in_threadpool(cls._remove, comment_id)
        if deleted:
            logger.info("Resolved (deleted) comment with ID: %s", comment_id)
        return deleted

    @staticmethod
    def _append(payload: Dict[str, Any]) -> None:
        with _write_cycle():
            comments = storage.load()
            comments.append(payload)
            storage.save(comments)

    @staticmethod
    def _remove(comment_id: str) -> bool:
        with _write_cycle():
            comments = storage.load()
            remaining = [c for c in comments if c.get("id") != comment_id]
            if len(remaining) == len(comments):
                return False
            storage.save(remaining)
        return True
