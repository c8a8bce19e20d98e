"""Comment store API client.

A small wrapper around the comment store's HTTP API, built on
``requests``.  It is what the editor side (or a script) uses to read
and change the shared comment collection:

* :meth:`CommentStoreClient.list_comments` – every stored comment.
* :meth:`CommentStoreClient.comments_for_file` – comments of one file.
* :meth:`CommentStoreClient.add_comment` – store a new comment.
* :meth:`CommentStoreClient.resolve_comment` – delete a comment.
* :meth:`CommentStoreClient.refresh` – one step of the periodic refetch:
  list the comments of a file and diff them against the last snapshot.

The server does no filtering, so per‑file selection happens here.
Methods never raise for HTTP or network failures; they return a tuple
``(data, error)`` where ``error`` is ``None`` on success or a
dictionary with ``status_code`` and ``message`` keys.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import requests

from comment_store.app.schemas.comment import Comment


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3100"

Snapshot = Dict[str, Dict[str, Any]]


def new_comment_id(now: Optional[float] = None) -> str:
    """Return a time based comment id such as ``c-1718000000000``."""
    if now is None:
        now = time.time()
    return f"c-{int(now * 1000)}"


@dataclass
class CommentSnapshotDiff:
    """Difference between two snapshots of a file's comments.

    Attributes:
        added: Records that are new or changed, in server order.
        removed: Ids that disappeared or whose record changed.
        current: The new snapshot, keyed by id.
    """

    added: List[Dict[str, Any]] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    current: Snapshot = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def diff_snapshots(previous: Mapping[str, Dict[str, Any]], records: List[Dict[str, Any]]) -> CommentSnapshotDiff:
    """Compare freshly listed ``records`` with the ``previous`` snapshot.

    A record whose id is unchanged but whose content differs is
    reported both as removed and as added, which is how clients model
    updates (delete followed by create).
    """
    current: Snapshot = {}
    for record in records:
        if isinstance(record, dict) and record.get("id"):
            current[record["id"]] = record
    diff = CommentSnapshotDiff(current=current)
    for comment_id, record in current.items():
        if previous.get(comment_id) != record:
            diff.added.append(record)
    for comment_id, record in previous.items():
        if current.get(comment_id) != record:
            diff.removed.append(comment_id)
    return diff


class CommentStoreClient:
    """Client for the comment store HTTP API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the store, e.g. ``http://localhost:3100``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the store.

        Returns:
            A tuple ``(data, error)``.  ``data`` holds the parsed JSON
            response (``None`` for empty bodies) and ``error`` is
            ``None`` on success.  On failure ``data`` is ``None`` and
            ``error`` has ``status_code`` and ``message`` keys.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method=method, url=url, json=json_body, timeout=self.timeout)
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("detail") or err_json.get("message") or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("Comment store request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("Comment store request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Comment operations
    # ------------------------------------------------------------------
    def list_comments(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Fetch the whole comment collection."""
        data, error = self._request("GET", "/comment.json")
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], {"status_code": None, "message": "Unexpected response for comment list"}

    def comments_for_file(self, file: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Fetch the comments attached to ``file``."""
        comments, error = self.list_comments()
        if error:
            return [], error
        return [c for c in comments if isinstance(c, dict) and c.get("file") == file], None

    def add_comment(
        self, comment: Union[Comment, Dict[str, Any]]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Store a new comment.

        Args:
            comment: A :class:`Comment` or a plain dictionary in wire
                format.
        Returns:
            A tuple ``(stored, error)``.
        """
        payload = comment.to_payload() if isinstance(comment, Comment) else comment
        data, error = self._request("POST", "/comments", json_body=payload)
        if error:
            return None, error
        logger.info("Comment %s added to the store", payload.get("id"))
        return data, None

    def resolve_comment(self, comment_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete the comment with ``comment_id``.

        Returns ``(True, None)`` on success.  A comment that is already
        gone yields ``(False, error)`` with status code 404.
        """
        _, error = self._request("DELETE", f"/comments/{requests.utils.quote(comment_id, safe='')}")
        if error:
            return False, error
        return True, None

    def refresh(
        self, file: str, previous: Optional[Mapping[str, Dict[str, Any]]] = None
    ) -> Tuple[Optional[CommentSnapshotDiff], Optional[Dict[str, Any]]]:
        """Refetch the comments of ``file`` and diff them with ``previous``.

        Callers keep ``diff.current`` and pass it back on the next call.
        """
        comments, error = self.comments_for_file(file)
        if error:
            return None, error
        return diff_snapshots(previous or {}, comments), None
