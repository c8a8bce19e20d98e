"""
JSON document persistence for comment records.

The whole collection lives in a single human‑readable JSON file: a
top‑level array of comment objects, indented with two spaces so it can
be inspected and edited by hand.  ``load`` returns the array and
``save`` replaces it.  There is no indexing; every operation reads and
rewrites the full document.

A missing document is the first‑run case and reads as an empty
collection.  Anything else that prevents reading or writing, including
a document that is not valid JSON or not an array, raises
``StorageError`` so that callers never overwrite data they could not
parse.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from .config import settings


logger = logging.getLogger(__name__)

# Mode of a newly created document; an existing document keeps its own.
DEFAULT_FILE_MODE = 0o644


class StorageError(Exception):
    """Raised when the comment document cannot be read or written."""


def get_comments_path() -> str:
    """Compute the path to the comment document.

    If ``settings.comments_file`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    comments_file = settings.comments_file
    if os.path.isabs(comments_file):
        return comments_file
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / comments_file).resolve())


def load() -> List[Dict[str, Any]]:
    """Return every stored comment record in file order."""
    path = get_comments_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
    except FileNotFoundError:
        logger.warning("Comments file not found at %s. Starting with empty array.", path)
        return []
    except OSError as exc:
        logger.error("Error reading comments file %s: %s", path, exc)
        raise StorageError(f"Cannot read {path}") from exc

    try:
        comments = json.loads(data)
    except json.JSONDecodeError as exc:
        logger.error("Comments file %s is not valid JSON: %s", path, exc)
        raise StorageError(f"Malformed comments file {path}") from exc
    if not isinstance(comments, list) or not all(isinstance(c, dict) for c in comments):
        logger.error("Comments file %s is not a JSON array of objects", path)
        raise StorageError(f"Malformed comments file {path}")
    return comments


def _current_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def save(comments: List[Dict[str, Any]]) -> None:
    """Replace the stored collection with ``comments``.

    The document is written to a temporary file next to the target and
    moved into place with ``os.replace``, so readers see either the old
    or the new collection, never a partial one.  The permissions of an
    existing document are carried over to the new one.
    """
    path = Path(get_comments_path())
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(comments, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, _current_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Error writing comments file %s: %s", path, exc)
        raise StorageError(f"Cannot write {path}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
