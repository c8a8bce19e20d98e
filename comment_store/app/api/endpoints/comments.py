"""
Comment endpoints.

These routes expose the comment collection to the editor:

* ``GET /comment.json`` returns every stored comment.
* ``POST /comments`` stores one comment.
* ``DELETE /comments/{comment_id}`` resolves (deletes) a comment.

The paths are fixed by the editor frontend and are not versioned.
Storage failures are reported as HTTP 500 with a short message; they
are never retried here.
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Request, status

from comment_store.app.core.storage import StorageError
from comment_store.app.services.comment_service import CommentService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/comment.json", response_model=List[Dict[str, Any]])
async def list_comments() -> List[Dict[str, Any]]:
    """Return the full comment collection in storage order."""
    try:
        return await CommentService.list_comments()
    except StorageError:
        logger.exception("Failed to list comments")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching comments.")


@router.post("/comments", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_comment(request: Request) -> Dict[str, Any]:
    """Store a new comment and echo it back.

    The body must be a JSON object with non‑empty ``id``, ``file``,
    ``type``, ``content`` and ``anchor`` fields; otherwise HTTP 400 is
    returned and nothing is stored.  The body is parsed by hand so that
    malformed input gets the same 400 as a missing field.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    missing = CommentService.missing_fields(payload)
    if missing:
        logger.info("Rejected comment, missing fields: %s", ", ".join(missing))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid comment data provided.")
    try:
        return await CommentService.create_comment(payload)
    except StorageError:
        logger.exception("Failed to add comment %s", payload.get("id"))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding comment.")


@router.delete("/comments/{comment_id:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: str) -> None:
    """Delete every comment with the given id.

    Returns HTTP 404 if no comment matched.  Deleting an id twice
    yields 404 the second time.  Ids are caller supplied and may
    contain slashes, so the whole remaining path is the id.
    """
    try:
        deleted = await CommentService.delete_comment(comment_id)
    except StorageError:
        logger.exception("Failed to delete comment %s", comment_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting comment.")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found.")
    return None
