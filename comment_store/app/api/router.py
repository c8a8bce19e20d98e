"""
Top‑level router.

Aggregates the endpoint routers.  The comment routes are mounted
without a prefix because the editor frontend calls ``/comment.json``
and ``/comments`` directly.
"""

from fastapi import APIRouter

from .endpoints import comments, health

router = APIRouter()

router.include_router(comments.router, tags=["comments"])
router.include_router(health.router, tags=["health"])
