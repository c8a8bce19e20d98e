"""
Top‑level package for the Comment Store.

The HTTP service lives in ``comment_store.app``; the client library
used by the editor side (and by scripts) lives in
``comment_store.client`` and the anchor helpers in
``comment_store.anchors``.
"""

__all__ = []
