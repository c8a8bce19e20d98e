from .comment import Anchor, Comment, REQUIRED_FIELDS  # noqa: F401
