"""HTTP layer of the comment store."""
