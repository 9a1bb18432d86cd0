"""Shared router constants."""

# GET routes also answer HEAD; the server omits the body on HEAD responses.
ROUTE_METHODS = ["GET", "HEAD"]
