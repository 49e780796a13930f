"""Server — error classification, error pages and ASGI glue."""
