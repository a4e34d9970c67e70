"""JSON-file backed collection store with an in-memory cache."""
