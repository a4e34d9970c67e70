"""Domain types: record schemas, resource registry, error taxonomy."""
