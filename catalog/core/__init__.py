"""
Core utilities shared across the catalog API.

This package hosts configuration helpers (env vars, storage paths) and the
logging setup. Services and routers depend on these primitives instead of
reading os.environ or configuring handlers themselves.
"""
