"""
Persistence adapters.

``json_storage`` owns the on-disk collection files and ``collection_cache``
owns the in-memory records. Services go through these modules instead of
touching files or lists directly.
"""
