"""
Use cases of the collection store.

``store`` wires the cache, storage and write serializer into one context
object; ``loader`` is the startup integrity gate; ``collection_service`` is
what routers call for reads and mutations.
"""
