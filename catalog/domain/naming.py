"""Helpers for turning resource type names into route names."""
from __future__ import annotations

_ES_SUFFIXES = ("s", "x", "z", "ch", "sh")


def pluralize(singular: str) -> str:
    """Return the plural form used for routes and list payload keys.

    >>> pluralize("game"), pluralize("category"), pluralize("box")
    ('games', 'categories', 'boxes')
    """
    if singular.endswith("y"):
        return singular[:-1] + "ies"
    if singular.endswith(_ES_SUFFIXES):
        return singular + "es"
    return singular + "s"


def collection_filename(type_name: str) -> str:
    return f"{type_name}.json"
