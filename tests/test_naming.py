from __future__ import annotations

import pytest

from catalog.domain.naming import pluralize


@pytest.mark.parametrize(
    "singular, plural",
    [
        ("game", "games"),
        ("category", "categories"),
        ("bus", "buses"),
        ("box", "boxes"),
        ("quiz", "quizes"),
        ("match", "matches"),
        ("dish", "dishes"),
    ],
)
def test_pluralize(singular, plural):
    assert pluralize(singular) == plural
