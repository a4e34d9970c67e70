from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the catalog package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core.config import Settings  # noqa: E402


def make_game(slug: str = "half-life-2", **overrides) -> dict:
    game = {
        "title": "Half-Life 2",
        "slug": slug,
        "category": "shooter",
        "releaseYear": 2004,
        "developer": "Valve",
        "rating": "M",
        "description": "Gordon Freeman returns.",
        "price": "9.99",
        "systemRequirements": {"os": "Windows XP"},
        "imagesExtra": ["hl2-1.png"],
        "tags": ["fps", "classic"],
        "links": None,
    }
    game.update(overrides)
    return game


@pytest.fixture()
def game_factory():
    return make_game


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        app_env="test",
        database_dir=tmp_path / "database",
        host="127.0.0.1",
        port=3001,
        cors_origins=("*",),
        log_level="INFO",
        wait_for_flush=False,
    )
