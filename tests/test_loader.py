from __future__ import annotations

import asyncio
import json

import pytest

from catalog.domain.errors import StartupError
from catalog.domain.schemas import GAME, Game, ResourceRegistry, ResourceType
from catalog.services.store import StoreContext


def _write(path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = data if isinstance(data, str) else json.dumps(data, indent=2)
    path.write_text(text, encoding="utf-8")


def test_missing_directory_and_file_are_created(tmp_path):
    db_dir = tmp_path / "database"
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    asyncio.run(context.load())

    assert context.ready
    assert context.cache.get("game") == []
    assert (db_dir / "game.json").read_text(encoding="utf-8") == "[]"


def test_blank_file_loads_as_empty_collection(tmp_path):
    db_dir = tmp_path / "database"
    _write(db_dir / "game.json", "  \n")
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    asyncio.run(context.load())

    assert context.cache.get("game") == []
    assert (db_dir / "game.json").read_text(encoding="utf-8") == "  \n"


def test_valid_file_populates_cache_in_order(tmp_path, game_factory):
    db_dir = tmp_path / "database"
    records = [dict(game_factory("b"), id=2), dict(game_factory("a"), id=1)]
    _write(db_dir / "game.json", records)
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    asyncio.run(context.load())

    assert context.cache.get("game") == records


def test_top_level_object_is_a_structural_error(tmp_path, game_factory):
    db_dir = tmp_path / "database"
    _write(db_dir / "game.json", {"games": [game_factory()]})
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    with pytest.raises(StartupError) as exc:
        asyncio.run(context.load())
    assert "game.json: the file must contain an array" in str(exc.value)
    assert not context.ready


def test_broken_json_is_reported(tmp_path):
    db_dir = tmp_path / "database"
    _write(db_dir / "game.json", '[{"title": ')
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    with pytest.raises(StartupError) as exc:
        asyncio.run(context.load())
    assert "JSON syntax error in game.json" in str(exc.value)


def test_every_invalid_record_is_reported(tmp_path, game_factory):
    db_dir = tmp_path / "database"
    bad_first = dict(game_factory("a"), id=1)
    del bad_first["title"]
    bad_first["price"] = 10
    bad_third = dict(game_factory("c"), tags="fps")
    _write(db_dir / "game.json", [bad_first, dict(game_factory("b"), id=2), bad_third])
    context = StoreContext(ResourceRegistry(GAME), db_dir)

    with pytest.raises(StartupError) as exc:
        asyncio.run(context.load())

    report = str(exc.value)
    assert "Validation errors in game.json. The server cannot start." in report
    assert "Item #1 (ID: 1) is invalid:" in report
    assert "   • title: Field required" in report
    assert "   • price:" in report
    assert "Item #2" not in report
    assert "Item #3 (ID: unknown) is invalid:" in report
    assert "   • tags:" in report
    assert context.cache.get("game") == []


def test_one_bad_collection_blocks_all(tmp_path, game_factory):
    db_dir = tmp_path / "database"
    registry = ResourceRegistry(GAME, ResourceType("classic", Game))
    good = [dict(game_factory("a"), id=1)]
    _write(db_dir / "game.json", good)
    _write(db_dir / "classic.json", [{"slug": "broken"}])
    context = StoreContext(registry, db_dir)

    with pytest.raises(StartupError) as exc:
        asyncio.run(context.load())

    assert len(exc.value.reports) == 1
    assert "classic.json" in exc.value.reports[0]
    assert context.cache.get("game") == []
