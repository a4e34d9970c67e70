"""
JSON-file persistence adapter.

One file per resource type, ``<database_dir>/<type>.json``, holding a
pretty-printed array of records. Writes go through a temp file and
``os.replace`` so a reader never sees a half-written document.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Sequence

from catalog.domain.naming import collection_filename


def dumps(records: Sequence[dict]) -> str:
    """Serialize a collection; same input always gives the same text."""
    return json.dumps(list(records), ensure_ascii=False, indent=2)


class JsonStorage:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, type_name: str) -> Path:
        return self.directory / collection_filename(type_name)

    def ensure_directory(self) -> bool:
        """Create the storage directory; returns True when it was missing."""
        if self.directory.is_dir():
            return False
        self.directory.mkdir(parents=True, exist_ok=True)
        return True

    def exists(self, type_name: str) -> bool:
        return self.path_for(type_name).exists()

    def read_text(self, type_name: str) -> str:
        return self.path_for(type_name).read_text(encoding="utf-8")

    def load(self, type_name: str) -> Any:
        """Parse the collection file; blank files yield None."""
        text = self.read_text(type_name)
        if not text.strip():
            return None
        return json.loads(text)

    def write_text(self, type_name: str, payload: str) -> None:
        path = self.path_for(type_name)
        tmp_path = Path(f"{path}.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, path)
