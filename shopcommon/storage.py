"""List-shaped persistence backends for the product catalog.

The catalog keeps its whole collection in one JSON array. Callers work with
a ``ListStore`` and never touch the file directly, which keeps the locking and
write strategy in one place:

* ``JsonListStore`` persists the array to disk with atomic writes and seeds
  the file on first access.
* ``MemoryListStore`` keeps the array in memory (handy for tests and scripts).

Both hand out copies of the stored records, so mutating a loaded item has no
effect until it is written back through ``save`` or ``mutate``.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Seed = Union[Sequence[Record], Callable[[], Iterable[Record]], None]


class StoreError(RuntimeError):
    """Raised when a persistence operation fails."""


class ParseError(StoreError):
    """Raised when stored data cannot be decoded into a list of records."""


def _validate_records(data: Any, source: str) -> List[Record]:
    if not isinstance(data, list):
        raise ParseError(f"{source} does not contain a JSON array")
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(f"{source} entry {idx} is not a JSON object")
    return data


class ListStore:
    """Base class for stores holding an ordered list of JSON records."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def load(self) -> List[Record]:
        raise NotImplementedError

    def save(self, items: Iterable[Record]) -> List[Record]:
        raise NotImplementedError

    def mutate(
        self,
        mutator: Callable[[List[Record]], Optional[Iterable[Record]]],
    ) -> List[Record]:
        """Run a read-modify-write cycle while holding the store lock.

        ``mutator`` receives a fresh snapshot. Returning ``None`` leaves the
        backing storage untouched; any other iterable replaces the collection.
        """

        with self._lock:
            snapshot = self.load()
            outcome = mutator(snapshot)
            if outcome is None:
                return snapshot
            return self.save(outcome)


class MemoryListStore(ListStore):
    """In-process list store."""

    def __init__(self, items: Iterable[Record] = ()) -> None:
        super().__init__()
        self._items: List[Record] = [copy.deepcopy(dict(item)) for item in items]

    def load(self) -> List[Record]:
        with self._lock:
            return copy.deepcopy(self._items)

    def save(self, items: Iterable[Record]) -> List[Record]:
        snapshot = [copy.deepcopy(dict(item)) for item in items]
        with self._lock:
            self._items = snapshot
        return copy.deepcopy(snapshot)


class JsonListStore(ListStore):
    """JSON array stored in a single pretty-printed UTF-8 file.

    ``seed`` provides the records written when the file does not exist yet;
    it may be a sequence or a zero-argument callable. Every ``load`` and
    ``save`` calls :meth:`ensure` first, so a deleted file is re-seeded on
    the next access.
    """

    def __init__(self, path: Path | str, seed: Seed = None) -> None:
        super().__init__()
        self.path = Path(path)
        self._seed = seed

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    def _seed_records(self) -> List[Record]:
        if self._seed is None:
            return []
        source = self._seed() if callable(self._seed) else self._seed
        return [dict(item) for item in source]

    def _write_json(self, path: Path, data: Sequence[Record]) -> None:
        try:
            payload = json.dumps(list(data), indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as exc:
            raise StoreError(f"Unable to encode {path.name}: {exc}") from exc
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StoreError(f"Unable to write {path}: {exc}") from exc
        finally:
            tmp_path.unlink(missing_ok=True)

    def _read_json(self, path: Path) -> List[Record]:
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreError(f"Unable to read {path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ParseError(f"{path.name} is not valid JSON: {exc}") from exc
        return _validate_records(data, path.name)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def ensure(self) -> None:
        """Create the containing directory and seed the file if missing."""

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Unable to create {self.path.parent}: {exc}") from exc
        if self.path.exists():
            return
        with self._lock:
            if self.path.exists():
                return
            records = self._seed_records()
            self._write_json(self.path, records)
            logger.info("Seeded %s with %d records", self.path, len(records))

    def load(self) -> List[Record]:
        self.ensure()
        return self._read_json(self.path)

    def save(self, items: Iterable[Record]) -> List[Record]:
        snapshot = [dict(item) for item in items]
        self.ensure()
        with self._lock:
            self._write_json(self.path, snapshot)
        return snapshot
