import json
import logging
import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from memory.backends import Backend, StorageError
from memory.types import Category, InteractionRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[InteractionRecord])


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class InteractionLog:
    """Bounded, newest-first log of interaction records kept as one blob.

    The whole sequence lives under a single key of ``backend`` and is
    rewritten in full on every mutation. Reads are lazy and cached; the
    cache only ever reflects what the backend accepted, so a failed write
    leaves both the stored blob and ``all()`` unchanged.

    Storage problems never reach the caller: a missing, unreadable or
    malformed blob reads as an empty log, and a failed write is logged and
    dropped.
    """

    def __init__(
        self,
        backend: Backend,
        key: str = "devagent_db_v1",
        max_entries: int = 100,
        clock: Callable[[], int] = now_ms,
    ):
        self.backend = backend
        self.key = key
        self.max_entries = max_entries
        self._clock = clock
        self._records: list[InteractionRecord] | None = None

    def append(
        self,
        category: Category | str,
        input: str,
        output: str,
        metadata: dict[str, Any] | None = None,
    ) -> InteractionRecord:
        """Prepend a new record, drop anything past ``max_entries`` and persist.

        The record is returned even when the write failed; a non-raising
        return does not mean the record is durable.
        """
        record = InteractionRecord(
            id=str(uuid.uuid4()),
            category=Category(category),
            input=input,
            output=output,
            created_at=self._clock(),
            metadata=metadata,
        )
        updated = [record, *self._load()][: self.max_entries]
        self._write(updated)
        return record

    def all(self) -> list[InteractionRecord]:
        return list(self._load())

    def clear(self) -> None:
        try:
            self.backend.delete(self.key)
        except (StorageError, OSError):
            logger.exception("Failed to clear history under %r", self.key)
            return
        self._records = []

    def remove_category(self, category: Category | str) -> None:
        """Drop every record of one category, keeping the rest in order."""
        category = Category(category)
        remaining = [r for r in self._load() if r.category != category]
        self._write(remaining)

    def import_records(self, records: Iterable[InteractionRecord | Mapping[str, Any]]) -> bool:
        """Replace the stored log with ``records`` as given.

        Neither the entry cap nor id uniqueness is enforced; the input is
        expected to come from ``export()``. Mappings must parse as records.
        """
        try:
            parsed = [
                r if isinstance(r, InteractionRecord) else InteractionRecord.model_validate(r)
                for r in records
            ]
        except ValidationError:
            logger.exception("Failed to import history: records do not parse")
            return False
        return self._write(parsed)

    def export(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.all()]

    def export_json(self) -> str:
        return json.dumps(self.export(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.exception("Failed to import history: invalid JSON")
            return False
        if not isinstance(data, list):
            logger.error("Failed to import history: expected a JSON array, got %s", type(data).__name__)
            return False
        return self.import_records(data)

    def _load(self) -> list[InteractionRecord]:
        if self._records is None:
            try:
                raw = self.backend.load(self.key)
            except (StorageError, OSError):
                logger.exception("Failed to load history under %r", self.key)
                return []
            self._records = self._parse(raw)
        return self._records

    def _parse(self, raw: str | None) -> list[InteractionRecord]:
        if raw is None:
            return []
        try:
            return _records_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Stored history under %r is unreadable, treating it as empty", self.key)
            return []

    def _write(self, records: list[InteractionRecord]) -> bool:
        try:
            payload = _records_adapter.dump_json(records, by_alias=True, exclude_none=True).decode()
            self.backend.save(self.key, payload)
        except (PydanticSerializationError, StorageError, OSError):
            logger.exception("Failed to save history under %r", self.key)
            return False
        self._records = records
        return True
