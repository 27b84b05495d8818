import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from charter_survey.records import DEFAULT_OFFICES, SurveyRecord


class MemoryBackend:
    """Keeps the persisted payload in memory (tests and scratch sessions)."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self._payload: Dict[str, Any] = dict(payload or {})

    def read(self) -> Dict[str, Any]:
        return dict(self._payload)

    def write(self, payload: Dict[str, Any]) -> None:
        self._payload = dict(payload)


class JsonFileBackend:
    """Persists the payload as a JSON document on disk.

    A missing file reads as an empty payload; writes go through a temporary
    sibling file that replaces the target.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected store layout in {self.path}")
        return data

    def write(self, payload: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        tmp.replace(self.path)


class RecordStore:
    """A thread-safe store for the encoded survey records.

    The store is the single source of truth the report pages read from. It
    only ever hands out snapshots; analytics run on the list returned by
    :meth:`load`.
    """

    def __init__(self, backend: Optional[Any] = None):
        """Create a new :class:`RecordStore` and load the persisted records.

        Args:
            backend: Object with ``read() -> dict`` and ``write(dict)``.
                Defaults to an in-memory backend.
        """
        self._backend = backend if backend is not None else MemoryBackend()
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

        payload = self._backend.read()
        self._records: List[SurveyRecord] = [
            SurveyRecord.from_dict(item) for item in payload.get("records", [])
        ]
        self._offices: List[str] = list(payload.get("offices") or DEFAULT_OFFICES)
        self._logger.info(
            "store_loaded",
            extra={"records": len(self._records), "offices": len(self._offices)},
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        """Write the current state through to the backend (lock held by caller)."""
        self._backend.write(
            {
                "records": [r.to_dict() for r in self._records],
                "offices": list(self._offices),
            }
        )

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def load(self) -> List[SurveyRecord]:
        """Return a snapshot of all records in append order."""
        with self._lock:
            return list(self._records)

    def get(self, record_id: str) -> Optional[SurveyRecord]:
        """Retrieves a record by its ID. Returns None if not found."""
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def append(self, record: SurveyRecord) -> None:
        """
        Appends a newly encoded record.
        Raises ValueError if a record with the same ID already exists.
        """
        with self._lock:
            if any(r.id == record.id for r in self._records):
                raise ValueError(f"Record with ID {record.id} already exists.")
            self._records.append(record)
            self._persist()
        self._logger.info("record_appended", extra={"record_id": record.id})

    def update(self, record: SurveyRecord) -> None:
        """
        Replaces the stored record that has the same ID (export-preview edit).
        Raises ValueError if the record ID is not found.
        """
        with self._lock:
            for idx, existing in enumerate(self._records):
                if existing.id == record.id:
                    self._records[idx] = record
                    self._persist()
                    break
            else:
                raise ValueError(f"Record with ID {record.id} not found for update.")
        self._logger.info("record_updated", extra={"record_id": record.id})

    def replace_all(self, records: Iterable[SurveyRecord]) -> None:
        """Bulk-replace the collection (CSV import)."""
        new_records = list(records)
        with self._lock:
            self._records = new_records
            self._persist()
        self._logger.info("records_replaced", extra={"records": len(new_records)})

    def clear(self) -> None:
        """Remove every record (explicit reset). The office list is kept."""
        with self._lock:
            self._records = []
            self._persist()
        self._logger.info("records_cleared")

    def count(self) -> int:
        """Returns the total number of stored records."""
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Office list
    # ------------------------------------------------------------------

    def offices(self) -> List[str]:
        """Return the offices offered by the encoding form."""
        with self._lock:
            return list(self._offices)

    def add_office(self, name: str) -> None:
        """Add *name* to the office list (idempotent).

        Raises ValueError for a blank name.
        """
        office = (name or "").strip()
        if not office:
            raise ValueError("Office name must not be blank.")
        with self._lock:
            if office in self._offices:
                return
            self._offices.append(office)
            self._persist()
        self._logger.info("office_added", extra={"office": office})

    def remove_office(self, name: str) -> bool:
        """Remove *name* from the office list. Returns True if it was present."""
        with self._lock:
            if name not in self._offices:
                return False
            self._offices.remove(name)
            self._persist()
        self._logger.info("office_removed", extra={"office": name})
        return True
