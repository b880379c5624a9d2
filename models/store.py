import json
import logging
import os
import threading
from datetime import timezone

from models.visit import VisitRecord, utcnow


def _dumps(records) -> str:
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


class JsonFileBackend:
    """Durable visit log: one pretty-printed JSON array on disk."""

    def __init__(self, path: str):
        self.path = path

    def ensure(self) -> None:
        """Create the data directory and an empty log if nothing is there yet."""
        if os.path.exists(self.path):
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.save([])

    def load(self) -> list:
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, list):
            raise ValueError("visit log must be a JSON array")
        return [VisitRecord.from_dict(item) for item in payload]

    def save(self, records) -> None:
        tmp = self.path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(_dumps(records))
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def raw(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()


class MemoryBackend:
    """Volatile visit log kept for the lifetime of the process."""

    def __init__(self):
        self._records = []

    def load(self) -> list:
        return list(self._records)

    def save(self, records) -> None:
        self._records = list(records)

    def raw(self) -> bytes:
        return _dumps(self._records).encode("utf-8")


class VisitStore:
    """
    Append-only log of unique (ip, date) visits.

    Reads and writes go to the JSON file first. When the file cannot be
    read the in-memory copy is served instead. After a failed write memory
    stays authoritative until a later write reaches the file again.
    """

    def __init__(self, app=None, path: str = None, clock=None, logger=None):
        self.clock = clock or utcnow
        self.logger = logger or logging.getLogger(__name__)
        self.backend = None
        self.volatile = MemoryBackend()
        self.durable = False
        self._unsaved = False
        self._lock = threading.Lock()

        if path is not None:
            self.configure(path)
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        path = os.path.join(
            app.config["DATA_DIR"], app.config.get("VISITS_FILENAME", "visits.json")
        )
        self.logger = app.logger
        self.configure(path)
        app.extensions["visit_store"] = self

    def configure(self, path: str) -> None:
        self.backend = JsonFileBackend(path)
        self.volatile = MemoryBackend()
        self._unsaved = False
        self.durable = self._probe()

    def _probe(self) -> bool:
        try:
            self.backend.ensure()
        except OSError as exc:
            self.logger.warning(
                "Visit log %s is not writable, keeping visits in memory: %s",
                self.backend.path, exc,
            )
            return False
        return True

    def _load(self) -> list:
        # After a failed write the in-memory copy is newer than the file
        if self.backend is not None and not self._unsaved:
            try:
                records = self.backend.load()
            except (OSError, ValueError) as exc:
                self.logger.warning("Could not read visit log, using in-memory copy: %s", exc)
            else:
                self.volatile.save(records)
                return records
        return self.volatile.load()

    def _persist(self, records) -> bool:
        self.volatile.save(records)
        if self.backend is None:
            return False
        try:
            self.backend.save(records)
        except OSError as exc:
            self.logger.warning("Could not write visit log, keeping it in memory: %s", exc)
            self.durable = False
            self._unsaved = True
            return False
        self.durable = True
        self._unsaved = False
        return True

    def records(self) -> list:
        return self._load()

    def total_count(self) -> int:
        return len(self._load())

    def record_visit(self, identity: str, user_agent: str = None) -> tuple[int, bool]:
        """
        Returns (count, already_visited_today).

        A visit is new when no record exists for ``identity`` on the current
        UTC date; only new visits are appended and persisted.
        """
        now = self.clock()
        today = now.astimezone(timezone.utc).strftime("%Y-%m-%d")

        with self._lock:
            records = self._load()
            if any(r.matches(identity, today) for r in records):
                return len(records), True

            records.append(VisitRecord.create(identity, user_agent, now=now))
            self._persist(records)
            return len(records), False

    def raw_dump(self) -> bytes:
        if self.backend is not None:
            try:
                return self.backend.raw()
            except OSError as exc:
                self.logger.warning("Could not read visit log, dumping in-memory copy: %s", exc)
        return self.volatile.raw()
