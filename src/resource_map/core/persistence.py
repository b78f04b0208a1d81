"""
Local persistence for the resource map.

LocalStorage is a small file-backed key-value store of strings.
PersistenceManager keeps the whole UserData aggregate under one key, runs
the resume-or-discard protocol at startup and writes every change through.
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .models import UserData
from .session import ConfirmFn, ResourceMapSession, Step
from ..config import RESUME_PROMPT, STORAGE_KEY
from ..logging_utils import log_debug, log_error, log_info, log_warning


class LocalStorage:
    """File-backed key-value store; one JSON object of string values."""

    def __init__(self, path: Path):
        self.path = Path(path)

    # ── Internal I/O ──────────────────────────────────────────────────────

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, RecursionError) as e:
            log_warning(f"STORE: Unreadable store file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            log_warning(f"STORE: Store file {self.path} is not an object, ignoring")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        # Temp file + replace so a crash mid-write never truncates the store
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    # ── Public API ────────────────────────────────────────────────────────

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for *key*, or None."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """Delete *key*; missing keys are ignored."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


@dataclass
class StartupResult:
    """Outcome of the startup protocol."""
    data: UserData
    step: Step
    prompted: bool = False  # Whether the resume question was asked
    resumed: bool = False


class PersistenceManager:
    """Stores the aggregate under a single key with write-through on change."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Optional[UserData]:
        """
        Read and parse the stored aggregate.

        Returns:
            The stored UserData, or None when absent or unparsable.
        """
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                return None
            return UserData.from_dict(json.loads(raw))
        except (OSError, ValueError, RecursionError) as e:
            # InvalidRecordError and JSONDecodeError are ValueErrors; deep nesting is a RecursionError
            log_warning(f"STORE: Discarding stored record: {e}")
            return None

    def save(self, data: UserData) -> None:
        """Write a full snapshot; failures are logged, never raised."""
        try:
            self.storage.set_item(self.key, json.dumps(data.to_dict(), ensure_ascii=False))
            log_debug(f"STORE: Saved snapshot to {self.storage.path}")
        except (OSError, TypeError) as e:
            log_error("STORE: Write failed", str(e))

    def clear(self) -> None:
        """Delete the stored record; failures are logged, never raised."""
        try:
            self.storage.remove_item(self.key)
            log_info("STORE: Cleared stored record")
        except OSError as e:
            log_error("STORE: Clear failed", str(e))

    def startup(self, confirm: ConfirmFn) -> StartupResult:
        """
        Decide whether to resume a stored session.

        A record with a user name or a first person is offered for resume.
        Accepting always lands on the People step, whatever else the record
        holds. Declining deletes the record.
        """
        stored = self.load()
        if stored is None:
            log_info("STORE: No stored record, starting fresh")
            return StartupResult(UserData.empty(), Step.WELCOME)

        if not stored.has_meaningful_content():
            log_info("STORE: Stored record is empty, starting fresh")
            return StartupResult(UserData.empty(), Step.WELCOME)

        if confirm(RESUME_PROMPT):
            log_info("STORE: Resuming stored session")
            return StartupResult(stored, Step.PEOPLE, prompted=True, resumed=True)

        log_info("STORE: Resume declined, discarding stored record")
        self.clear()
        return StartupResult(UserData.empty(), Step.WELCOME, prompted=True)

    def bind(self, session: ResourceMapSession) -> None:
        """Write every mutation through and delete the record on reset."""
        session.subscribe(on_change=self.save, on_reset=self.clear)


def open_session(persistence: PersistenceManager, confirm: ConfirmFn) -> ResourceMapSession:
    """
    Run the startup protocol and return a session wired for write-through.

    Args:
        persistence: Manager for the durable store.
        confirm: Yes/no decision boundary for the resume question.

    Returns:
        A ResourceMapSession ready to accept input.
    """
    result = persistence.startup(confirm)
    session = ResourceMapSession(result.data, result.step)
    persistence.bind(session)
    return session
