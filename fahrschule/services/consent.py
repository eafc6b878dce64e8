"""Consent manager — versioned record of the visitor's external media decision.

The record lives under a single key in a durable key-value store (the
browser's local storage on the site, a JSON file or memory here). It gates
third-party embeds such as the map on the contact page:

- no record, a corrupt record or one written by an older schema version
  all mean "no decision yet"
- every update rewrites the whole record and stamps a fresh ``decided_at``
- storage failures are logged and never raised; the manager keeps working
  from memory for the rest of the session
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import structlog
from pydantic import ValidationError

from fahrschule.exceptions import ConsentStorageError
from fahrschule.schemas.consent import CONSENT_STORAGE_KEY, CONSENT_VERSION, ConsentState

logger = structlog.get_logger()


class KeyValueStorage(Protocol):
    """String key-value store with local-storage semantics."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, lost when the process exits."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JSONFileStorage:
    """Storage backed by a single JSON object file.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so readers never see a half-written file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise ConsentStorageError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ConsentStorageError(f"Corrupt storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConsentStorageError(f"Storage file {self.path} is not a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ConsentStorageError(f"Cannot write {self.path}: {e}") from e

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ConsentStorageError:
            # Unreadable file: start over
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConsentManager:
    """Single source of truth for the external media consent decision.

    Consumers (banner, settings dialog, embed gate) derive their visibility
    from ``has_decided()`` and ``state.external_media_allowed`` only.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] | None = None,
        key: str = CONSENT_STORAGE_KEY,
    ):
        self._storage = storage
        self._clock = clock or _utcnow
        self._key = key
        self._state = self.load()

    @property
    def state(self) -> ConsentState:
        return self._state

    def load(self) -> ConsentState:
        """Read the stored record, falling back to the default state."""
        self._state = self._read()
        return self._state

    def _read(self) -> ConsentState:
        try:
            raw = self._storage.get_item(self._key)
        except ConsentStorageError as e:
            logger.error("consent_storage_read_failed", key=self._key, error=str(e))
            return ConsentState()

        if raw is None:
            return ConsentState()

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("consent_record_corrupt", key=self._key, error=str(e))
            return ConsentState()

        if not isinstance(data, dict) or data.get("schemaVersion") != CONSENT_VERSION:
            logger.info("consent_record_outdated", key=self._key)
            return ConsentState()

        try:
            state = ConsentState.model_validate(data)
        except ValidationError as e:
            logger.warning("consent_record_invalid", key=self._key, error=str(e))
            return ConsentState()

        # Without a decision, external media stays blocked
        if state.decided_at is None and state.external_media_allowed:
            logger.warning("consent_record_undecided_allow", key=self._key)
            return ConsentState()
        return state

    def update(self, external_media_allowed: bool | None = None) -> ConsentState:
        """Record an explicit decision and persist the full record.

        Fields left as None keep their current value. ``decided_at`` is
        always re-stamped.
        """
        changes: dict = {"decided_at": self._clock(), "schema_version": CONSENT_VERSION}
        if external_media_allowed is not None:
            changes["external_media_allowed"] = external_media_allowed

        self._state = self._state.model_copy(update=changes)

        try:
            self._storage.set_item(self._key, self._state.to_record())
        except ConsentStorageError as e:
            logger.error("consent_storage_write_failed", key=self._key, error=str(e))

        logger.info(
            "consent_updated",
            external_media_allowed=self._state.external_media_allowed,
        )
        return self._state

    def has_decided(self) -> bool:
        return self._state.decided_at is not None

    def revoke(self) -> None:
        """Forget the decision: clear the stored record and reset to defaults."""
        try:
            self._storage.remove_item(self._key)
        except ConsentStorageError as e:
            logger.error("consent_storage_remove_failed", key=self._key, error=str(e))
        self._state = ConsentState()
        logger.info("consent_revoked")

    # --- Banner / settings dialog shortcuts ---

    def accept_all(self) -> ConsentState:
        return self.update(external_media_allowed=True)

    def decline_all(self) -> ConsentState:
        return self.update(external_media_allowed=False)

    def banner_visible(self) -> bool:
        return not self.has_decided()


class ExternalMediaGate:
    """Decides whether an external embed (the map) may render.

    ``load_once()`` shows the embed for the current session without
    recording a decision; ``allow_permanently()`` records consent.
    """

    def __init__(self, manager: ConsentManager):
        self._manager = manager
        self._loaded_once = False

    def load_once(self) -> None:
        self._loaded_once = True

    def allow_permanently(self) -> ConsentState:
        return self._manager.update(external_media_allowed=True)

    def may_load(self) -> bool:
        return self._manager.state.external_media_allowed or self._loaded_once
