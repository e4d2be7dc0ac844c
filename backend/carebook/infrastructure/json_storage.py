"""JSON Storage — reads and writes the store snapshot file.

Invariants:
    - A missing file is not an error: load() returns None
    - Writes are atomic: data goes to a temp file in the same directory, then
      os.replace swaps it in, so a crash never leaves a half-written file
    - OSError → StorageError; bytes that are not UTF-8 or not JSON → CorruptStateError

Design Decisions:
    - Pretty-printed UTF-8 with sorted keys: the file is meant to be hand-editable
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from carebook.core.care_store import CareStore
from carebook.core.errors import CorruptStateError, StorageError
from carebook.core.store_snapshot import store_from_snapshot, store_to_snapshot

logger = logging.getLogger(__name__)


class JsonStoreFile:
    """One JSON data file holding the full store snapshot."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> CareStore | None:
        if not self.exists():
            logger.info("Data file not found", extra={"path": str(self.path)})
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"file is not valid UTF-8 (byte {e.start})") from e
        except OSError as e:
            raise StorageError(str(e), "read") from e
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"invalid JSON ({e.msg} at line {e.lineno})") from e
        store = store_from_snapshot(data)
        logger.info(
            f"Loaded {len(store.seniors)} seniors, {len(store.caregivers)} caregivers",
            extra={"path": str(self.path)},
        )
        return store

    def save(self, store: CareStore) -> None:
        payload = json.dumps(
            store_to_snapshot(store), indent=2, sort_keys=True, ensure_ascii=False,
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Data file write failed: {e}", extra={"path": str(self.path)})
            raise StorageError(str(e), "write") from e
        logger.debug("Data file saved", extra={"path": str(self.path)})
