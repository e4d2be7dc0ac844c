"""Store Manager — process-wide CareStore lifecycle: load, seed, autosave, health.

Invariants:
    - Exactly one store per process, created by init_store() during lifespan
    - Autosave runs as a store observer: one write per committed operation
    - A corrupt data file never gets overwritten: the store starts empty and
      autosave stays off until the file is fixed and the process restarted
    - get_store()/get_dispatch() raise RuntimeError before init_store()

Design Decisions:
    - Singleton manager initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - Dispatch built once per store; handlers hold nothing but the store reference
"""

import logging
from pathlib import Path

from carebook.core.care_store import CareStore
from carebook.core.errors import CorruptStateError
from carebook.core.sample_data import load_sample_data
from carebook.infrastructure.json_storage import JsonStoreFile
from carebook.services.command_dispatch import CommandDispatch

logger = logging.getLogger(__name__)


class StoreManager:
    """Owns the live store, its data file, and the shared command dispatch."""

    def __init__(
        self, data_file_path: str | Path,
        seed_sample_data: bool = True, autosave: bool = True,
    ):
        self.storage = JsonStoreFile(data_file_path)
        self.load_error: str | None = None
        self.store = self._load_or_create(seed_sample_data)
        self.autosave = autosave and self.load_error is None
        if self.autosave:
            self.store.subscribe(self.storage.save)
            if not self.storage.exists():
                self.storage.save(self.store)
        self.dispatch = CommandDispatch(self.store)

    def _load_or_create(self, seed_sample_data: bool) -> CareStore:
        try:
            store = self.storage.load()
        except CorruptStateError as e:
            self.load_error = e.message
            logger.error(
                f"{e.message}; starting with an empty store, autosave disabled",
                extra={"error_code": e.code, "path": str(self.storage.path)},
            )
            return CareStore()
        if store is not None:
            return store
        store = CareStore()
        if seed_sample_data:
            load_sample_data(store)
        return store

    def save(self) -> None:
        """Write the current store regardless of the autosave setting."""
        self.storage.save(self.store)

    def health_check(self) -> bool:
        """Ready when the data file loaded cleanly."""
        return self.load_error is None


# Singleton (initialized on startup)
store_manager: StoreManager | None = None


def init_store(data_file_path: str | Path, **kwargs) -> StoreManager:
    global store_manager
    store_manager = StoreManager(data_file_path, **kwargs)
    return store_manager


def get_store() -> CareStore:
    """FastAPI dependency for the live store."""
    if not store_manager:
        raise RuntimeError("Store not initialized")
    return store_manager.store


def get_dispatch() -> CommandDispatch:
    """FastAPI dependency for the shared command dispatch."""
    if not store_manager:
        raise RuntimeError("Store not initialized")
    return store_manager.dispatch
