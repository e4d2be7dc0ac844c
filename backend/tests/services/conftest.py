"""Service test fixtures — handler dispatch over an in-memory store + FastAPI test client.

Invariants:
    - Every test gets its own store; API tests get their own data file under tmp_path
    - store_manager singleton restored after each API test

Design Decisions:
    - The lifespan is not run by ASGITransport, so the client fixture installs
      the store manager itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

import carebook.infrastructure.store_manager as manager_module
from carebook.main import app
from carebook.services.command_dispatch import CommandDispatch


@pytest.fixture
def dispatch(sample_store) -> CommandDispatch:
    return CommandDispatch(sample_store)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "carebook.json"


@pytest.fixture
def manager(data_file):
    """Seeded, autosaving store manager writing to a temp file."""
    original = manager_module.store_manager
    manager = manager_module.init_store(
        data_file, seed_sample_data=True, autosave=True,
    )
    yield manager
    manager_module.store_manager = original


@pytest.fixture
async def client(manager):
    """FastAPI test client bound to the temp-file store manager."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
