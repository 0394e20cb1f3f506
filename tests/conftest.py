import asyncio
import time

import pytest

from config import Settings
from db_sqlalchemy import create_database, init_db
from store import PasteStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "pastes" / "pastes.db")


@pytest.fixture
def db_url(db_path):
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
def run_with_store(db_url, db_path):
    """Run an async scenario against a fresh store on a temp SQLite file.

    Usage: run_with_store(scenario) where `scenario(store)` is a coroutine
    function. Returns whatever the scenario returns.
    """

    def run(scenario, clock=time.time):
        async def _main():
            await init_db(db_url, db_path)
            database = create_database(db_url)
            await database.connect()
            try:
                return await scenario(PasteStore(database, clock=clock))
            finally:
                await database.disconnect()

        return asyncio.run(_main())

    return run


@pytest.fixture
def settings(db_url, db_path):
    return Settings(
        port=3000,
        db_path=db_path,
        db_url=db_url,
        auth_username="admin",
        auth_password="s3cret",
        base_url="https://strings.example.com",
    )
