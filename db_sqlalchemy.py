import os
from typing import Optional

from sqlalchemy import MetaData, Table, Column, Integer, String, Text, text
from sqlalchemy.ext.asyncio import create_async_engine
from databases import Database

metadata = MetaData()

pastes = Table(
    "pastes",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("content", Text, nullable=False),
    Column("filename", String, nullable=True),
    Column("language", String, nullable=True),
    Column("created_at", Integer, nullable=False, server_default=text("(CAST(strftime('%s', 'now') AS INTEGER))")),
)


def create_database(db_url: str) -> Database:
    """Use 'databases' for async query execution."""
    return Database(db_url)


async def init_db(db_url: str, db_path: Optional[str] = None):
    """Create tables using SQLAlchemy async engine. Call this at application startup."""
    if db_path:
        # ensure folder exists before any DB IO
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    async_engine = create_async_engine(db_url, echo=False)
    async with async_engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    await async_engine.dispose()
