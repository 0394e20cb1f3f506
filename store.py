"""
Paste store: create/get/delete/exists against the `pastes` table.

Every operation is a single SQL statement. Uniqueness of paste ids is
enforced by the table's primary key, so a duplicate insert surfaces here
as DuplicateId no matter what the caller checked beforehand.
"""
import logging
import sqlite3
import time
from typing import Callable, Optional

from databases import Database
from sqlalchemy import insert, select, delete, func
from sqlalchemy.exc import IntegrityError as SAIntegrityError

from db_sqlalchemy import pastes
from errors import DuplicateId, EmptyContent, StorageUnavailable
from schemas import Paste

logger = logging.getLogger(__name__)


def _row_to_paste(row) -> Paste:
    return Paste(
        id=row["id"],
        content=row["content"],
        filename=row["filename"],
        language=row["language"],
        created_at=row["created_at"],
    )


class PasteStore:

    def __init__(self, database: Database, clock: Callable[[], float] = time.time):
        self.database = database
        self.clock = clock

    async def exists(self, paste_id: str) -> bool:
        q = select(pastes.c.id).where(pastes.c.id == paste_id)
        try:
            row = await self.database.fetch_one(q)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Existence check failed for {paste_id}: {e}")
            raise StorageUnavailable() from e
        return row is not None

    async def create(
        self,
        paste_id: str,
        content: str,
        filename: Optional[str] = None,
        language: Optional[str] = None,
    ) -> Paste:
        """
        Insert a new paste.

        Raises:
            EmptyContent: content is missing or empty
            DuplicateId: a row with this id already exists (primary key)
            StorageUnavailable: any other database or I/O failure
        """
        if not content:
            raise EmptyContent()

        paste = Paste(
            id=paste_id,
            content=content,
            filename=filename or None,
            language=language or None,
            created_at=int(self.clock()),
        )
        query = insert(pastes).values(**paste.model_dump())
        try:
            await self.database.execute(query)
        except (sqlite3.IntegrityError, SAIntegrityError) as e:
            logger.warning(f"Duplicate paste id rejected by store: {paste_id}")
            raise DuplicateId(paste_id) from e
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error saving paste {paste_id}: {e}")
            raise StorageUnavailable() from e

        logger.info(f"Paste {paste_id} saved")
        return paste

    async def get(self, paste_id: str) -> Optional[Paste]:
        """Fetch a paste by id; None if it does not exist."""
        q = select(pastes).where(pastes.c.id == paste_id)
        try:
            row = await self.database.fetch_one(q)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error fetching paste {paste_id}: {e}")
            raise StorageUnavailable() from e
        if not row:
            return None
        return _row_to_paste(row)

    async def delete(self, paste_id: str) -> bool:
        """Remove a paste. Returns False when there was nothing to delete."""
        q = delete(pastes).where(pastes.c.id == paste_id).returning(pastes.c.id)
        try:
            row = await self.database.fetch_one(q)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error deleting paste {paste_id}: {e}")
            raise StorageUnavailable() from e
        if row is None:
            return False
        logger.info(f"Paste {paste_id} deleted")
        return True

    async def count(self) -> int:
        q = select(func.count()).select_from(pastes)
        try:
            return await self.database.fetch_val(q)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error counting pastes: {e}")
            raise StorageUnavailable() from e
