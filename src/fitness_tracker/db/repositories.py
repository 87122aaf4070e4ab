"""Data access layer for fitness-tracker."""

from pathlib import Path

import aiosqlite

from ..models.session import Session
from .engine import get_db_path, init_db


class SessionRepository:
    """SQLite-backed token store.

    Only the tokens are stored; nothing fetched from the backend is kept.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._initialized = False

    async def _ensure_schema(self) -> None:
        if not self._initialized:
            await init_db(self.db_path)
            self._initialized = True

    async def load(self) -> Session | None:
        """Get the stored session."""
        await self._ensure_schema()
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT access_token, refresh_token FROM auth_tokens WHERE id = 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return Session.from_dict(dict(row))

    async def save(self, session: Session) -> None:
        """Store the session, replacing any previous one."""
        await self._ensure_schema()
        data = session.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO auth_tokens (id, access_token, refresh_token, updated_at)
                VALUES (1, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    access_token = excluded.access_token,
                    refresh_token = excluded.refresh_token,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (data["access_token"], data["refresh_token"]),
            )
            await db.commit()

    async def clear(self) -> None:
        """Delete the stored session."""
        await self._ensure_schema()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM auth_tokens")
            await db.commit()
