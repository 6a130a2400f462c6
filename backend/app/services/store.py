"""Read helpers over the async session factory.

Every helper opens its own session, so independent reads can run together
through ``_gather``.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.base import Executable

from app.core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


class StoreReader:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _execute(self, stmt: Executable, extract: Callable[[Result], Any]) -> Any:
        try:
            async with self._session_factory() as session:
                return extract(await session.execute(stmt))
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Record store query failed: %s", exc)
            raise StoreUnavailable() from exc

    async def _rows(self, stmt: Executable) -> list:
        return await self._execute(stmt, lambda result: list(result.all()))

    async def _scalars(self, stmt: Executable) -> list:
        return await self._execute(stmt, lambda result: list(result.scalars().all()))

    async def _first(self, stmt: Executable):
        return await self._execute(stmt, lambda result: result.first())

    async def _count(self, stmt: Executable) -> int:
        return int(await self._execute(stmt, lambda result: result.scalar_one()) or 0)

    @staticmethod
    async def _gather(*reads: Awaitable) -> list:
        """Await independent reads together.

        If one read fails the others are cancelled and awaited before the error
        propagates, so no read outlives the request.
        """
        tasks = [asyncio.ensure_future(read) for read in reads]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
