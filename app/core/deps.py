from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.repositories.quote_repo import QuoteRepository


async def get_db_session() -> AsyncSession:
    async for session in get_session():
        yield session


async def get_quote_repository(session: AsyncSession = Depends(get_db_session)) -> QuoteRepository:
    return QuoteRepository(session)
