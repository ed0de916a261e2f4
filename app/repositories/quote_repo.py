from __future__ import annotations

import uuid
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.quote import InternationalQuote


class QuoteRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, quote: InternationalQuote) -> InternationalQuote:
        self.session.add(quote)
        await self.session.commit()
        await self.session.refresh(quote)
        return quote

    async def get(self, quote_id: str | uuid.UUID) -> InternationalQuote | None:
        value = uuid.UUID(str(quote_id))
        result = await self.session.execute(select(InternationalQuote).where(InternationalQuote.id == value))
        return result.scalar_one_or_none()

    async def list(self) -> list[InternationalQuote]:
        result = await self.session.execute(
            select(InternationalQuote).order_by(InternationalQuote.created_at.desc())
        )
        return list(result.scalars().all())
