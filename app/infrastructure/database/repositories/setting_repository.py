"""SQLAlchemy implementation for key/value settings"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Setting


class SqlSettingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_value(self, key: str) -> str | None:
        stmt = select(Setting.value).where(Setting.key == key)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_value(self, key: str, value: str) -> Setting:
        setting = await self.session.get(Setting, key, populate_existing=True)
        if setting is None:
            setting = Setting(key=key, value=value)
            self.session.add(setting)
        else:
            setting.value = value
        await self.session.flush()
        await self.session.refresh(setting)
        return setting

    async def list_settings(self) -> Sequence[Setting]:
        result = await self.session.execute(select(Setting).order_by(Setting.key))
        return result.scalars().all()
