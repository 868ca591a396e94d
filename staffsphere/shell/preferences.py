"""Persisted client preferences (theme) stored in ``app_settings``."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from staffsphere.common.models import AppSetting

DARK_MODE_KEY = "dark_mode"


class ThemePreferenceStore:

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def load(self) -> Optional[bool]:
        """Stored dark-mode flag, or ``None`` when never saved."""
        async with self._session_factory() as session:
            setting = await session.get(AppSetting, DARK_MODE_KEY)
            return None if setting is None else bool(setting.value)

    async def save(self, dark_mode: bool) -> None:
        async with self._session_factory() as session:
            setting = await session.get(AppSetting, DARK_MODE_KEY)
            if setting is None:
                session.add(
                    AppSetting(
                        key=DARK_MODE_KEY,
                        value=dark_mode,
                        description="Dashboard colour scheme preference",
                    )
                )
            else:
                setting.value = dark_mode
            await session.commit()
