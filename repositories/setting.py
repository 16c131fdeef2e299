from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from enums.setting_key import SettingKey
from models.setting import Setting


class SettingRepository:
    """
    Repository for runtime storefront configuration.

    Provides CRUD operations for the key-value settings store.
    Used for configuration that can change without restart.
    """

    @staticmethod
    async def get(key: str, session: AsyncSession | Session) -> str | None:
        """
        Get a setting value by key.

        Args:
            key: Setting key (e.g., "whatsapp_number")
            session: Database session (async or sync)

        Returns:
            Setting value as string, or None if not found
        """
        stmt = select(Setting).where(Setting.key == key)
        result = await session_execute(stmt, session)
        setting = result.scalar()
        return setting.value if setting else None

    @staticmethod
    async def set(key: str, value: str, session: AsyncSession | Session, description: str | None = None) -> None:
        """
        Set a setting value (insert or update).

        Args:
            key: Setting key
            value: Setting value (stored as string)
            session: Database session (async or sync)
            description: Optional human-readable description, kept on update if None
        """
        existing = await SettingRepository.get(key, session)

        if existing is not None:
            values = {"value": value}
            if description is not None:
                values["description"] = description
            stmt = update(Setting).where(Setting.key == key).values(**values)
            await session_execute(stmt, session)
        else:
            setting = Setting(key=key, value=value, description=description)
            session.add(setting)
            await session_flush(session)

    @staticmethod
    async def delete(key: str, session: AsyncSession | Session) -> None:
        stmt = delete(Setting).where(Setting.key == key)
        await session_execute(stmt, session)

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> dict[str, str]:
        """
        Get all settings as a dictionary.

        Returns:
            Dictionary mapping keys to values
        """
        stmt = select(Setting)
        result = await session_execute(stmt, session)
        settings = result.scalars().all()
        return {setting.key: setting.value for setting in settings}

    @staticmethod
    async def get_destination_number(session: AsyncSession | Session) -> str | None:
        """
        Get the WhatsApp number orders are handed off to.

        Returns:
            Configured number as entered by the admin, or None if unset or blank
        """
        number = await SettingRepository.get(SettingKey.WHATSAPP_NUMBER.value, session)

        if not number or not number.strip():
            return None
        return number.strip()
