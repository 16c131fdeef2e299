from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Text, DateTime, func

from models.base import Base


class Setting(Base):
    """
    Key-value store for runtime-configurable storefront settings.
    Allows changing settings without restart.

    Examples:
        - whatsapp_number: destination for the order handoff deep link
    """
    __tablename__ = 'settings'

    id = Column(Integer, primary_key=True)
    key = Column(String, nullable=False, unique=True)
    value = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class SettingDTO(BaseModel):
    key: str
    value: str
    description: str | None = None
    updated_at: datetime | None = None
