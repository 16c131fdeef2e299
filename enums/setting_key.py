from enum import Enum


class SettingKey(str, Enum):
    """Keys of the runtime-configurable settings stored in the settings table."""
    WHATSAPP_NUMBER = "whatsapp_number"
