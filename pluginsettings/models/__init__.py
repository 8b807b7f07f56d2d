"""Domain models package."""
from pluginsettings.models.plugin import Plugin
from pluginsettings.models.plugin_settings import PluginSettings, SettingValue
from pluginsettings.models.username import Username
from pluginsettings.models.enums import ExtensionKind, ValueState

__all__ = [
    # Models
    "Plugin",
    # Value objects
    "PluginSettings",
    "SettingValue",
    "Username",
    # Enums
    "ExtensionKind",
    "ValueState",
]
