"""Repository implementations."""
from pluginsettings.repositories.plugin_store import PluginStore
from pluginsettings.repositories.plugin_repository import PluginRepository
from pluginsettings.repositories.json_plugin_store import JsonFilePluginStore

__all__ = [
    "PluginStore",
    "PluginRepository",
    "JsonFilePluginStore",
]
