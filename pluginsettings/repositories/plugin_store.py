"""Abstract interface for plugin settings persistence."""
from abc import ABC, abstractmethod
from typing import List, Optional

from pluginsettings.models.plugin import Plugin


class PluginStore(ABC):
    """Abstract store for plugin records, keyed by plugin id."""

    @abstractmethod
    def find_by_plugin_id(self, plugin_id: str) -> Optional[Plugin]:
        """Get the plugin record, or None if it was never saved."""
        ...

    @abstractmethod
    def upsert(self, plugin: Plugin) -> Plugin:
        """Insert a new record (assigning its id) or update an existing one."""
        ...

    @abstractmethod
    def get_all(self) -> List[Plugin]:
        """Get all plugin records."""
        ...
