"""Ordered set of registered extensions."""
import logging
import threading
from typing import Iterator, List, Optional

from pluginsettings.plugins.extension import PluginExtension

logger = logging.getLogger(__name__)


class ExtensionProviderSet:
    """
    Extensions in registration order.

    A plugin is expected to be owned by at most one extension; when several
    claim it, the first registered wins.
    """

    def __init__(self, extensions: Optional[List[PluginExtension]] = None):
        self._extensions: List[PluginExtension] = []
        self._lock = threading.RLock()
        for extension in extensions or []:
            self.register(extension)

    def register(self, extension: PluginExtension) -> None:
        """
        Register an extension.

        Args:
            extension: Extension instance to register

        Raises:
            ValueError: If the extension is already registered
        """
        with self._lock:
            if any(existing is extension for existing in self._extensions):
                raise ValueError(f"Extension '{extension.kind}' already registered")
            self._extensions.append(extension)

    def all(self) -> List[PluginExtension]:
        with self._lock:
            return list(self._extensions)

    def resolve_owner(self, plugin_id: str) -> Optional[PluginExtension]:
        """
        Find the extension owning a plugin.

        Extensions are asked in registration order and the scan stops at the
        first one that claims the plugin.

        Returns:
            The owning extension, or None when no extension claims the plugin.
        """
        for extension in self.all():
            if extension.owns_plugin(plugin_id):
                logger.debug(f"Plugin '{plugin_id}' is owned by {extension.kind}")
                return extension
        return None

    def owners_of(self, plugin_id: str) -> List[PluginExtension]:
        """Every extension claiming the plugin, in registration order."""
        return [ext for ext in self.all() if ext.owns_plugin(plugin_id)]

    def __iter__(self) -> Iterator[PluginExtension]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._extensions)
