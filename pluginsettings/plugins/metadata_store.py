"""Registry of declared plugin settings, keyed by plugin id and extension kind."""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pluginsettings.plugins.configuration import PluginSettingsConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginSettingsMetadata:
    """Declared settings of a plugin for one extension kind."""

    plugin_id: str
    extension_kind: str
    configuration: Optional[PluginSettingsConfiguration] = None
    template: Optional[str] = None


class PluginSettingsMetadataStore:
    """
    Read-mostly table of declared plugin settings.

    Populated by the plugin lifecycle when plugins load and consulted by the
    settings service. A plugin can have entries for several extension kinds;
    lookups are made with the kind of the extension that owns the plugin.

    The store is constructed explicitly and injected; ``clear()`` resets it
    between tests.
    """

    def __init__(self):
        self._entries: Dict[Tuple[str, str], PluginSettingsMetadata] = {}
        self._lock = threading.RLock()

    def add_metadata_for(
        self,
        plugin_id: str,
        extension_kind: str,
        configuration: Optional[PluginSettingsConfiguration] = None,
        template: Optional[str] = None,
    ) -> None:
        """
        Register (or replace) the declared settings of a plugin for one kind.

        Args:
            plugin_id: Plugin identifier
            extension_kind: Kind of the extension the settings belong to
            configuration: Declared settings keys, if any
            template: Reference to the settings UI template, if any
        """
        kind = _kind_value(extension_kind)
        entry = PluginSettingsMetadata(plugin_id, kind, configuration, template)
        with self._lock:
            self._entries[(plugin_id, kind)] = entry
        logger.debug(f"Registered settings metadata for '{plugin_id}' ({kind})")

    def lookup_for(
        self, plugin_id: str, extension_kind: str
    ) -> Optional[PluginSettingsMetadata]:
        with self._lock:
            return self._entries.get((plugin_id, _kind_value(extension_kind)))

    def configuration(
        self, plugin_id: str, extension_kind: str
    ) -> Optional[PluginSettingsConfiguration]:
        entry = self.lookup_for(plugin_id, extension_kind)
        return entry.configuration if entry else None

    def template(self, plugin_id: str, extension_kind: str) -> Optional[str]:
        entry = self.lookup_for(plugin_id, extension_kind)
        return entry.template if entry else None

    def has_plugin(self, plugin_id: str) -> bool:
        with self._lock:
            return any(pid == plugin_id for pid, _kind in self._entries)

    def kinds_for(self, plugin_id: str) -> List[str]:
        """Extension kinds with metadata recorded for the plugin, in registration order."""
        with self._lock:
            return [kind for pid, kind in self._entries if pid == plugin_id]

    def remove_metadata_for(self, plugin_id: str) -> None:
        with self._lock:
            for key in [key for key in self._entries if key[0] == plugin_id]:
                del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _kind_value(extension_kind) -> str:
    return getattr(extension_kind, "value", extension_kind)
