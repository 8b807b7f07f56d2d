"""Descriptive plugin info used to render plugin settings UIs."""
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PluginDescriptor:
    """Identity of a loaded plugin."""

    plugin_id: str
    version: str = "1"
    location: Optional[str] = None
    bundled: bool = False


@dataclass(frozen=True)
class ConfigurationMetadata:
    required: bool = False
    secure: bool = False


@dataclass(frozen=True)
class PluginConfiguration:
    """A configurable property exposed by a plugin."""

    key: str
    metadata: ConfigurationMetadata = field(default_factory=ConfigurationMetadata)


@dataclass(frozen=True)
class PluggableInstanceSettings:
    """Properties a plugin exposes for one settings surface, plus its view template."""

    configurations: Optional[List[PluginConfiguration]] = None
    view: Optional[str] = None

    def has_configurations(self) -> bool:
        return bool(self.configurations)


@dataclass(frozen=True)
class PluginInfo:
    """What a plugin exposes for one extension kind."""

    descriptor: PluginDescriptor
    extension_kind: str
    display_name: Optional[str] = None
    plugin_settings: Optional[PluggableInstanceSettings] = None

    def handles_plugin_settings(self) -> bool:
        return self.plugin_settings is not None and self.plugin_settings.has_configurations()


class CombinedPluginInfo:
    """All per-kind infos of one plugin."""

    def __init__(self, infos: Optional[List[PluginInfo]] = None):
        self._infos: List[PluginInfo] = list(infos or [])

    def add(self, info: PluginInfo) -> "CombinedPluginInfo":
        self._infos.append(info)
        return self

    def extension_for(self, extension_kind: str) -> Optional[PluginInfo]:
        kind = getattr(extension_kind, "value", extension_kind)
        for info in self._infos:
            if getattr(info.extension_kind, "value", info.extension_kind) == kind:
                return info
        return None

    def extension_names(self) -> List[str]:
        return [getattr(i.extension_kind, "value", i.extension_kind) for i in self._infos]

    def __iter__(self):
        return iter(self._infos)

    def __len__(self) -> int:
        return len(self._infos)


class PluginInfoFinder(ABC):
    """Looks up the combined info of a plugin."""

    @abstractmethod
    def plugin_info_for(self, plugin_id: str) -> Optional[CombinedPluginInfo]:
        ...


class InMemoryPluginInfoFinder(PluginInfoFinder):
    """Plugin infos registered by the plugin lifecycle, held in memory."""

    def __init__(self):
        self._infos: Dict[str, CombinedPluginInfo] = {}
        self._lock = threading.RLock()

    def add(self, info: PluginInfo) -> None:
        with self._lock:
            plugin_id = info.descriptor.plugin_id
            self._infos.setdefault(plugin_id, CombinedPluginInfo()).add(info)

    def remove(self, plugin_id: str) -> None:
        with self._lock:
            self._infos.pop(plugin_id, None)

    def plugin_info_for(self, plugin_id: str) -> Optional[CombinedPluginInfo]:
        with self._lock:
            return self._infos.get(plugin_id)

    def clear(self) -> None:
        with self._lock:
            self._infos.clear()
