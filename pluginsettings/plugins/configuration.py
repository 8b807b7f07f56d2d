"""Declared plugin settings configuration (the key schema a plugin registers)."""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


@dataclass
class PluginSettingsProperty:
    """A single declared settings key, optionally carrying a value."""

    key: str
    value: Optional[str] = None
    required: bool = True
    secure: bool = False
    display_name: Optional[str] = None
    display_order: int = 0

    def with_value(self, value: Optional[str]) -> "PluginSettingsProperty":
        """Copy of this property holding the given value."""
        return PluginSettingsProperty(
            key=self.key,
            value=value,
            required=self.required,
            secure=self.secure,
            display_name=self.display_name,
            display_order=self.display_order,
        )


class PluginSettingsConfiguration:
    """
    Ordered set of settings properties.

    Keys are unique; adding a property whose key already exists replaces it
    in place so the original declaration order is kept.
    """

    def __init__(self, properties: Optional[List[PluginSettingsProperty]] = None):
        self._properties: Dict[str, PluginSettingsProperty] = {}
        for prop in properties or []:
            self.add(prop)

    def add(self, prop: PluginSettingsProperty) -> "PluginSettingsConfiguration":
        self._properties[prop.key] = prop
        return self

    def get(self, key: str) -> Optional[PluginSettingsProperty]:
        return self._properties.get(key)

    def keys(self) -> List[str]:
        return list(self._properties)

    def list(self) -> List[PluginSettingsProperty]:
        return list(self._properties.values())

    def values(self) -> Dict[str, Optional[str]]:
        """Key to value map, in declaration order."""
        return {key: prop.value for key, prop in self._properties.items()}

    def __contains__(self, key: str) -> bool:
        return key in self._properties

    def __iter__(self) -> Iterator[PluginSettingsProperty]:
        return iter(self._properties.values())

    def __len__(self) -> int:
        return len(self._properties)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PluginSettingsConfiguration):
            return NotImplemented
        return self.list() == other.list()

    def __repr__(self):
        return f"<PluginSettingsConfiguration {self.keys()}>"
