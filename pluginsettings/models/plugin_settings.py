"""Plugin settings value object (the request-scoped view over a plugin record)."""
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from pluginsettings.models.enums import ValueState
from pluginsettings.plugins.configuration import PluginSettingsConfiguration

if TYPE_CHECKING:
    from pluginsettings.models.plugin import Plugin


@dataclass(frozen=True)
class SettingValue:
    """
    A setting value with an explicit state.

    PRESENT holds a non-empty string, EMPTY holds "" and ABSENT holds None.
    Keeping the state explicit lets "" and None survive storage unchanged.
    """

    state: ValueState
    value: Optional[str] = None

    @classmethod
    def of(cls, raw: Optional[str]) -> "SettingValue":
        if raw is None:
            return cls(ValueState.ABSENT)
        if raw == "":
            return cls(ValueState.EMPTY, "")
        return cls(ValueState.PRESENT, str(raw))

    @classmethod
    def absent(cls) -> "SettingValue":
        return cls(ValueState.ABSENT)

    @property
    def raw(self) -> Optional[str]:
        """The plain value: a string, "" or None."""
        if self.state is ValueState.ABSENT:
            return None
        if self.state is ValueState.EMPTY:
            return ""
        return self.value

    @property
    def is_absent(self) -> bool:
        return self.state is ValueState.ABSENT


class PluginSettings:
    """
    Settings of one plugin together with the validation errors attached to them.

    Never persisted directly; built per request either from a stored
    ``Plugin`` record or from caller input.
    """

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        self._settings: "OrderedDict[str, SettingValue]" = OrderedDict()
        self._errors: "OrderedDict[str, List[str]]" = OrderedDict()

    @classmethod
    def from_plugin(cls, plugin: "Plugin") -> "PluginSettings":
        """Build settings from a stored plugin record."""
        return cls(plugin.plugin_id).populate_settings_map(
            plugin.get_configuration_values()
        )

    def populate_settings_map(
        self, settings: Mapping[str, Optional[str]]
    ) -> "PluginSettings":
        for key, value in settings.items():
            self.add_setting(key, value)
        return self

    def add_setting(self, key: str, value: Optional[str]) -> None:
        self._settings[key] = SettingValue.of(value)

    def has_setting(self, key: str) -> bool:
        return key in self._settings

    def get_setting(self, key: str) -> SettingValue:
        return self._settings.get(key, SettingValue.absent())

    def get_value_for(self, key: str) -> Optional[str]:
        return self.get_setting(key).raw

    def get_plugin_settings_keys(self) -> List[str]:
        return list(self._settings)

    def get_settings_as_key_value_pair(self) -> Dict[str, Optional[str]]:
        return OrderedDict((key, value.raw) for key, value in self._settings.items())

    def to_plugin_settings_configuration(
        self, declared: Optional[PluginSettingsConfiguration]
    ) -> PluginSettingsConfiguration:
        """
        Configuration view listing every declared key with its current value.

        Declared keys missing from these settings are ABSENT. Keys that were
        supplied but never declared are left out.
        """
        view = PluginSettingsConfiguration()
        for prop in declared or []:
            view.add(prop.with_value(self.get_value_for(prop.key)))
        return view

    def add_error(self, key: str, message: str) -> None:
        self._errors.setdefault(key, []).append(message)

    def get_error_for(self, key: str) -> List[str]:
        return list(self._errors.get(key, []))

    def errors(self) -> Dict[str, List[str]]:
        return OrderedDict((key, list(messages)) for key, messages in self._errors.items())

    def has_errors(self) -> bool:
        return bool(self._errors)

    def to_dict(self) -> dict:
        return {
            "plugin_id": self.plugin_id,
            "configuration": [
                {"key": key, "value": value}
                for key, value in self.get_settings_as_key_value_pair().items()
            ],
            "errors": self.errors(),
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, PluginSettings):
            return NotImplemented
        return (
            self.plugin_id == other.plugin_id
            and list(self._settings.items()) == list(other._settings.items())
        )

    def __repr__(self):
        return f"<PluginSettings {self.plugin_id} keys={self.get_plugin_settings_keys()}>"
