"""Tests for PluginSettings and SettingValue."""
from pluginsettings.models.enums import ValueState
from pluginsettings.models.plugin import Plugin
from pluginsettings.models.plugin_settings import PluginSettings, SettingValue
from pluginsettings.plugins.configuration import (
    PluginSettingsConfiguration,
    PluginSettingsProperty,
)


class TestSettingValue:
    """Test the three value states."""

    def test_present_value(self):
        value = SettingValue.of("v1")
        assert value.state is ValueState.PRESENT
        assert value.raw == "v1"

    def test_empty_value(self):
        value = SettingValue.of("")
        assert value.state is ValueState.EMPTY
        assert value.raw == ""

    def test_absent_value(self):
        value = SettingValue.of(None)
        assert value.state is ValueState.ABSENT
        assert value.raw is None
        assert value.is_absent

    def test_empty_and_absent_are_different(self):
        assert SettingValue.of("") != SettingValue.of(None)


class TestPluginSettings:
    """Test PluginSettings."""

    def test_populate_keeps_order_and_states(self):
        settings = PluginSettings("p").populate_settings_map({"b": "1", "a": "", "c": None})

        assert settings.get_plugin_settings_keys() == ["b", "a", "c"]
        assert settings.get_setting("a").state is ValueState.EMPTY
        assert settings.get_setting("c").state is ValueState.ABSENT
        assert settings.has_setting("c")

    def test_unknown_key_is_absent(self):
        settings = PluginSettings("p")

        assert settings.get_value_for("missing") is None
        assert not settings.has_setting("missing")

    def test_key_value_pairs_keep_nulls(self):
        settings = PluginSettings("p").populate_settings_map({"k1": "v1", "k2": "", "k3": None})

        assert settings.get_settings_as_key_value_pair() == {"k1": "v1", "k2": "", "k3": None}

    def test_errors_append_in_order_without_dedup(self):
        settings = PluginSettings("p")
        settings.add_error("foo", "first")
        settings.add_error("foo", "first")
        settings.add_error("bar", "second")

        assert settings.has_errors()
        assert settings.get_error_for("foo") == ["first", "first"]
        assert list(settings.errors()) == ["foo", "bar"]
        assert settings.get_error_for("baz") == []

    def test_configuration_view_lists_every_declared_key(self):
        declared = PluginSettingsConfiguration(
            [PluginSettingsProperty("k1", secure=True), PluginSettingsProperty("k2")]
        )
        settings = PluginSettings("p").populate_settings_map({"k1": "v1", "extra": "x"})

        view = settings.to_plugin_settings_configuration(declared)

        assert view.keys() == ["k1", "k2"]
        assert view.get("k1").value == "v1"
        assert view.get("k1").secure is True
        assert view.get("k2").value is None
        assert declared.get("k1").value is None

    def test_configuration_view_without_declaration_is_empty(self):
        settings = PluginSettings("p").populate_settings_map({"k1": "v1"})

        assert len(settings.to_plugin_settings_configuration(None)) == 0

    def test_from_plugin_round_trips_values(self):
        plugin = Plugin(plugin_id="p")
        plugin.set_configuration_values({"k1": "v1", "k2": "", "k3": None})

        settings = PluginSettings.from_plugin(plugin)

        assert settings.plugin_id == "p"
        assert settings.get_settings_as_key_value_pair() == {"k1": "v1", "k2": "", "k3": None}
        assert settings.get_setting("k2").state is ValueState.EMPTY
        assert settings.get_setting("k3").state is ValueState.ABSENT

    def test_to_dict(self):
        settings = PluginSettings("p").populate_settings_map({"k": None})
        settings.add_error("k", "required")

        assert settings.to_dict() == {
            "plugin_id": "p",
            "configuration": [{"key": "k", "value": None}],
            "errors": {"k": ["required"]},
        }

    def test_equality_ignores_errors(self):
        left = PluginSettings("p").populate_settings_map({"k": "v"})
        right = PluginSettings("p").populate_settings_map({"k": "v"})
        right.add_error("k", "bad")

        assert left == right
        assert left != PluginSettings("p").populate_settings_map({"k": ""})
