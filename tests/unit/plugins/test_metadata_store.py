"""Tests for PluginSettingsMetadataStore."""
import threading

import pytest

from pluginsettings.models.enums import ExtensionKind
from pluginsettings.plugins.configuration import (
    PluginSettingsConfiguration,
    PluginSettingsProperty,
)
from pluginsettings.plugins.metadata_store import PluginSettingsMetadataStore


class TestPluginSettingsMetadataStore:
    """Test PluginSettingsMetadataStore."""

    @pytest.fixture
    def store(self):
        store = PluginSettingsMetadataStore()
        yield store
        store.clear()

    @pytest.fixture
    def configuration(self):
        return PluginSettingsConfiguration([PluginSettingsProperty("k1"), PluginSettingsProperty("k2")])

    def test_lookup_returns_registered_metadata(self, store, configuration):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM, configuration, "template-1")

        entry = store.lookup_for("plugin-1", ExtensionKind.SCM)

        assert entry.plugin_id == "plugin-1"
        assert entry.extension_kind == "scm"
        assert entry.configuration is configuration
        assert entry.template == "template-1"

    def test_lookup_accepts_plain_kind_strings(self, store, configuration):
        store.add_metadata_for("plugin-1", "scm", configuration)

        assert store.configuration("plugin-1", ExtensionKind.SCM) is configuration

    def test_lookup_is_keyed_by_kind(self, store, configuration):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM, configuration, "scm-template")
        store.add_metadata_for("plugin-1", ExtensionKind.NOTIFICATION, None, "n-template")

        assert store.template("plugin-1", ExtensionKind.SCM) == "scm-template"
        assert store.template("plugin-1", ExtensionKind.NOTIFICATION) == "n-template"
        assert store.configuration("plugin-1", ExtensionKind.NOTIFICATION) is None
        assert store.lookup_for("plugin-1", ExtensionKind.PLUGGABLE_TASK) is None

    def test_kinds_for_and_has_plugin(self, store):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM)
        store.add_metadata_for("plugin-1", ExtensionKind.CONFIG_REPO)

        assert store.kinds_for("plugin-1") == ["scm", "configrepo"]
        assert store.has_plugin("plugin-1")
        assert not store.has_plugin("plugin-2")

    def test_re_adding_replaces_entry(self, store, configuration):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM, None, "old")
        store.add_metadata_for("plugin-1", ExtensionKind.SCM, configuration, "new")

        assert store.template("plugin-1", ExtensionKind.SCM) == "new"
        assert store.kinds_for("plugin-1") == ["scm"]

    def test_remove_metadata_for(self, store):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM)
        store.add_metadata_for("plugin-2", ExtensionKind.SCM)

        store.remove_metadata_for("plugin-1")

        assert not store.has_plugin("plugin-1")
        assert store.has_plugin("plugin-2")

    def test_clear(self, store):
        store.add_metadata_for("plugin-1", ExtensionKind.SCM)

        store.clear()

        assert not store.has_plugin("plugin-1")

    def test_stores_are_independent(self):
        first = PluginSettingsMetadataStore()
        second = PluginSettingsMetadataStore()

        first.add_metadata_for("plugin-1", ExtensionKind.SCM)

        assert not second.has_plugin("plugin-1")

    def test_concurrent_registration(self, store):
        def register(n):
            for i in range(50):
                store.add_metadata_for(f"plugin-{n}-{i}", ExtensionKind.SCM)

        threads = [threading.Thread(target=register, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(store.has_plugin(f"plugin-{n}-49") for n in range(4))
