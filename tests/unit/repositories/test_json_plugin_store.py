"""Tests for JsonFilePluginStore."""
import json
import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from pluginsettings.exceptions import PluginStoreError
from pluginsettings.models.plugin import Plugin
from pluginsettings.repositories.json_plugin_store import JsonFilePluginStore


class TestJsonFilePluginStore:
    """Test JsonFilePluginStore."""

    @pytest.fixture
    def store(self, tmp_path):
        return JsonFilePluginStore(str(tmp_path))

    def _plugin(self, plugin_id, values):
        plugin = Plugin(plugin_id=plugin_id)
        plugin.set_configuration_values(values)
        return plugin

    def test_find_returns_none_without_file(self, store):
        assert store.find_by_plugin_id("plugin-1") is None
        assert store.get_all() == []

    def test_upsert_assigns_ids(self, store):
        first = store.upsert(self._plugin("plugin-1", {"k": "v"}))
        second = store.upsert(self._plugin("plugin-2", {"k": "v"}))

        assert first.id == 1
        assert second.id == 2

    def test_update_keeps_id(self, store):
        store.upsert(self._plugin("plugin-1", {"k": "v"}))

        existing = store.find_by_plugin_id("plugin-1")
        existing.set_configuration_values({"k": "changed"})
        store.upsert(existing)

        reloaded = store.find_by_plugin_id("plugin-1")
        assert reloaded.id == 1
        assert reloaded.get_configuration_values() == {"k": "changed"}
        assert reloaded.created_at is not None

    def test_null_and_empty_values_survive_storage(self, store, tmp_path):
        store.upsert(self._plugin("plugin-1", {"k1": "v1", "k2": "", "k3": None}))

        values = store.find_by_plugin_id("plugin-1").get_configuration_values()
        assert values == {"k1": "v1", "k2": "", "k3": None}

        with open(os.path.join(str(tmp_path), "plugin_settings.json")) as f:
            raw = json.load(f)
        assert raw["plugins"]["plugin-1"]["configuration"] == {"k1": "v1", "k2": "", "k3": None}

    def test_no_temp_files_left_behind(self, store, tmp_path):
        store.upsert(self._plugin("plugin-1", {"k": "v"}))

        assert sorted(os.listdir(str(tmp_path))) == ["plugin_settings.json", "plugin_settings.json.lock"]

    def test_corrupt_file_reads_as_empty(self, store, tmp_path):
        with open(os.path.join(str(tmp_path), "plugin_settings.json"), "w") as f:
            f.write("{not json")

        assert store.find_by_plugin_id("plugin-1") is None

    def test_get_all_sorted_by_plugin_id(self, store):
        store.upsert(self._plugin("b", {}))
        store.upsert(self._plugin("a", {}))

        assert [p.plugin_id for p in store.get_all()] == ["a", "b"]

    def test_concurrent_upserts_of_different_plugins_keep_every_record(self, tmp_path):
        plugin_ids = [f"plugin-{n}" for n in range(40)]

        def save(plugin_id):
            store = JsonFilePluginStore(str(tmp_path))
            plugin = store.find_by_plugin_id(plugin_id) or Plugin(plugin_id=plugin_id)
            plugin.set_configuration_values({"owner": plugin_id})
            store.upsert(plugin)

        with ThreadPoolExecutor(max_workers=10) as executor:
            list(executor.map(save, plugin_ids))

        stored = JsonFilePluginStore(str(tmp_path)).get_all()
        assert sorted(p.plugin_id for p in stored) == sorted(plugin_ids)
        assert all(p.get_configuration_values() == {"owner": p.plugin_id} for p in stored)
        assert len({p.id for p in stored}) == len(plugin_ids)

    def test_upsert_refuses_to_overwrite_corrupt_file(self, store, tmp_path):
        store.upsert(self._plugin("a", {"k": "v"}))
        store.upsert(self._plugin("b", {"k": "v"}))
        path = os.path.join(str(tmp_path), "plugin_settings.json")
        with open(path) as f:
            content = f.read()
        with open(path, "w") as f:
            f.write(content[:-3])

        with pytest.raises(PluginStoreError, match="not valid JSON"):
            store.upsert(self._plugin("c", {"k": "v"}))

        with open(path) as f:
            assert f.read() == content[:-3]

    def test_upsert_of_new_instance_reuses_stored_id(self, store):
        store.upsert(self._plugin("plugin-1", {"k": "v"}))

        again = store.upsert(self._plugin("plugin-1", {"k": "other"}))

        assert again.id == 1
        assert [p.id for p in store.get_all()] == [1]
