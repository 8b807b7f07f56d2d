"""JSON file-based plugin settings store."""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

if os.name == "nt":  # pragma: no cover - platform specific
    import msvcrt
else:  # pragma: no cover - platform specific
    import fcntl

from pluginsettings.exceptions import PluginStoreError
from pluginsettings.models.plugin import Plugin
from pluginsettings.repositories.plugin_store import PluginStore

logger = logging.getLogger(__name__)

# Serializes writers within the process; the lock file covers other processes.
_write_lock = threading.Lock()


class JsonFilePluginStore(PluginStore):
    """
    Persists plugin records to a JSON file on disk.

    Layout of ``<settings_dir>/plugin_settings.json``::

        {"plugins": {"<plugin id>": {"id": 1, "configuration": {...}, ...}}}

    Configuration values are written as JSON, so ``null`` and ``""`` stay
    distinct. Each upsert re-reads the file and rewrites it while holding an
    exclusive lock on ``plugin_settings.json.lock``.
    """

    FILENAME = "plugin_settings.json"

    def __init__(self, settings_dir: str):
        self._settings_dir = settings_dir
        self._path = os.path.join(settings_dir, self.FILENAME)
        self._lock_path = self._path + ".lock"

    @contextmanager
    def _exclusive(self):
        """Hold the in-process lock and an advisory lock on the lock file."""
        os.makedirs(self._settings_dir, exist_ok=True)
        with _write_lock, open(self._lock_path, "a") as fh:
            if os.name == "nt":  # pragma: no cover - platform specific
                fh.seek(0)
                msvcrt.locking(fh.fileno(), msvcrt.LK_LOCK, 1)
            else:  # pragma: no cover - platform specific
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                if os.name == "nt":  # pragma: no cover - platform specific
                    msvcrt.locking(fh.fileno(), msvcrt.LK_UNLCK, 1)
                else:  # pragma: no cover - platform specific
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

    def _read(self, strict: bool = False) -> dict:
        """
        Read the 'plugins' dict.

        Args:
            strict: Raise on an unreadable file instead of treating it as empty

        Raises:
            PluginStoreError: If ``strict`` and the file is not valid JSON
        """
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
            return data.get("plugins", {})
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            if strict:
                logger.error(
                    f"Refusing to overwrite unreadable plugin settings file '{self._path}': {e}"
                )
                raise PluginStoreError(
                    f"Plugin settings file '{self._path}' is not valid JSON: {e}"
                ) from e
            logger.warning(f"Ignoring unreadable plugin settings file '{self._path}': {e}")
            return {}

    def _write(self, plugins: dict) -> None:
        """Atomically write the settings file."""
        fd, tmp_path = tempfile.mkstemp(dir=self._settings_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump({"plugins": plugins}, f, indent=2)
            os.replace(tmp_path, self._path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    @staticmethod
    def _to_plugin(plugin_id: str, entry: dict) -> Plugin:
        plugin = Plugin(plugin_id=plugin_id, id=entry.get("id"))
        plugin.set_configuration_values(entry.get("configuration") or {})
        if entry.get("createdAt"):
            plugin.created_at = datetime.fromisoformat(entry["createdAt"])
        if entry.get("updatedAt"):
            plugin.updated_at = datetime.fromisoformat(entry["updatedAt"])
        return plugin

    def find_by_plugin_id(self, plugin_id: str) -> Optional[Plugin]:
        entry = self._read().get(plugin_id)
        if entry is None:
            return None
        return self._to_plugin(plugin_id, entry)

    def get_all(self) -> List[Plugin]:
        return [
            self._to_plugin(plugin_id, entry)
            for plugin_id, entry in sorted(self._read().items())
        ]

    def upsert(self, plugin: Plugin) -> Plugin:
        """
        Insert or replace the record of one plugin.

        Raises:
            PluginStoreError: If the existing file cannot be parsed; other
                plugins' records are never dropped
        """
        with self._exclusive():
            plugins = self._read(strict=True)
            now = datetime.utcnow()

            existing = plugins.get(plugin.plugin_id)
            if existing is not None:
                plugin.id = existing.get("id")
            elif plugin.id is None:
                existing_ids = [entry.get("id") or 0 for entry in plugins.values()]
                plugin.id = max(existing_ids, default=0) + 1
            if plugin.created_at is None:
                plugin.created_at = now
            plugin.updated_at = now

            plugins[plugin.plugin_id] = {
                "id": plugin.id,
                "configuration": plugin.get_configuration_values(),
                "createdAt": plugin.created_at.isoformat(),
                "updatedAt": plugin.updated_at.isoformat(),
            }
            self._write(plugins)
        return plugin
