"""Repository for plugin settings persistence (DB-backed)."""
from datetime import datetime
from typing import List, Optional

from pluginsettings.models.plugin import Plugin
from pluginsettings.repositories.plugin_store import PluginStore


class PluginRepository(PluginStore):
    """SQLAlchemy-backed store for Plugin records."""

    def __init__(self, session):
        self._session = session

    def find_by_plugin_id(self, plugin_id: str) -> Optional[Plugin]:
        """Get plugin record by plugin id."""
        return (
            self._session.query(Plugin)
            .filter(Plugin.plugin_id == plugin_id)
            .first()
        )

    def get_all(self) -> List[Plugin]:
        """Get all plugin records."""
        return self._session.query(Plugin).order_by(Plugin.plugin_id).all()

    def upsert(self, plugin: Plugin) -> Plugin:
        """
        Create or update a plugin record in one commit.

        Records without an id are inserted and get their id from the
        database; records with an id are updated in place.
        """
        plugin.updated_at = datetime.utcnow()
        try:
            if plugin.id is None:
                self._session.add(plugin)
            else:
                plugin = self._session.merge(plugin)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return plugin
