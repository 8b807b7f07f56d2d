"""Content fingerprints used to detect stale plugin settings updates."""
import hashlib
import json

from pluginsettings.models.plugin_settings import PluginSettings


class EntityHashingService:
    """Computes a stable md5 digest of a plugin settings snapshot."""

    def md5_for_entity(self, settings: PluginSettings) -> str:
        """
        Digest of the plugin id and its settings.

        Keys are sorted so the digest does not depend on insertion order;
        None and "" hash differently.
        """
        payload = json.dumps(
            {
                "plugin_id": settings.plugin_id,
                "configuration": settings.get_settings_as_key_value_pair(),
            },
            sort_keys=True,
            separators=(",", ":"),
        )
        return hashlib.md5(payload.encode("utf-8")).hexdigest()

    fingerprint_of = md5_for_entity
