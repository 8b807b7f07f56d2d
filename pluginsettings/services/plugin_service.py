"""Plugin settings service - loads, validates and saves plugin settings."""
import logging
from typing import Optional

from pluginsettings.exceptions import (
    ConflictError,
    NotificationError,
    PluginSettingsError,
    SettingsValidationError,
    UnauthorizedError,
    UnresolvedPluginError,
)
from pluginsettings.models.plugin import Plugin
from pluginsettings.models.plugin_settings import PluginSettings
from pluginsettings.plugins.configuration import PluginSettingsConfiguration
from pluginsettings.plugins.extension import (
    NotificationOutcome,
    PluginExtension,
    ValidationResult,
)
from pluginsettings.plugins.metadata_store import (
    PluginSettingsMetadata,
    PluginSettingsMetadataStore,
)
from pluginsettings.plugins.plugin_info import PluginInfo, PluginInfoFinder
from pluginsettings.plugins.provider_set import ExtensionProviderSet
from pluginsettings.repositories.plugin_store import PluginStore
from pluginsettings.services.entity_hashing_service import EntityHashingService
from pluginsettings.services.operation_result import OperationResult
from pluginsettings.services.security_service import SecurityService

logger = logging.getLogger(__name__)


class PluginService:
    """Service for plugin settings.

    Orchestrates a settings save:
    1. Check the caller is an administrator
    2. Resolve the extension owning the plugin
    3. Build the declared configuration view and let the extension validate it
    4. Persist the settings
    5. Notify the owning extension (failures are logged, never surfaced)
    """

    def __init__(
        self,
        extensions: ExtensionProviderSet,
        plugin_store: PluginStore,
        security_service: SecurityService,
        entity_hashing_service: EntityHashingService,
        plugin_info_finder: PluginInfoFinder,
        metadata_store: PluginSettingsMetadataStore,
    ):
        self._extensions = extensions
        self._plugin_store = plugin_store
        self._security_service = security_service
        self._entity_hashing_service = entity_hashing_service
        self._plugin_info_finder = plugin_info_finder
        self._metadata_store = metadata_store

    def load_stored_plugin_settings(self, plugin_id: str) -> Optional[PluginSettings]:
        """
        Load the saved settings of a plugin.

        Returns:
            The settings, or None when the plugin's settings were never saved.
        """
        plugin = self._plugin_store.find_by_plugin_id(plugin_id)
        if plugin is None:
            return None
        return PluginSettings.from_plugin(plugin)

    def has_plugin_settings(self, plugin_id: str) -> bool:
        return self._plugin_store.find_by_plugin_id(plugin_id) is not None

    is_plugin_settings_configured = has_plugin_settings

    def save_plugin_settings(self, current_user, settings: PluginSettings) -> OperationResult:
        """
        Validate and save plugin settings on behalf of a user.

        Args:
            current_user: Username of the caller
            settings: Settings to save; validation errors are attached to it

        Returns:
            OperationResult: 200 on success, 401 when the caller is not an
            admin, 422 when the plugin is unknown or validation failed.
        """
        try:
            self._save(current_user, settings)
        except PluginSettingsError as e:
            logger.info(f"Not saving settings for plugin '{settings.plugin_id}': {e}")
            return OperationResult.failed(e, settings)
        return OperationResult.ok(
            settings, f"Saved plugin settings for plugin '{settings.plugin_id}'."
        )

    def update_plugin_settings(
        self, current_user, settings: PluginSettings, md5: str
    ) -> OperationResult:
        """
        Save plugin settings only if the stored settings still match ``md5``.

        The freshness check runs before anything else; a stale request never
        reaches the authorization check, the plugin or the store.
        """
        try:
            self._check_fresh(settings.plugin_id, md5)
            self._save(current_user, settings)
        except PluginSettingsError as e:
            logger.info(f"Not updating settings for plugin '{settings.plugin_id}': {e}")
            return OperationResult.failed(e, settings)
        return OperationResult.ok(
            settings, f"Updated plugin settings for plugin '{settings.plugin_id}'."
        )

    def validate_plugin_settings_for(self, settings: PluginSettings) -> None:
        """
        Run the owning extension's validation and attach its errors to ``settings``.

        Raises:
            UnresolvedPluginError: If no extension claims the plugin
        """
        self._validate(self._resolve_owner(settings.plugin_id), settings)

    def save_plugin_settings_for(self, settings: PluginSettings) -> Plugin:
        """Persist settings without authorization, validation or notification."""
        plugin = self._plugin_store.find_by_plugin_id(settings.plugin_id)
        if plugin is None:
            plugin = Plugin(plugin_id=settings.plugin_id)
        plugin.set_configuration_values(settings.get_settings_as_key_value_pair())
        return self._plugin_store.upsert(plugin)

    def md5_for(self, plugin_id: str) -> str:
        """Fingerprint of the stored settings (of empty settings if none are stored)."""
        stored = self.load_stored_plugin_settings(plugin_id) or PluginSettings(plugin_id)
        return self._entity_hashing_service.md5_for_entity(stored)

    def settings_metadata_for(self, plugin_id: str) -> Optional[PluginSettingsMetadata]:
        """Declared settings registered by the extension owning the plugin."""
        owner = self._extensions.resolve_owner(plugin_id)
        if owner is None:
            return None
        return self._metadata_store.lookup_for(plugin_id, owner.kind)

    def plugin_info_for_extension_that_handles_plugin_settings(
        self, plugin_id: str
    ) -> Optional[PluginInfo]:
        """
        Info of the extension through which the plugin exposes its settings UI.

        Unlike saving, several extensions may claim the plugin here. The first
        claimant (in registration order) whose info declares settings
        properties wins.
        """
        combined = None
        for extension in self._extensions.owners_of(plugin_id):
            if combined is None:
                combined = self._plugin_info_finder.plugin_info_for(plugin_id)
                if combined is None:
                    return None
            info = combined.extension_for(extension.kind)
            if info is not None and info.handles_plugin_settings():
                return info
        return None

    provider_info_that_handles_settings = plugin_info_for_extension_that_handles_plugin_settings

    def _save(self, current_user, settings: PluginSettings) -> None:
        if not self._security_service.is_user_admin(current_user):
            raise UnauthorizedError(str(current_user) if current_user else None)

        owner = self._resolve_owner(settings.plugin_id)
        result = self._validate(owner, settings)
        if not result.is_successful():
            raise SettingsValidationError(settings.plugin_id, result.errors)

        self.save_plugin_settings_for(settings)
        logger.info(f"Saved settings for plugin '{settings.plugin_id}'")

        outcome = self._notify_plugin_settings_change(owner, settings)
        if not outcome.delivered:
            logger.warning(str(outcome.error))

    def _check_fresh(self, plugin_id: str, md5: str) -> None:
        if self.md5_for(plugin_id) != md5:
            raise ConflictError(plugin_id)

    def _resolve_owner(self, plugin_id: str) -> PluginExtension:
        owner = self._extensions.resolve_owner(plugin_id)
        if owner is None:
            logger.warning(f"No extension handles settings for plugin '{plugin_id}'")
            raise UnresolvedPluginError(plugin_id)
        return owner

    def _declared_configuration(
        self, plugin_id: str, owner: PluginExtension
    ) -> Optional[PluginSettingsConfiguration]:
        return self._metadata_store.configuration(plugin_id, owner.kind)

    def _validate(self, owner: PluginExtension, settings: PluginSettings) -> ValidationResult:
        view = settings.to_plugin_settings_configuration(
            self._declared_configuration(settings.plugin_id, owner)
        )
        result = owner.validate_plugin_settings(settings.plugin_id, view)
        for error in result.errors:
            settings.add_error(error.key, error.message)
        return result

    def _notify_plugin_settings_change(
        self, owner: PluginExtension, settings: PluginSettings
    ) -> NotificationOutcome:
        try:
            owner.notify_plugin_settings_change(
                settings.plugin_id, settings.get_settings_as_key_value_pair()
            )
        except Exception as e:
            return NotificationOutcome.failure(NotificationError(settings.plugin_id, e))
        return NotificationOutcome.success()
