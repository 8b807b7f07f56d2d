"""Dependency injection container."""
from dependency_injector import containers, providers

from pluginsettings.plugins.metadata_store import PluginSettingsMetadataStore
from pluginsettings.plugins.plugin_info import InMemoryPluginInfoFinder
from pluginsettings.plugins.provider_set import ExtensionProviderSet
from pluginsettings.repositories.json_plugin_store import JsonFilePluginStore
from pluginsettings.repositories.plugin_repository import PluginRepository
from pluginsettings.services.entity_hashing_service import EntityHashingService
from pluginsettings.services.plugin_service import PluginService
from pluginsettings.services.security_service import SecurityService


class Container(containers.DeclarativeContainer):
    """
    Application dependency injection container.

    Usage:
        container = Container()
        container.config.from_dict({"store": "database", "admins": ["admin"]})
        container.db_session.override(db.session)

        plugin_service = container.plugin_service()
    """

    # Configuration
    config = providers.Configuration()

    # Database session - must be overridden with actual db.session
    db_session = providers.Dependency()

    # ==================
    # Plugin registries (shared, populated by the plugin lifecycle)
    # ==================

    metadata_store = providers.Singleton(PluginSettingsMetadataStore)

    extensions = providers.Singleton(ExtensionProviderSet)

    plugin_info_finder = providers.Singleton(InMemoryPluginInfoFinder)

    # ==================
    # Repositories
    # ==================

    plugin_repository = providers.Factory(
        PluginRepository,
        session=db_session
    )

    json_plugin_store = providers.Factory(
        JsonFilePluginStore,
        settings_dir=config.settings_dir
    )

    plugin_store = providers.Selector(
        config.store,
        database=plugin_repository,
        json=json_plugin_store,
    )

    # ==================
    # Services
    # ==================

    security_service = providers.Singleton(
        SecurityService,
        admin_usernames=config.admins
    )

    entity_hashing_service = providers.Singleton(
        EntityHashingService
    )

    plugin_service = providers.Factory(
        PluginService,
        extensions=extensions,
        plugin_store=plugin_store,
        security_service=security_service,
        entity_hashing_service=entity_hashing_service,
        plugin_info_finder=plugin_info_finder,
        metadata_store=metadata_store
    )
