"""Service layer."""
from pluginsettings.services.entity_hashing_service import EntityHashingService
from pluginsettings.services.operation_result import OperationResult
from pluginsettings.services.plugin_service import PluginService
from pluginsettings.services.security_service import SecurityService

__all__ = [
    "EntityHashingService",
    "OperationResult",
    "PluginService",
    "SecurityService",
]
