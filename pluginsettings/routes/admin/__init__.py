"""Admin routes package."""
from pluginsettings.routes.admin.plugin_settings import admin_plugin_settings_bp

__all__ = [
    "admin_plugin_settings_bp",
]
