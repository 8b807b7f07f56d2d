"""CLI commands."""
from pluginsettings.cli.plugin_settings import plugin_settings_cli

__all__ = ["plugin_settings_cli"]
