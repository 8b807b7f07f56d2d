"""Plugin settings CLI commands."""
import os

import click
from flask import current_app
from flask.cli import with_appcontext

from pluginsettings.config import STORE_JSON
from pluginsettings.exceptions import UnresolvedPluginError
from pluginsettings.extensions import db
from pluginsettings.models.plugin_settings import PluginSettings


def _parse_assignment(assignment: str):
    """'key=value' sets a value, 'key=' sets it empty and a bare 'key' leaves it unset."""
    if "=" not in assignment:
        return assignment, None
    key, value = assignment.split("=", 1)
    return key, value


def _format_value(value):
    return "<unset>" if value is None else repr(value)


@click.group("plugin-settings")
def plugin_settings_cli():
    """Plugin settings commands."""
    pass


@plugin_settings_cli.command("init-db")
@with_appcontext
def init_db():
    """Create the storage for plugin settings (tables or settings directory)."""
    if current_app.config.get("PLUGIN_SETTINGS_STORE") == STORE_JSON:
        settings_dir = current_app.config["PLUGIN_SETTINGS_DIR"]
        os.makedirs(settings_dir, exist_ok=True)
        click.echo(f"Plugin settings directory ready: {settings_dir}")
        return

    db.create_all()
    click.echo("Plugin settings tables created.")


@plugin_settings_cli.command("list")
@with_appcontext
def list_plugin_settings():
    """List plugins with stored settings."""
    plugins = current_app.container.plugin_store().get_all()
    if not plugins:
        click.echo("No plugin settings stored.")
        return

    for plugin in plugins:
        keys = len(plugin.get_configuration_values())
        click.echo(f"{plugin.plugin_id} ({keys} keys)")


@plugin_settings_cli.command("show")
@click.argument("plugin_id")
@with_appcontext
def show_plugin_settings(plugin_id):
    """Show the stored settings of a plugin."""
    settings = current_app.container.plugin_service().load_stored_plugin_settings(plugin_id)
    if settings is None:
        click.echo(f"No settings stored for plugin '{plugin_id}'.")
        return

    for key, value in settings.get_settings_as_key_value_pair().items():
        click.echo(f"{key} = {_format_value(value)}")


@plugin_settings_cli.command("set")
@click.argument("plugin_id")
@click.argument("assignments", nargs=-1, required=True)
@click.option("--validate/--no-validate", default=True, help="Ask the owning plugin to validate first.")
@with_appcontext
def set_plugin_settings(plugin_id, assignments, validate):
    """Replace the settings of a plugin (system provisioning, no admin check)."""
    service = current_app.container.plugin_service()
    settings = PluginSettings(plugin_id)
    for assignment in assignments:
        key, value = _parse_assignment(assignment)
        settings.add_setting(key, value)

    if validate:
        try:
            service.validate_plugin_settings_for(settings)
        except UnresolvedPluginError as e:
            click.echo(f"Error: {e}")
            raise SystemExit(1)
        if settings.has_errors():
            for key, messages in settings.errors().items():
                for message in messages:
                    click.echo(f"Error: {key}: {message}")
            raise SystemExit(1)

    service.save_plugin_settings_for(settings)
    click.echo(f"Saved {len(assignments)} setting(s) for plugin '{plugin_id}'.")
