"""Admin plugin settings routes."""

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from pluginsettings.models.plugin_settings import PluginSettings
from pluginsettings.models.username import Username

admin_plugin_settings_bp = Blueprint(
    "admin_plugin_settings", __name__, url_prefix="/api/v1/admin/plugin_settings"
)


def _plugin_service():
    return current_app.container.plugin_service()


def _current_user() -> Username:
    return Username(str(get_jwt_identity()))


def _settings_from_request(plugin_id: str) -> PluginSettings:
    """Build settings from a {"configuration": {...}} or [{"key", "value"}] body."""
    payload = request.get_json(silent=True) or {}
    configuration = payload.get("configuration") or {}
    if isinstance(configuration, list):
        configuration = {item.get("key"): item.get("value") for item in configuration}

    settings = PluginSettings(plugin_id)
    for key, value in configuration.items():
        if not key:
            continue
        settings.add_setting(str(key), None if value is None else str(value))
    return settings


def _etag(md5: str) -> str:
    return f'"{md5}"'


def _result_response(result, plugin_id):
    response = jsonify(result.to_dict())
    response.status_code = result.http_code
    if result.is_successful():
        response.headers["ETag"] = _etag(_plugin_service().md5_for(plugin_id))
    return response


@admin_plugin_settings_bp.route("/<plugin_id>", methods=["GET"])
@jwt_required()
def get_plugin_settings(plugin_id):
    """Get the stored settings of a plugin."""
    service = _plugin_service()
    settings = service.load_stored_plugin_settings(plugin_id)
    if settings is None:
        return jsonify({"error": f"Plugin settings for '{plugin_id}' not found"}), 404

    response = jsonify(settings.to_dict())
    response.headers["ETag"] = _etag(service.md5_for(plugin_id))
    return response, 200


@admin_plugin_settings_bp.route("/<plugin_id>", methods=["POST"])
@jwt_required()
def create_plugin_settings(plugin_id):
    """Validate and save plugin settings."""
    settings = _settings_from_request(plugin_id)
    result = _plugin_service().save_plugin_settings(_current_user(), settings)
    return _result_response(result, plugin_id)


@admin_plugin_settings_bp.route("/<plugin_id>", methods=["PUT"])
@jwt_required()
def update_plugin_settings(plugin_id):
    """Update plugin settings; the If-Match header must carry the current ETag."""
    settings = _settings_from_request(plugin_id)
    md5 = request.headers.get("If-Match", "").strip().strip('"')
    result = _plugin_service().update_plugin_settings(_current_user(), settings, md5)
    return _result_response(result, plugin_id)


@admin_plugin_settings_bp.route("/<plugin_id>/info", methods=["GET"])
@jwt_required()
def get_plugin_settings_info(plugin_id):
    """Get info of the extension that renders the plugin's settings UI."""
    info = _plugin_service().plugin_info_for_extension_that_handles_plugin_settings(
        plugin_id
    )
    if info is None:
        return jsonify({"error": f"Plugin '{plugin_id}' does not have settings"}), 404

    settings = info.plugin_settings
    return (
        jsonify(
            {
                "id": info.descriptor.plugin_id,
                "version": info.descriptor.version,
                "type": getattr(info.extension_kind, "value", info.extension_kind),
                "display_name": info.display_name,
                "plugin_settings": {
                    "configurations": [
                        {
                            "key": conf.key,
                            "metadata": {
                                "required": conf.metadata.required,
                                "secure": conf.metadata.secure,
                            },
                        }
                        for conf in settings.configurations
                    ],
                    "view": settings.view,
                },
            }
        ),
        200,
    )
