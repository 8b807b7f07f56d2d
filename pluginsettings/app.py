"""Flask application factory."""
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from pluginsettings.config import STORE_DATABASE

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Optional configuration dictionary to override defaults.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    from pluginsettings.config import get_config
    app.config.from_object(get_config())
    if config:
        app.config.update(config)

    # Initialize extensions
    from pluginsettings.extensions import db, jwt
    db.init_app(app)
    jwt.init_app(app)

    # Initialize DI container
    from pluginsettings.container import Container
    container = Container()
    container.config.from_dict(
        {
            "store": app.config.get("PLUGIN_SETTINGS_STORE", STORE_DATABASE),
            "settings_dir": app.config.get("PLUGIN_SETTINGS_DIR"),
            "admins": list(app.config.get("PLUGIN_SETTINGS_ADMINS", [])),
        }
    )
    app.container = container

    # db.session is scoped to the app context, so one override serves
    # both requests and CLI commands
    container.db_session.override(db.session)

    # Register blueprints
    from pluginsettings.routes.admin import admin_plugin_settings_bp
    app.register_blueprint(admin_plugin_settings_bp)

    # Register CLI
    from pluginsettings.cli import plugin_settings_cli
    app.cli.add_command(plugin_settings_cli)

    # Health check endpoint
    @app.route("/api/v1/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "ok",
            "service": "plugin-settings",
            "extensions": len(container.extensions()),
        }), 200

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Unhandled error: {error}")
        return jsonify({"error": "Internal server error"}), 500

    return app
