"""Shared test fixtures."""
from unittest.mock import MagicMock

import pytest

from pluginsettings.config import TestingConfig
from pluginsettings.plugins.extension import PluginExtension, ValidationResult


def _testing_config(**overrides) -> dict:
    """TestingConfig as a dict, with overrides applied."""
    config = {
        key: getattr(TestingConfig, key)
        for key in dir(TestingConfig)
        if key.isupper()
    }
    config.update(overrides)
    return config


@pytest.fixture
def app():
    """Application with an in-memory database."""
    from pluginsettings.app import create_app
    from pluginsettings.extensions import db

    app = create_app(_testing_config())
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_extension():
    """Factory for mock extensions that own no plugin and accept any settings."""

    def _make(kind: str, owns=()):
        extension = MagicMock(spec=PluginExtension)
        extension.kind = getattr(kind, "value", kind)
        owned = set(owns)
        extension.owns_plugin.side_effect = lambda plugin_id: plugin_id in owned
        extension.validate_plugin_settings.return_value = ValidationResult()
        extension.notify_plugin_settings_change.return_value = None
        return extension

    return _make


@pytest.fixture
def app_factory():
    """Build an application with extra config; tables are created on build."""
    from pluginsettings.app import create_app
    from pluginsettings.extensions import db

    contexts = []

    def _build(**overrides):
        app = create_app(_testing_config(**overrides))
        ctx = app.app_context()
        ctx.push()
        contexts.append(ctx)
        db.create_all()
        return app

    yield _build

    for ctx in reversed(contexts):
        db.session.remove()
        ctx.pop()
