"""HabitStreak application factory."""

from __future__ import annotations

import atexit
from importlib import import_module
from typing import Iterable, Union

from flask import Flask, current_app

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestingConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging

EXTENSION_KEY = "habitstreak"

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "habitstreak.blueprints.habits"


def create_app(config: Union[str, BaseConfig, None] = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config if isinstance(config, BaseConfig) else _resolve_config(config)()
    app.config.from_object(config_obj)
    app.config["HABITSTREAK_CONFIG"] = config_obj

    setup_logging(config_obj)

    ctx = create_app_context(config_obj)
    app.extensions[EXTENSION_KEY] = ctx
    atexit.register(ctx.dispose)

    _register_blueprints(app)
    _cli.init_app(app)
    return app


def get_app_context(app: Flask | None = None) -> AppContext:
    """Return the AppContext attached to ``app`` (or the current app)."""

    target = app if app is not None else current_app
    return target.extensions[EXTENSION_KEY]


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


__all__ = [
    "AppContext",
    "BaseConfig",
    "DevConfig",
    "TestingConfig",
    "create_app",
    "create_app_context",
    "get_app_context",
]
