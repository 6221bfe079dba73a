"""FinCounsel application factory."""

from __future__ import annotations

import os
from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "fincounsel.blueprints.home"
    yield "fincounsel.blueprints.clients"
    yield "fincounsel.blueprints.analyses"
    yield "fincounsel.blueprints.calculators"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance.

    Without ``config_name`` the config is chosen by ``FINCOUNSEL_ENV``.
    """

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name or os.getenv("FINCOUNSEL_ENV"))
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["FINCOUNSEL_CONFIG"] = config_obj

    setup_logging(config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)

    # Imported here so importing the package does not build the model mappers.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    get_logger(__name__).info(
        "Application created", extra={"config": config_cls.__name__}
    )
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    logger = get_logger("errors")

    @app.errorhandler(404)
    def _not_found(_exc):
        return jsonify({"error": "not_found"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(_exc):
        return jsonify({"error": "method_not_allowed"}), 405

    @app.errorhandler(500)
    def _server_error(exc):
        logger.error("Unhandled error", exc_info=getattr(exc, "original_exception", exc))
        return jsonify({"error": "internal_error"}), 500


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
