"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from authapi.core.config import CONFIG_MAP, BaseConfig, get_config
from authapi.core.logger import configure_logging
from authapi.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Environment name (``"testing"``), config class or object.
        Defaults to the class selected by ``APP_ENV``.
    :param instance_relative_config: Load overrides from the instance folder.
    :param instance_config_filename: Instance override file name.
    :returns: Configured application.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    if config is None:
        app.config.from_object(get_config())
    elif isinstance(config, str) and config.strip().lower() in CONFIG_MAP:
        app.config.from_object(get_config(config))
    else:
        app.config.from_object(config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from authapi.core import proxy

    proxy.init_app(app)

    from authapi.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from authapi.core import cors

    cors.init_app(app)

    from authapi.api import init_app as init_api

    init_api(app)

    from authapi.core import errors

    errors.init_app(app)

    from authapi import cli as app_cli

    app_cli.init_app(app)

    return app
