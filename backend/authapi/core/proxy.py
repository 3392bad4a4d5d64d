"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in ``ProxyFix`` when ``USE_PROXYFIX`` is enabled.

    One trusted hop for ``X-Forwarded-For``/``-Proto``/``-Host``/``-Prefix``,
    matching a single reverse proxy in front of gunicorn. Request ids and
    client addresses in logs then reflect the original caller.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1
        )
