"""Edge middleware: upstream proxy headers and CORS for the API surface."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix


def _parse_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Wrap the WSGI app with ``ProxyFix`` and register the CORS policy.

    Parameters
    ----------
    app: flask.Flask
        Application being configured.

    Notes
    -----
    - ``USE_PROXYFIX`` (default ``True``) trusts a single hop of
      ``X-Forwarded-*`` headers.
    - ``CORS_ORIGINS`` blank or ``"*"`` allows any origin without credentials.
      Browsers only need ``Content-Type`` and ``Authorization`` on requests.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    origins = _parse_origins(app.config.get("CORS_ORIGINS", ""))
    wildcard = not origins or origins == ["*"]
    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=["Content-Type", "Authorization"],
        methods=["OPTIONS", "GET", "POST", "PUT", "PATCH", "DELETE"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
