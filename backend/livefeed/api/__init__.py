"""API blueprint package aggregating versioned endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, send_from_directory

from livefeed.api.deps import resolve_auth
from livefeed.core.extensions import get_blob_store


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, typically the API version segment such
        as ``"/api/v1"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def _serve_image(filename: str):
    """Serve a stored upload by the name embedded in its reference."""

    store = get_blob_store()
    return send_from_directory(store.root, filename)


def init_app(app: Flask) -> None:
    """Register the API version and the public image route on the Flask app."""

    api_base = app.config.get("API_BASE_PREFIX", "/api")

    from livefeed.api.v1 import API_VERSION as V1
    from livefeed.api.v1 import REGISTRY as V1_REGISTRY

    app.before_request(resolve_auth)
    register_blueprint_group(app, base_prefix=f"{api_base}/{V1}", entries=V1_REGISTRY)

    prefix = get_blob_store(app).prefix
    app.add_url_rule(f"/{prefix}/<path:filename>", endpoint="images", view_func=_serve_image)


__all__ = ["init_app", "register_blueprint_group"]
