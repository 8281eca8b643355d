"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import atexit

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from livefeed.infra.storage.local_blob_store import LocalBlobStore
from livefeed.realtime.hub import FeedHub

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

HUB_KEY = "feed_hub"
BLOB_STORE_KEY = "blob_store"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the feed collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`livefeed.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The fan-out hub lives exactly as long as the process: it is created here,
    once per application, and shut down at interpreter exit. Nothing about
    it is persisted, so subscribers reconnecting after a restart start from
    an empty hub.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from livefeed import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    hub = FeedHub(max_queue_size=int(app.config.get("FEED_SUBSCRIBER_QUEUE_SIZE", 100)))
    app.extensions[HUB_KEY] = hub
    atexit.register(hub.shutdown)

    app.extensions[BLOB_STORE_KEY] = LocalBlobStore(root=app.config.get("IMAGE_STORAGE_DIR", "./images"))


def get_hub(app: Flask | None = None) -> FeedHub:
    """Return the fan-out hub registered on ``app`` (or the current app)."""
    target = app or current_app
    hub = target.extensions.get(HUB_KEY)
    if hub is None:
        raise RuntimeError("Feed hub is not initialized. Call init_app() first.")
    return hub


def get_blob_store(app: Flask | None = None) -> LocalBlobStore:
    """Return the blob store registered on ``app`` (or the current app)."""
    target = app or current_app
    store = target.extensions.get(BLOB_STORE_KEY)
    if store is None:
        raise RuntimeError("Blob store is not initialized. Call init_app() first.")
    return store
