"""Filesystem-backed image storage."""

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from livefeed.services._shared.ports import BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """
    Store uploads under ``root`` with random UUID filenames.

    References handed back to callers look like ``images/<uuid>.<ext>``; the
    ``images`` prefix is also the public URL segment the files are served from.

    :param root: Directory holding the files. Created lazily on first store.
    :param prefix: Leading path segment of every reference.
    """

    def __init__(self, root: str | Path, *, prefix: str = "images") -> None:
        self.root = Path(root).resolve()
        self.prefix = prefix.strip("/")

    def store(self, stream: BinaryIO, filename: str) -> str:
        suffix = PurePosixPath(filename).suffix.lower()
        name = f"{uuid.uuid4()}{suffix}"
        self.root.mkdir(parents=True, exist_ok=True)
        with open(self.root / name, "wb") as out:
            shutil.copyfileobj(stream, out)
        reference = f"{self.prefix}/{name}"
        logger.info("Image stored", extra={"reference": reference})
        return reference

    def path_for(self, reference: str) -> Path:
        """
        Resolve ``reference`` to a file inside ``root``.

        :raises ValueError: if the reference escapes ``root`` or has a foreign prefix.
        """
        ref = PurePosixPath(reference.lstrip("/"))
        parts = ref.parts
        if len(parts) != 2 or parts[0] != self.prefix:
            raise ValueError(f"Not a blob reference: {reference!r}")
        path = (self.root / parts[1]).resolve()
        if path.parent != self.root:
            raise ValueError(f"Not a blob reference: {reference!r}")
        return path

    def delete(self, reference: str) -> None:
        """
        Remove the file behind ``reference``.

        :raises ValueError: for references outside the store.
        :raises FileNotFoundError: when the file is already gone.
        """
        self.path_for(reference).unlink()
        logger.info("Image deleted", extra={"reference": reference})
