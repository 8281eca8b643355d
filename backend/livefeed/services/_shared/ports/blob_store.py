from __future__ import annotations

from typing import BinaryIO, Protocol


class BlobStore(Protocol):
    """Port for storing uploaded images and deleting them by reference."""

    def store(self, stream: BinaryIO, filename: str) -> str: ...

    def delete(self, reference: str) -> None: ...


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store used in unit tests.

    ``fail_deletes`` makes every ``delete`` raise ``delete_error`` (``OSError``
    by default) so callers' best-effort handling can be observed.
    """

    def __init__(
        self, *, fail_deletes: bool = False, delete_error: type[Exception] = OSError
    ) -> None:
        self.blobs: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_deletes = fail_deletes
        self.delete_error = delete_error
        self._seq = 0

    def store(self, stream: BinaryIO, filename: str) -> str:
        self._seq += 1
        reference = f"images/{self._seq}-{filename}"
        self.blobs[reference] = stream.read()
        return reference

    def delete(self, reference: str) -> None:
        if self.fail_deletes:
            raise self.delete_error(f"cannot delete {reference}")
        self.blobs.pop(reference, None)
        self.deleted.append(reference)
