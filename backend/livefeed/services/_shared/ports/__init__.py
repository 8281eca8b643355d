from .blob_store import BlobStore, InMemoryBlobStore
from .token_provider import StubTokenProvider, TokenClaims, TokenProvider

__all__ = [
    "BlobStore",
    "InMemoryBlobStore",
    "StubTokenProvider",
    "TokenClaims",
    "TokenProvider",
]
