"""Cache configuration entity."""

from dataclasses import dataclass

BACKENDS = ("memory", "redis")


@dataclass
class CacheConfig:
    """Cache configuration.

    Selects and parameterizes the backend built by
    :func:`kvcache.factory.create_backend`.

    Attributes:
        backend: ``"memory"`` for the in-process store, ``"redis"`` for
            the remote store.
        key_prefix: Namespace prepended to every normalized key.
        redis_url: Connection URL for the Redis backend.
        maxsize: Upper bound on in-memory entries (LRU eviction).
            ``None`` keeps the store unbounded.
    """

    backend: str = "memory"
    key_prefix: str = ""
    redis_url: str = "redis://localhost:6379/0"
    maxsize: int | None = None

    def __post_init__(self) -> None:
        """Validate the backend name and size bound."""
        self.backend = self.backend.lower()
        if self.backend not in BACKENDS:
            raise ValueError(
                f"unknown cache backend {self.backend!r}, "
                f"expected one of {', '.join(BACKENDS)}"
            )
        if self.maxsize is not None and self.maxsize < 1:
            raise ValueError("maxsize must be >= 1")
