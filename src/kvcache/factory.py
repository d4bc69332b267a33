"""Backend construction from configuration."""

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.interfaces.cache_backend import ICacheBackend
from kvcache.infrastructure.backends.memory import InMemoryCacheBackend
from kvcache.infrastructure.backends.redis import RedisCacheBackend


def create_backend(config: CacheConfig | None = None) -> ICacheBackend:
    """Create the cache backend described by ``config``.

    Args:
        config: Backend selection and options. Defaults to an unbounded
            in-memory backend.

    Returns:
        A backend implementing ICacheBackend.

    Example:
        backend = create_backend(
            CacheConfig(backend="redis", key_prefix="myapp",
                        redis_url="redis://cache:6379/0")
        )
    """
    config = config or CacheConfig()

    if config.backend == "redis":
        return RedisCacheBackend(
            redis_url=config.redis_url,
            key_prefix=config.key_prefix,
        )
    return InMemoryCacheBackend(
        maxsize=config.maxsize,
        key_prefix=config.key_prefix,
    )
