"""Tests for RedisCacheBackend."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError, ResponseError

from kvcache.core.entities.cache_value import INFINITE_TTL
from kvcache.core.errors import CounterOverflowError, TypeMismatchError
from kvcache.infrastructure.backends.redis import RedisCacheBackend


class TestRedisCacheBackend:
    """Tests for RedisCacheBackend against a fake Redis server."""

    @pytest.fixture
    def backend(self, redis_backend: RedisCacheBackend) -> RedisCacheBackend:
        """Create a backend for testing."""
        return redis_backend

    @pytest.mark.asyncio
    async def test_put_and_get(self, backend: RedisCacheBackend) -> None:
        """Test basic put and get; Redis hands values back as raw bytes."""
        await backend.put("key1", "value1")
        await backend.put("key2", 42)

        assert await backend.get("key1") == b"value1"
        assert await backend.get("key2") == b"42"
        assert (await backend.cast("key1")).to_str() == "value1"
        assert (await backend.cast("key2")).to_int() == 42

    @pytest.mark.asyncio
    async def test_keys_are_prefixed_and_slugified(
        self,
        backend: RedisCacheBackend,
        redis_client: fakeredis.FakeAsyncRedis,
    ) -> None:
        """Test the storage key layout."""
        await backend.put("user  john!", "value")

        assert await redis_client.get("test:user-john") == b"value"
        assert await backend.get("user-john") == b"value"

    @pytest.mark.asyncio
    async def test_binary_values_round_trip(self, backend: RedisCacheBackend) -> None:
        """Test bytes that are not valid UTF-8 come back unchanged."""
        await backend.put("blob", b"\xff\xfe")

        assert await backend.get("blob") == b"\xff\xfe"
        assert await backend.pull("blob") == b"\xff\xfe"

        await backend.put("blob", b"\xff\xfe")
        caster = await backend.cast("blob")
        assert caster.value == b"\xff\xfe"
        with pytest.raises(TypeMismatchError):
            caster.to_str()

    @pytest.mark.asyncio
    async def test_missing_key_is_absent(self, backend: RedisCacheBackend) -> None:
        """Test every read treats a never-written key as absent."""
        assert await backend.get("nonexistent") is None
        assert await backend.pull("nonexistent") is None
        assert await backend.exists("nonexistent") is False
        assert await backend.ttl("nonexistent") == timedelta(0)
        assert (await backend.cast("nonexistent")).is_nil

    @pytest.mark.asyncio
    async def test_put_with_ttl(self, backend: RedisCacheBackend) -> None:
        """Test put stores the TTL and the key expires."""
        await backend.put("key1", "value1", ttl=timedelta(seconds=10))

        remaining = await backend.ttl("key1")
        assert timedelta(seconds=9) < remaining <= timedelta(seconds=10)

        await backend.put("short", "value", ttl=timedelta(milliseconds=100))
        await asyncio.sleep(0.2)
        assert await backend.get("short") is None

    @pytest.mark.asyncio
    async def test_put_without_ttl(self, backend: RedisCacheBackend) -> None:
        """Test keys without TTL report the infinite sentinel."""
        await backend.put("key1", "value1", ttl=timedelta(seconds=10))
        await backend.put("key1", "value2")

        assert await backend.ttl("key1") == INFINITE_TTL

    @pytest.mark.asyncio
    async def test_put_rejects_bad_input(self, backend: RedisCacheBackend) -> None:
        """Test unsupported values and non-positive TTLs are rejected."""
        with pytest.raises(TypeMismatchError):
            await backend.put("key1", None)
        with pytest.raises(ValueError):
            await backend.put("key1", "v", ttl=timedelta(seconds=-5))

    @pytest.mark.asyncio
    async def test_set_existing_keeps_ttl(self, backend: RedisCacheBackend) -> None:
        """Test set updates the value but not the expiry."""
        await backend.put("key1", "v1", ttl=timedelta(seconds=10))

        assert await backend.set("key1", "v2") is True
        assert await backend.get("key1") == b"v2"
        assert timedelta(0) < await backend.ttl("key1") <= timedelta(seconds=10)

    @pytest.mark.asyncio
    async def test_set_missing_writes_nothing(self, backend: RedisCacheBackend) -> None:
        """Test set on an absent key reports False and stores nothing."""
        assert await backend.set("key1", "value") is False
        assert await backend.exists("key1") is False

    @pytest.mark.asyncio
    async def test_override(self, backend: RedisCacheBackend) -> None:
        """Test override keeps an existing TTL and creates missing keys."""
        await backend.put("key1", "v1", ttl=timedelta(seconds=10))
        await backend.override("key1", "v2", ttl=timedelta(seconds=100))

        assert await backend.get("key1") == b"v2"
        assert await backend.ttl("key1") <= timedelta(seconds=10)

        await backend.override("key2", "v1", ttl=timedelta(seconds=100))
        assert await backend.ttl("key2") > timedelta(seconds=99)

    @pytest.mark.asyncio
    async def test_pull(self, backend: RedisCacheBackend) -> None:
        """Test pull returns the value and removes the key."""
        await backend.put("key1", "value1")

        assert await backend.pull("key1") == b"value1"
        assert await backend.exists("key1") is False

    @pytest.mark.asyncio
    async def test_forget_is_idempotent(self, backend: RedisCacheBackend) -> None:
        """Test deleting present and absent keys."""
        await backend.put("key1", "value1")

        await backend.forget("key1")
        await backend.forget("key1")

        assert await backend.exists("key1") is False

    @pytest.mark.asyncio
    async def test_counters(self, backend: RedisCacheBackend) -> None:
        """Test integer and float counters."""
        await backend.put("count", 10, ttl=timedelta(seconds=30))

        assert await backend.increment("count", 5) is True
        assert await backend.decrement("count", 3) is True
        assert (await backend.cast("count")).to_int() == 12

        assert await backend.increment_float("count", 0.5) is True
        assert await backend.decrement_float("count", 2.0) is True
        assert (await backend.cast("count")).to_float() == 10.5

        # TTL survives counter updates
        assert timedelta(0) < await backend.ttl("count") <= timedelta(seconds=30)

    @pytest.mark.asyncio
    async def test_counters_on_missing_key(self, backend: RedisCacheBackend) -> None:
        """Test counters on an absent key create nothing."""
        assert await backend.increment("count") is False
        assert await backend.decrement("count") is False
        assert await backend.increment_float("count", 1.0) is False
        assert await backend.decrement_float("count", 1.0) is False
        assert await backend.exists("count") is False

    @pytest.mark.asyncio
    async def test_counters_on_non_numeric(self, backend: RedisCacheBackend) -> None:
        """Test counters fail on non-numeric values without writing."""
        await backend.put("name", "alice")

        with pytest.raises(TypeMismatchError, match="value is not numeric"):
            await backend.increment("name")
        with pytest.raises(TypeMismatchError, match="value is not numeric"):
            await backend.decrement_float("name", 1.0)

        assert await backend.get("name") == b"alice"

    @pytest.mark.asyncio
    async def test_integer_counter_overflow(self, backend: RedisCacheBackend) -> None:
        """Test leaving the 64-bit range fails and keeps the stored value."""
        await backend.put("count", 2**63 - 1)

        with pytest.raises(CounterOverflowError):
            await backend.increment("count")

        assert (await backend.cast("count")).to_int() == 2**63 - 1

    @pytest.mark.asyncio
    async def test_overflow_replies_are_mapped(
        self,
        backend: RedisCacheBackend,
        redis_client: fakeredis.FakeAsyncRedis,
    ) -> None:
        """Test Redis overflow replies surface as CounterOverflowError."""
        await backend.put("count", 1)
        redis_client.incrby = AsyncMock(
            side_effect=ResponseError("increment or decrement would overflow")
        )
        redis_client.incrbyfloat = AsyncMock(
            side_effect=ResponseError("increment would produce NaN or Infinity")
        )

        with pytest.raises(CounterOverflowError, match="would overflow"):
            await backend.increment("count")
        with pytest.raises(CounterOverflowError, match="NaN or Infinity"):
            await backend.increment_float("count", 1.0)

    @pytest.mark.asyncio
    async def test_other_replies_propagate(
        self,
        backend: RedisCacheBackend,
        redis_client: fakeredis.FakeAsyncRedis,
    ) -> None:
        """Test unrelated error replies are not remapped."""
        await backend.put("count", 1)
        redis_client.incrby = AsyncMock(side_effect=ResponseError("READONLY"))

        with pytest.raises(ResponseError, match="READONLY"):
            await backend.increment("count")

    @pytest.mark.asyncio
    async def test_clear_spans_several_batches(
        self, backend: RedisCacheBackend
    ) -> None:
        """Test clear removes more keys than one SCAN batch returns."""
        for i in range(250):
            await backend.put(f"key{i}", i)

        await backend.clear()

        assert not [i for i in range(250) if await backend.exists(f"key{i}")]

    @pytest.mark.asyncio
    async def test_clear_only_touches_prefix(
        self,
        backend: RedisCacheBackend,
        redis_client: fakeredis.FakeAsyncRedis,
    ) -> None:
        """Test clear deletes keys in the backend namespace only."""
        await backend.put("key1", "value1")
        await backend.put("key2", "value2")
        await redis_client.set("other:key", "keep")

        await backend.clear()

        assert await backend.exists("key1") is False
        assert await backend.exists("key2") is False
        assert await redis_client.get("other:key") == b"keep"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(
        self,
        backend: RedisCacheBackend,
        redis_client: fakeredis.FakeAsyncRedis,
    ) -> None:
        """Test connection failures surface unchanged."""
        redis_client.get = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(ConnectionError, match="down"):
            await backend.get("key1")

    @pytest.mark.asyncio
    async def test_context_manager_closes(
        self, redis_client: fakeredis.FakeAsyncRedis
    ) -> None:
        """Test the async context manager closes the client."""
        redis_client.aclose = AsyncMock()

        async with RedisCacheBackend(redis_client) as backend:
            await backend.put("key1", "value1")

        redis_client.aclose.assert_awaited_once()
