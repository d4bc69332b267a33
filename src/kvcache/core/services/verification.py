"""One-time verification codes over a cache backend."""

import hmac
import logging
from datetime import timedelta

from kvcache.core.entities.cache_value import INFINITE_TTL, ttl_seconds
from kvcache.core.entities.caster import Caster
from kvcache.core.interfaces.cache_backend import ICacheBackend
from kvcache.utils.codes import random_digits

logger = logging.getLogger(__name__)


class VerificationCode:
    """A single short-lived code per subject.

    Setting a code while one is live replaces it but keeps the running
    TTL; otherwise the code is stored with the configured TTL.
    """

    def __init__(
        self,
        name: str,
        ttl: timedelta,
        backend: ICacheBackend,
    ) -> None:
        """Initialize the verification code store.

        Args:
            name: Subject name, e.g. an email address.
            ttl: Lifetime of a newly created code.
            backend: Cache backend holding the code.

        Raises:
            ValueError: If ttl is not positive.
        """
        ttl_seconds(ttl)
        self._name = name
        self._key = f"verify {name}"
        self._ttl = ttl
        self._backend = backend

    @property
    def name(self) -> str:
        return self._name

    async def set(self, code: str) -> None:
        """Store a code for the subject."""
        await self._backend.override(self._key, code, self._ttl)

    async def generate(self, length: int = 6) -> str:
        """Generate, store and return a random numeric code.

        Args:
            length: Number of digits.

        Returns:
            The new code.

        Raises:
            ValueError: If length is less than 1.
        """
        code = random_digits(length)
        await self.set(code)
        logger.debug("Generated %d-digit code for %r", length, self._name)
        return code

    async def clear(self) -> None:
        await self._backend.forget(self._key)

    async def get(self) -> str:
        """Return the stored code, or an empty string when there is none."""
        caster = await self._backend.cast(self._key)
        if caster.is_nil:
            return ""
        return caster.to_str()

    async def exists(self) -> bool:
        return await self._backend.exists(self._key)

    async def ttl(self) -> timedelta:
        return await self._backend.ttl(self._key)

    async def verify(self, code: str) -> bool:
        """Check a submitted code and consume it on a match.

        The stored code is taken with the backend's atomic ``pull``, so
        of several concurrent calls with the right code exactly one
        succeeds. A wrong code puts the stored one back with its
        remaining TTL. Until it is back, a concurrent call sees no code
        and fails even when its code is right, and a code set in that
        gap is overwritten by the restored one.

        Args:
            code: The code submitted by the subject.

        Returns:
            True if it matched the stored code (which is then cleared),
            False if there is no code or it differs.
        """
        remaining = await self._backend.ttl(self._key)
        caster = Caster(await self._backend.pull(self._key))
        if caster.is_nil:
            return False

        stored = caster.to_str()
        if stored and hmac.compare_digest(stored.encode(), code.encode()):
            return True

        # the code was written after the TTL was read
        if remaining <= timedelta(0):
            remaining = self._ttl
        await self._backend.put(
            self._key,
            stored,
            None if remaining == INFINITE_TTL else remaining,
        )
        return False
