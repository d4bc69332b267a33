"""Random code generation."""

import secrets
import string

# Shared across calls; seeded once from the OS entropy pool
_random = secrets.SystemRandom()


def random_digits(length: int) -> str:
    """Generate a string of uniformly distributed decimal digits.

    Args:
        length: Number of digits, at least 1.

    Returns:
        The generated digits.

    Raises:
        ValueError: If length is less than 1.
    """
    if length < 1:
        raise ValueError("length must be >= 1")
    return "".join(_random.choice(string.digits) for _ in range(length))
