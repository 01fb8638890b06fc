"""
Declining-price offering math.

All arithmetic is integer and bounded by UINT256_MAX, so results are
reproducible bit for bit.
"""

from offering import UINT256_MAX
from offering.errors import Overflow


def _require_uint(name: str, value: int):
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be unsigned, got {value}")
    if value > UINT256_MAX:
        raise Overflow(f"{name} exceeds uint256: {value}")


def checked_mul(a: int, b: int) -> int:
    """Multiply two uint256 values, raising Overflow instead of wrapping."""
    _require_uint("a", a)
    _require_uint("b", b)
    result = a * b
    if result > UINT256_MAX:
        raise Overflow(f"{a} * {b} overflows uint256")
    return result


def checked_add(a: int, b: int) -> int:
    _require_uint("a", a)
    _require_uint("b", b)
    result = a + b
    if result > UINT256_MAX:
        raise Overflow(f"{a} + {b} overflows uint256")
    return result


def checked_sub(a: int, b: int) -> int:
    _require_uint("a", a)
    _require_uint("b", b)
    if b > a:
        raise Overflow(f"{a} - {b} underflows")
    return a - b


def elapsed_since(listed_on: int, now: int) -> int:
    """Seconds since whitelisting; 0 when never listed or the clock lags."""
    if listed_on > 0 and now > listed_on:
        return now - listed_on
    return 0


def compute_current_price(start_price: int, duration: int, elapsed: int) -> int:
    """
    Linear decay from start_price at elapsed=0 down to 0 at elapsed=duration.

    price = start_price - floor(start_price * elapsed / duration)

    The elapsed >= duration check runs first, so duration=0 never divides.
    """
    _require_uint("start_price", start_price)
    _require_uint("duration", duration)
    _require_uint("elapsed", elapsed)

    if elapsed >= duration:
        return 0

    # Python ints are unbounded; elapsed < duration keeps the quotient below start_price.
    decrease = (start_price * elapsed) // duration
    return start_price - decrease
