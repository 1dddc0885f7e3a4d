"""Park-Miller minimal standard pseudo-random generator."""

from __future__ import annotations

from typing import Iterator

_MODULUS = 0x7FFFFFFF


def do_rand(ctx: int) -> int:
    """Next value after state ``ctx``; the result is also the new state.

    Values lie in ``[0, 0x7ffffffd]``.
    """
    # Schrage's method: 2**31 - 1 == 127773 * 16807 + 2836.
    x = (ctx % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A generator carrying its state between calls."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed

    def next(self) -> int:
        """Advance and return the next value."""
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()