"""Typing cadence between replayed characters.

The replay engine calls ``pause()`` once after every character and newline
it inserts. RandomPausePolicy mimics a human typist: mostly short gaps with
an occasional longer hesitation. NoPause makes replay instantaneous.

Example:
    >>> import random
    >>> policy = RandomPausePolicy(rng=random.Random(7), sleep=lambda s: None)
    >>> 0 <= policy.delay() < 0.25
    True

"""

from __future__ import annotations

import random
import time
from collections.abc import Callable

LONG_PAUSE_PROBABILITY = 1 / 20
LONG_PAUSE_MAX = 0.25
SHORT_PAUSE_MAX = 0.13


class RandomPausePolicy:
    """Sleep for a random duration after each insertion.

    With probability ``long_probability`` the delay is drawn uniformly from
    ``[0, long_max)`` seconds, otherwise from ``[0, short_max)``.

    Args:
        long_probability: Chance of a long pause
        long_max: Upper bound of a long pause, in seconds
        short_max: Upper bound of a short pause, in seconds
        rng: Random source (a fresh ``random.Random`` if None)
        sleep: Blocking sleep function, replaceable for tests

    """

    __slots__ = ("long_probability", "long_max", "short_max", "_rng", "_sleep")

    def __init__(
        self,
        long_probability: float = LONG_PAUSE_PROBABILITY,
        long_max: float = LONG_PAUSE_MAX,
        short_max: float = SHORT_PAUSE_MAX,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not 0.0 <= long_probability <= 1.0:
            raise ValueError(f"long_probability must be in [0, 1], got {long_probability}")
        if long_max < 0 or short_max < 0:
            raise ValueError("pause bounds must be non-negative")
        self.long_probability = long_probability
        self.long_max = long_max
        self.short_max = short_max
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep

    def delay(self) -> float:
        """Sample the next pause duration in seconds."""
        rng = self._rng
        if rng.random() < self.long_probability:
            return rng.random() * self.long_max
        return rng.random() * self.short_max

    def pause(self) -> None:
        """Block for one sampled duration."""
        self._sleep(self.delay())


class NoPause:
    """Pause policy that never waits."""

    __slots__ = ()

    def delay(self) -> float:
        return 0.0

    def pause(self) -> None:
        pass
