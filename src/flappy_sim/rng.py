"""Injectable random sources for obstacle gap placement.

The simulation never touches global random state. A RandomSource exposes one
operation, ``next_float()`` in [0, 1), and is handed to the GameStateMachine
at construction so tests can pin the exact spawned geometry.
"""

from typing import Iterable, List, Optional, Protocol, Tuple

import numpy as np

from .config import FlappyConfig


class RandomSource(Protocol):
    """Anything that yields floats uniformly in [0, 1)."""

    def next_float(self) -> float:
        ...


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator.

    Args:
        seed: Seed for a fresh PCG64 generator. Ignored when ``rng`` is given.
        rng: Existing generator to draw from (e.g. a Gymnasium env's np_random).
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def next_float(self) -> float:
        return float(self.rng.random())


class SequenceRandomSource:
    """Replays a fixed sequence of floats, cycling when exhausted."""

    def __init__(self, values: Iterable[float]):
        self._values: List[float] = [float(v) for v in values]
        if not self._values:
            raise ValueError("SequenceRandomSource needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"Value {v} outside [0, 1)")
        self._index = 0

    def next_float(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


class RandomGapSource:
    """Draws a bounded gap position for a new obstacle."""

    def __init__(self, source: RandomSource):
        self.source = source

    def next_gap(self, config: FlappyConfig) -> Tuple[float, float]:
        """Return (gap_top_height, gap_bottom_height).

        gap_top_height is uniform in [min_gap_top, max_gap_top]; the bottom
        region takes whatever the gap and top leave of the playable height.
        """
        low = config.min_gap_top
        high = config.max_gap_top
        top = low + self.source.next_float() * (high - low)
        bottom = config.playable_height - config.gap_size - top
        return top, bottom
