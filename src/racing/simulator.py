"""
Outcome Simulator - picks the winner of a formed race.

The draw is uniform over the race's driver positions; no driver attribute
weights it. By default a fresh generator seeded from the wall clock is built
for every race. Passing a seed reuses one generator so a sequence of races is
reproducible.
"""

import time
from typing import Optional, Sequence

import numpy as np

from .store import EntityStore


class OutcomeSimulator:
    """Uniform random winner selection."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the simulator.

        Args:
            seed: Random seed for reproducible draws. Reseeds from the
                current time on every call if not provided.
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed) if seed is not None else None

    def _generator(self) -> np.random.Generator:
        if self._rng is not None:
            return self._rng
        return np.random.default_rng(time.time_ns())

    def pick_index(self, count: int) -> int:
        """Draw a uniform index in [0, count)."""
        return int(self._generator().integers(0, count))

    def pick_winner(self, driver_ids: Sequence[int], store: EntityStore) -> str:
        """
        Select the winner among `driver_ids` and return their name.

        `driver_ids` must be non-empty; the caller validates that.
        """
        winner_id = driver_ids[self.pick_index(len(driver_ids))]
        return store.get_driver(winner_id).name
