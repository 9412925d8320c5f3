"""
Race Formation Orchestrator - forms a race and resolves its outcome.

Matching, winner selection, id allocation and insertion all run inside one
store transaction, so a race is either fully formed and stored or not stored
at all, and concurrent formations never share an id.
"""

from typing import Optional

from .matcher import CompatibilityMatcher
from .models import Race
from .simulator import OutcomeSimulator
from .store import EntityStore


class RaceFormationOrchestrator:
    """Composes the matcher and the simulator into race creation."""

    def __init__(
        self,
        store: EntityStore,
        matcher: Optional[CompatibilityMatcher] = None,
        simulator: Optional[OutcomeSimulator] = None
    ):
        self.store = store
        self.matcher = matcher or CompatibilityMatcher()
        self.simulator = simulator or OutcomeSimulator()

    def form_race(self, label: str) -> Race:
        """
        Form a race for the `label` car type and pick its winner.

        Args:
            label: Car type the race is formed for

        Returns:
            The stored race, with its assigned id and winner

        Raises:
            InsufficientDrivers: If fewer than two compatible drivers exist.
                This is an InvalidInput failure; nothing is stored.
        """
        with self.store.transaction() as store:
            driver_ids = self.matcher.select(label, store.list_drivers())
            winner = self.simulator.pick_winner(driver_ids, store)

            race = Race(
                label=label,
                driver_ids=driver_ids,
                winner=winner,
                id=store.next_race_id(),
            )
            store.insert_race(race)

        return race
