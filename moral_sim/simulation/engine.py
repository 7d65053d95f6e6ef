"""
Community simulation loop.

Runs a life story for every person in a community, sharing one seeded
random source so a run can be replayed exactly.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from enum import Enum
import logging
import random

from ..agents.person import BeliefType, Person
from ..agents.reactions import LifeEvent
from ..analysis.spectrum import SpectrumStop, build_community_spectrum, community_gradient_css
from .story import Story

logger = logging.getLogger(__name__)


class SimulationPhase(Enum):
    """Phases of a simulation run."""
    SETUP = "setup"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    years: int = 15
    default_moral_score: int = 50

    # Random seed for reproducibility
    seed: Optional[int] = None


@dataclass
class SimulationState:
    """Current state of a simulation."""
    phase: SimulationPhase = SimulationPhase.SETUP
    runs: int = 0
    stories_completed: int = 0
    total_events: int = 0


class CommunitySimulation:
    """
    Simulates the lives of a community of people.

    Each run:
    1. Gives every person a Story (created on first run)
    2. Generates ``config.years`` more years for each story
    3. Fires event and story callbacks along the way
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self._rng = random.Random(self.config.seed)

        self._people: Dict[str, Person] = {}
        self._stories: Dict[str, Story] = {}
        self._state = SimulationState()

        self._on_event: List[Callable[[Person, LifeEvent], None]] = []
        self._on_story: List[Callable[[Story], None]] = []

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def people(self) -> List[Person]:
        """People in the order they were added."""
        return list(self._people.values())

    @property
    def stories(self) -> List[Story]:
        return list(self._stories.values())

    def create_person(
        self,
        name: str,
        belief_type: BeliefType = BeliefType.MIXED,
        moral_score: Optional[int] = None,
        **kwargs: Any,
    ) -> Person:
        """Create a person using the simulation's random source and add them."""
        if moral_score is None:
            moral_score = self.config.default_moral_score
        person = Person(
            name=name,
            belief_type=belief_type,
            moral_score=moral_score,
            rng=self._rng,
            **kwargs,
        )
        return self.add_person(person)

    def add_person(self, person: Person) -> Person:
        """Add an existing person to the community."""
        if person.id in self._people:
            raise ValueError(f"Person with id {person.id!r} already added")
        self._people[person.id] = person
        return person

    def spawn_child(self, parent: Person, **overrides: Any) -> Person:
        """Spawn a child of ``parent`` and add them to the community."""
        overrides.setdefault("rng", self._rng)
        return self.add_person(parent.spawn_child(**overrides))

    def get_person(self, person_id: str) -> Optional[Person]:
        return self._people.get(person_id)

    def get_story(self, person_id: str) -> Optional[Story]:
        return self._stories.get(person_id)

    def on_event(self, callback: Callable[[Person, LifeEvent], None]) -> None:
        """Register a callback for every recorded life event."""
        self._on_event.append(callback)

    def on_story(self, callback: Callable[[Story], None]) -> None:
        """Register a callback for each story finishing a run."""
        self._on_story.append(callback)

    def run(self) -> SimulationState:
        """
        Generate ``config.years`` years for every person.

        Returns the final simulation state.
        """
        self._state.phase = SimulationPhase.RUNNING

        for person in self._people.values():
            story = self._stories.get(person.id)
            if story is None:
                story = self._new_story(person)

            before = len(story)
            story.generate(self.config.years)
            self._state.total_events += len(story) - before
            self._state.stories_completed += 1

            for callback in self._on_story:
                callback(story)

        self._state.runs += 1
        self._state.phase = SimulationPhase.COMPLETED
        logger.info(
            "Simulation run %d finished: %d people, %d events",
            self._state.runs, len(self._people), self._state.total_events,
        )
        return self._state

    def _new_story(self, person: Person) -> Story:
        story = Story(person, rng=self._rng)
        for callback in self._on_event:
            story.on_event(callback)
        self._stories[person.id] = story
        return story

    def spectrum(self) -> List[SpectrumStop]:
        """Community spectrum of everyone's current moral score."""
        return build_community_spectrum(p.describe() for p in self._people.values())

    def gradient_css(self) -> str:
        return community_gradient_css(p.describe() for p in self._people.values())

    def export_state(self) -> Dict[str, Any]:
        """Export the current state for reporting."""
        return {
            "phase": self._state.phase.value,
            "runs": self._state.runs,
            "stories_completed": self._state.stories_completed,
            "total_events": self._state.total_events,
            "person_count": len(self._people),
            "years_per_run": self.config.years,
            "seed": self.config.seed,
        }

    def __repr__(self) -> str:
        return f"CommunitySimulation(people={len(self._people)}, phase={self._state.phase.value})"
