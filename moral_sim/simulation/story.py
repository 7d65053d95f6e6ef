"""
Life stories: a person's timeline of yearly events.

A Story owns one person's history. Each simulated year it picks an event
at random, has the person react, and appends the resulting LifeEvent.
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import random

from ..agents.person import Person
from ..agents.reactions import EventType, LifeEvent, event_label

logger = logging.getLogger(__name__)

EventCallback = Callable[[Person, LifeEvent], None]


class Story:
    """
    Timeline of one person's life events.

    The story is the only place the person's history is stored, so every
    reaction that should be remembered goes through ``generate`` or
    ``record``.
    """

    def __init__(self, person: Person, rng: Optional[random.Random] = None):
        self.person = person
        self._rng = rng or person.rng
        self._events: List[LifeEvent] = []
        self._initial_score = person.moral_score
        self._on_event: List[EventCallback] = []

    @property
    def events(self) -> List[LifeEvent]:
        """Recorded events in chronological order."""
        return list(self._events)

    @property
    def initial_score(self) -> int:
        return self._initial_score

    @property
    def final_score(self) -> int:
        return self.person.moral_score

    @property
    def last_year(self) -> int:
        return self._events[-1].year if self._events else 0

    def on_event(self, callback: EventCallback) -> None:
        """Register a callback fired after each recorded event."""
        self._on_event.append(callback)

    def record(self, event_type: EventType, year: Optional[int] = None) -> LifeEvent:
        """Have the person react to one event and append it to the story."""
        if year is None:
            year = self.last_year + 1
        event = self.person.react(event_type, year)
        self._events.append(event)

        for callback in self._on_event:
            callback(self.person, event)

        return event

    def generate(self, years: int = 20) -> "Story":
        """
        Generate a sequence of random events, one per year.

        Years are numbered from 1 on a fresh story and continue after the
        last recorded year otherwise.

        Returns:
            The story itself, for chaining.
        """
        if years < 0:
            raise ValueError(f"years must be non-negative, got {years}")

        event_types = list(EventType)
        start = self.last_year + 1
        for year in range(start, start + years):
            self.record(self._rng.choice(event_types), year)

        logger.info(
            "Generated %d years for %s: score %d -> %d",
            years, self.person.name, self._initial_score, self.person.moral_score,
        )
        return self

    def summarize(self) -> List[str]:
        """One line of text per event, in order."""
        return [
            f"[Year {e.year}] ({event_label(e.event_type)} / {e.outcome.value}) {e.description}"
            for e in self._events
        ]

    def score_trajectory(self) -> List[int]:
        """Moral score at the start and after each event."""
        return [self._initial_score] + [e.moral_score for e in self._events]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "person": self.person.describe().to_dict(),
            "initial_score": self._initial_score,
            "final_score": self.final_score,
            "events": [e.to_dict() for e in self._events],
        }

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"Story(person={self.person.name}, events={len(self._events)})"
