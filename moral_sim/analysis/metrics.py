"""
Metrics collection for simulation analysis.

Collects and aggregates per-story and community-wide statistics
about how people reacted over their lives.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, TYPE_CHECKING
from datetime import datetime
from collections import defaultdict
import json
import uuid

from ..agents.reactions import EventType, LifeEvent, Outcome, event_label

if TYPE_CHECKING:
    from ..agents.person import Person
    from ..simulation.story import Story


@dataclass
class StoryMetrics:
    """Statistics for one person's story."""
    person_id: str
    name: str
    event_count: int
    positive_count: int
    negative_count: int
    initial_score: int
    final_score: int
    mean_intensity: float
    events_by_type: Dict[str, int] = field(default_factory=dict)

    @property
    def net_change(self) -> int:
        return self.final_score - self.initial_score

    @property
    def positive_ratio(self) -> float:
        return self.positive_count / self.event_count if self.event_count else 0.0

    @classmethod
    def from_story(cls, story: "Story") -> "StoryMetrics":
        events = story.events
        by_type: Dict[str, int] = {t.value: 0 for t in EventType}
        for e in events:
            label = event_label(e.event_type)
            by_type[label] = by_type.get(label, 0) + 1

        positive = sum(1 for e in events if e.outcome == Outcome.POSITIVE)
        return cls(
            person_id=story.person.id,
            name=story.person.name,
            event_count=len(events),
            positive_count=positive,
            negative_count=len(events) - positive,
            initial_score=story.initial_score,
            final_score=story.final_score,
            mean_intensity=_avg([e.intensity for e in events]),
            events_by_type=by_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "person_id": self.person_id,
            "name": self.name,
            "event_count": self.event_count,
            "positive_count": self.positive_count,
            "negative_count": self.negative_count,
            "positive_ratio": self.positive_ratio,
            "initial_score": self.initial_score,
            "final_score": self.final_score,
            "net_change": self.net_change,
            "mean_intensity": self.mean_intensity,
            "events_by_type": dict(self.events_by_type),
        }


@dataclass
class CommunityMetrics:
    """Aggregated metrics for a simulation run."""
    simulation_id: str
    start_time: datetime
    end_time: Optional[datetime]

    population: int
    total_events: int
    positive_events: int
    negative_events: int

    mean_score: float
    min_score: int
    max_score: int

    events_by_type: Dict[str, int] = field(default_factory=dict)
    stories: List[StoryMetrics] = field(default_factory=list)

    @property
    def positive_ratio(self) -> float:
        return self.positive_events / self.total_events if self.total_events else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "simulation_id": self.simulation_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "population": self.population,
            "total_events": self.total_events,
            "positive_events": self.positive_events,
            "negative_events": self.negative_events,
            "positive_ratio": self.positive_ratio,
            "mean_score": self.mean_score,
            "min_score": self.min_score,
            "max_score": self.max_score,
            "events_by_type": dict(self.events_by_type),
            "stories": [s.to_dict() for s in self.stories],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


class MetricsCollector:
    """
    Collects metrics while stories are generated.

    Register ``record_event`` as an event callback on a Story or a
    CommunitySimulation, then call ``finalize`` with the finished stories.
    """

    def __init__(self, simulation_id: Optional[str] = None):
        self.simulation_id = simulation_id or str(uuid.uuid4())[:8]
        self.start_time = datetime.now()
        self.end_time: Optional[datetime] = None

        self._event_count = 0
        self._outcome_counts: Dict[Outcome, int] = defaultdict(int)
        self._type_counts: Dict[str, int] = defaultdict(int)
        self._person_events: Dict[str, int] = defaultdict(int)

    def record_event(self, person: "Person", event: LifeEvent) -> None:
        """Record a single life event."""
        self._event_count += 1
        self._outcome_counts[event.outcome] += 1
        self._type_counts[event_label(event.event_type)] += 1
        self._person_events[person.id] += 1

    @property
    def event_count(self) -> int:
        return self._event_count

    def get_person_activity(self, person_id: str) -> int:
        """Number of events recorded for a person."""
        return self._person_events.get(person_id, 0)

    def finalize(self, stories: List["Story"]) -> CommunityMetrics:
        """Finalize metrics collection and return aggregated metrics."""
        self.end_time = datetime.now()
        scores = [s.final_score for s in stories]

        return CommunityMetrics(
            simulation_id=self.simulation_id,
            start_time=self.start_time,
            end_time=self.end_time,
            population=len(stories),
            total_events=self._event_count,
            positive_events=self._outcome_counts[Outcome.POSITIVE],
            negative_events=self._outcome_counts[Outcome.NEGATIVE],
            mean_score=_avg(scores),
            min_score=min(scores) if scores else 0,
            max_score=max(scores) if scores else 0,
            events_by_type=self._events_by_type(),
            stories=[StoryMetrics.from_story(s) for s in stories],
        )

    def _events_by_type(self) -> Dict[str, int]:
        counts = {t.value: self._type_counts.get(t.value, 0) for t in EventType}
        for label, count in self._type_counts.items():
            counts.setdefault(label, count)
        return counts

    def __repr__(self) -> str:
        return f"MetricsCollector(id={self.simulation_id}, events={self._event_count})"


def _avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0
