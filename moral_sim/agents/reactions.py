"""
Life events, reaction outcomes and their narrative text.

A person meets an event (prosperity, poverty, temptation or a test),
reacts positively or negatively, and the reaction is written down as a
short narrative line.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple
from enum import Enum


class EventType(Enum):
    """Kinds of life events."""
    PROSPERITY = "PROSPERITY"
    POVERTY = "POVERTY"
    TEMPTATION = "TEMPTATION"
    TEST = "TEST"  # generic hardship


class Outcome(Enum):
    """How a person reacted to an event."""
    POSITIVE = "POSITIVE"  # patience, gratitude, charity
    NEGATIVE = "NEGATIVE"  # oppression, injustice, arrogance


NARRATIVE_TEMPLATES: Dict[Tuple[EventType, Outcome], str] = {
    (EventType.PROSPERITY, Outcome.POSITIVE):
        "{name} received wealth and success, and responded with gratitude and generosity.",
    (EventType.PROSPERITY, Outcome.NEGATIVE):
        "{name} received wealth and success, but became arrogant and hurtful.",
    (EventType.POVERTY, Outcome.POSITIVE):
        "{name} faced poverty with patience and trust.",
    (EventType.POVERTY, Outcome.NEGATIVE):
        "{name} faced poverty with anger and oppression toward others.",
    (EventType.TEMPTATION, Outcome.POSITIVE):
        "{name} was tempted by forbidden pleasures but resisted.",
    (EventType.TEMPTATION, Outcome.NEGATIVE):
        "{name} fell into forbidden pleasures and normalized them.",
    (EventType.TEST, Outcome.POSITIVE):
        "{name} went through a hard trial and grew closer to God and people.",
    (EventType.TEST, Outcome.NEGATIVE):
        "{name} went through a hard trial and responded with injustice and resentment.",
}

FALLBACK_TEMPLATE = "{name} experienced an undefined event."

# Score deltas per outcome, inclusive bounds
POSITIVE_DELTA_RANGE = (0, 3)
NEGATIVE_DELTA_RANGE = (-4, 0)


def clamp(value, low, high):
    """Force value into [low, high]."""
    return max(low, min(high, value))


def coerce_event_type(event_type: Any) -> Any:
    """Turn a known event value into an EventType; leave anything else as is."""
    if isinstance(event_type, EventType):
        return event_type
    try:
        return EventType(event_type)
    except ValueError:
        return event_type


def event_label(event_type: Any) -> str:
    """Printable name of an event, known or not."""
    return event_type.value if isinstance(event_type, EventType) else str(event_type)


def describe_event(event_type: Any, outcome: Outcome, name: str) -> str:
    """Render the narrative line for an event and its outcome.

    Args:
        event_type: The event that happened. Anything outside the template
            table gets the generic description.
        outcome: How the person reacted.
        name: Display name substituted into the template.

    Returns:
        The narrative sentence.
    """
    template = NARRATIVE_TEMPLATES.get((event_type, outcome), FALLBACK_TEMPLATE)
    return template.format(name=name)


@dataclass(frozen=True)
class LifeEvent:
    """
    One reaction in a person's life.

    Records what happened, how the person reacted, the narrative line,
    the year it happened in and how strongly it moved the moral score.
    """
    event_type: Any  # EventType, or the raw value of an unrecognized event
    outcome: Outcome
    description: str
    year: int
    intensity: int = 1
    moral_score: int = 50  # score right after the reaction
    person_id: str = ""

    def __post_init__(self):
        if self.year < 1:
            raise ValueError(f"year must be >= 1, got {self.year}")
        if self.intensity < 1:
            raise ValueError(f"intensity must be >= 1, got {self.intensity}")

    @property
    def is_positive(self) -> bool:
        return self.outcome == Outcome.POSITIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": event_label(self.event_type),
            "outcome": self.outcome.value,
            "description": self.description,
            "year": self.year,
            "intensity": self.intensity,
            "moral_score": self.moral_score,
            "person_id": self.person_id,
        }
