"""
People and their moral standing.

A person carries a moral score (0-100) and a belief type. Each life event
they meet nudges the score up or down depending on how they react, and
they can spawn children whose starting score drifts from their own.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum
import logging
import random
import uuid

from .reactions import (
    EventType,
    LifeEvent,
    Outcome,
    NEGATIVE_DELTA_RANGE,
    POSITIVE_DELTA_RANGE,
    clamp,
    coerce_event_type,
    describe_event,
    event_label,
)
from ..analysis.spectrum import moral_score_to_color

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100
DEFAULT_SCORE = 50

# Bounds on how far a child's starting score drifts from the parent's
CHILD_DRIFT_RANGE = (-30, 30)


class BeliefType(Enum):
    """Rough types of people."""
    BELIEVER = "BELIEVER"
    WRONGDOER = "WRONGDOER"
    MIXED = "MIXED"  # in-between cases


def belief_for_score(moral_score: int) -> BeliefType:
    """Classify a starting score into a belief type."""
    if moral_score > 70:
        return BeliefType.BELIEVER
    if moral_score < 30:
        return BeliefType.WRONGDOER
    return BeliefType.MIXED


def behaviour_for_score(moral_score: int) -> str:
    """Coarse behaviour label for a starting score."""
    return "mostly_good" if moral_score >= 50 else "mostly_bad"


def positive_chance_modifier(belief_type: BeliefType, event_type: EventType) -> float:
    """
    Additive adjustment to the base chance of a positive reaction.

    Events outside EventType get the belief adjustment only.
    """
    modifier = 0.0
    if belief_type == BeliefType.BELIEVER:
        modifier += 0.2  # more likely to be patient and grateful
    elif belief_type == BeliefType.WRONGDOER:
        modifier -= 0.2  # more likely to be oppressive

    if event_type == EventType.TEMPTATION:
        modifier -= 0.1
    elif event_type == EventType.PROSPERITY:
        # wealth corrupts the wrongdoer
        modifier += -0.1 if belief_type == BeliefType.WRONGDOER else 0.05

    return modifier


def positive_chance(moral_score: int, belief_type: BeliefType, event_type: EventType) -> float:
    """
    Probability that a person reacts positively to an event.

    The moral score gives the base chance (score / 100), shifted by
    belief type and event type, then clamped into [0, 1].
    """
    base = moral_score / 100
    return clamp(base + positive_chance_modifier(belief_type, event_type), 0.0, 1.0)


@dataclass(frozen=True)
class PersonSnapshot:
    """Read-only view of a person at one moment."""
    id: str
    name: str
    belief_type: BeliefType
    behaviour: str
    moral_score: int
    color: str
    parent_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "belief_type": self.belief_type.value,
            "behaviour": self.behaviour,
            "moral_score": self.moral_score,
            "color": self.color,
            "parent_name": self.parent_name,
        }


class Person:
    """
    A simulated individual with a moral score and a belief type.

    The person only holds current state. The life history is kept by the
    Story that drives them; ``react`` returns the record and leaves it to
    the caller to store it.

    Randomness comes from an injected ``random.Random`` so that runs can
    be replayed from a seed.
    """

    def __init__(
        self,
        name: str,
        id: Optional[str] = None,
        belief_type: BeliefType = BeliefType.MIXED,
        behaviour: str = "neutral",
        moral_score: int = DEFAULT_SCORE,
        notes: str = "",
        parent_id: Optional[str] = None,
        parent_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self.id = id or str(uuid.uuid4())
        self.name = name
        self._belief_type = BeliefType(belief_type)
        self.behaviour = behaviour
        self._moral_score = int(clamp(moral_score, MIN_SCORE, MAX_SCORE))
        self.notes = notes
        # Lineage is display-only: the parent object is never held
        self.parent_id = parent_id
        self.parent_name = parent_name
        self._rng = rng or random.Random()

    @property
    def belief_type(self) -> BeliefType:
        return self._belief_type

    @property
    def moral_score(self) -> int:
        return self._moral_score

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def color(self) -> str:
        """Colour of this person on the moral spectrum."""
        return moral_score_to_color(self._moral_score)

    def react(self, event_type: EventType, year: int) -> LifeEvent:
        """
        React to a life event and update the moral score.

        The outcome is drawn against ``positive_chance``. A positive
        reaction raises the score by 0-3, a negative one lowers it by 0-4.

        Args:
            event_type: The event being met. String values are coerced;
                anything outside EventType gets no event adjustment and
                the generic description.
            year: Year of the person's story this happens in (>= 1).

        Returns:
            The LifeEvent describing the reaction.

        Raises:
            ValueError: If year is below 1. Nothing is drawn or changed.
        """
        if year < 1:
            raise ValueError(f"year must be >= 1, got {year}")

        event_type = coerce_event_type(event_type)
        chance = positive_chance(self._moral_score, self._belief_type, event_type)
        outcome = Outcome.POSITIVE if self._rng.random() < chance else Outcome.NEGATIVE

        if outcome == Outcome.POSITIVE:
            delta = self._rng.randint(*POSITIVE_DELTA_RANGE)
        else:
            delta = self._rng.randint(*NEGATIVE_DELTA_RANGE)

        self._moral_score = int(clamp(self._moral_score + delta, MIN_SCORE, MAX_SCORE))

        event = LifeEvent(
            event_type=event_type,
            outcome=outcome,
            description=describe_event(event_type, outcome, self.name),
            year=year,
            intensity=max(1, abs(delta)),
            moral_score=self._moral_score,
            person_id=self.id,
        )
        logger.debug(
            "%s reacted to %s in year %d: %s (chance=%.2f, delta=%+d, score=%d)",
            self.name, event_label(event_type), year, outcome.value, chance, delta, self._moral_score,
        )
        return event

    def spawn_child(self, **overrides: Any) -> "Person":
        """
        Create a child whose starting score drifts from this person's.

        The child's score is this person's score plus a random drift in
        [-30, 30]. Belief type and behaviour label follow from that score.
        Any constructor keyword passed in ``overrides`` replaces the
        computed value.
        """
        drift = self._rng.randint(*CHILD_DRIFT_RANGE)
        child_score = int(clamp(self._moral_score + drift, MIN_SCORE, MAX_SCORE))

        fields: Dict[str, Any] = {
            "id": f"{self.id}-child-{uuid.uuid4().hex[:8]}",
            "name": f"{self.name}'s child",
            "belief_type": belief_for_score(child_score),
            "behaviour": behaviour_for_score(child_score),
            "moral_score": child_score,
            "parent_id": self.id,
            "parent_name": self.name,
            "rng": self._rng,
        }
        fields.update(overrides)

        child = type(self)(**fields)
        logger.debug(
            "%s spawned %s (drift=%+d, score=%d, belief=%s)",
            self.name, child.name, drift, child.moral_score, child.belief_type.value,
        )
        return child

    def describe(self) -> PersonSnapshot:
        """Summarize the person's current state."""
        return PersonSnapshot(
            id=self.id,
            name=self.name,
            belief_type=self._belief_type,
            behaviour=self.behaviour,
            moral_score=self._moral_score,
            color=self.color,
            parent_name=self.parent_name,
        )

    def __repr__(self) -> str:
        return f"Person(name={self.name}, score={self._moral_score}, belief={self._belief_type.value})"
