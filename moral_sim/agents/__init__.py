"""Agents module - People, belief types and life-event reactions."""

from .person import BeliefType, Person, PersonSnapshot
from .reactions import EventType, Outcome, LifeEvent

__all__ = [
    "BeliefType",
    "Person",
    "PersonSnapshot",
    "EventType",
    "Outcome",
    "LifeEvent",
]
