"""Simulation module - Life stories and the community loop."""

from .story import Story
from .engine import CommunitySimulation, SimulationConfig, SimulationState
from .examples import build_example_community

__all__ = [
    "Story",
    "CommunitySimulation",
    "SimulationConfig",
    "SimulationState",
    "build_example_community",
]
