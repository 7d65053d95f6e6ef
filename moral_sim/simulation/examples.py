"""Example community: good and bad parents, and children who go the other way."""

from typing import Optional

from ..agents.person import BeliefType
from .engine import CommunitySimulation, SimulationConfig


def build_example_community(config: Optional[SimulationConfig] = None) -> CommunitySimulation:
    """
    Build the four-person example community, not yet run.

    Aisha (believer) and Karim (wrongdoer) are the parents. Yusuf is a
    good child of Karim and Lina a bad child of Aisha.
    """
    sim = CommunitySimulation(config)

    good_parent = sim.create_person(
        id="good-parent-1",
        name="Aisha",
        belief_type=BeliefType.BELIEVER,
        behaviour="grateful",
        moral_score=90,
        notes="Good fruit from good tree candidate",
    )
    bad_parent = sim.create_person(
        id="bad-parent-1",
        name="Karim",
        belief_type=BeliefType.WRONGDOER,
        behaviour="oppressive",
        moral_score=15,
        notes="Bad fruit from bad tree candidate",
    )

    sim.spawn_child(
        bad_parent,
        name="Yusuf",
        moral_score=85,
        belief_type=BeliefType.BELIEVER,
    )
    sim.spawn_child(
        good_parent,
        name="Lina",
        moral_score=20,
        belief_type=BeliefType.WRONGDOER,
    )

    return sim
