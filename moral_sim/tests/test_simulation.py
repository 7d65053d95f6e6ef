"""Tests for story and simulation modules."""

import random
import re

import pytest

from moral_sim.agents.person import BeliefType, Person
from moral_sim.agents.reactions import EventType, Outcome
from moral_sim.simulation.story import Story
from moral_sim.simulation.engine import (
    CommunitySimulation,
    SimulationConfig,
    SimulationPhase,
)
from moral_sim.simulation.examples import build_example_community

SUMMARY_LINE = re.compile(
    r"^\[Year (\d+)\] \((PROSPERITY|POVERTY|TEMPTATION|TEST) / (POSITIVE|NEGATIVE)\) .+$"
)


class TestStory:
    """Tests for Story class."""

    @pytest.fixture
    def story(self, seeded_rng):
        return Story(Person("Ann", rng=seeded_rng))

    def test_generate_fifteen_years(self, story):
        story.generate(15)

        assert len(story) == 15
        assert [e.year for e in story.events] == list(range(1, 16))

    def test_generate_returns_story(self, story):
        assert story.generate(3) is story

    def test_generate_zero_years(self, story):
        story.generate(0)
        assert len(story) == 0
        assert story.summarize() == []

    def test_negative_years_rejected(self, story):
        with pytest.raises(ValueError):
            story.generate(-1)

    def test_generate_continues_years(self, story):
        story.generate(3).generate(2)
        assert [e.year for e in story.events] == [1, 2, 3, 4, 5]

    def test_summarize_format(self, story):
        story.generate(15)
        lines = story.summarize()

        assert len(lines) == 15
        for year, line in enumerate(lines, start=1):
            match = SUMMARY_LINE.match(line)
            assert match is not None, line
            assert int(match.group(1)) == year

    def test_summarize_exact_line(self, scripted):
        rng = scripted(draws=[0.0], ints=[2], choices=[EventType.TEST])
        story = Story(Person("Ann", rng=rng)).generate(1)

        assert story.summarize() == [
            "[Year 1] (TEST / POSITIVE) Ann went through a hard trial and grew closer to God and people."
        ]

    def test_summarize_unknown_event(self, scripted):
        rng = scripted(draws=[0.99], ints=[0])
        story = Story(Person("Ann", rng=rng))
        story.record("FLOOD")

        assert story.summarize() == [
            "[Year 1] (FLOOD / NEGATIVE) Ann experienced an undefined event."
        ]

    def test_rejected_year_not_recorded(self, story):
        with pytest.raises(ValueError):
            story.record(EventType.TEST, year=0)
        assert len(story) == 0
        assert story.final_score == story.initial_score

    def test_summarize_is_repeatable(self, story):
        story.generate(10)
        assert story.summarize() == story.summarize()

    def test_events_is_a_copy(self, story):
        story.generate(2)
        story.events.clear()
        assert len(story) == 2

    def test_record_uses_next_year(self, story):
        story.generate(4)
        event = story.record(EventType.POVERTY)

        assert event.year == 5
        assert story.events[-1] is event

    def test_record_explicit_year(self, story):
        event = story.record(EventType.TEST, year=40)
        assert event.year == 40
        assert story.last_year == 40

    def test_story_is_only_history(self, story):
        story.generate(5)
        assert not hasattr(story.person, "events")

    def test_scores_follow_events(self, scripted):
        rng = scripted(
            draws=[0.0, 0.99],
            ints=[3, -4],
            choices=[EventType.TEST, EventType.POVERTY],
        )
        story = Story(Person("Ann", moral_score=50, rng=rng)).generate(2)

        assert [e.outcome for e in story.events] == [Outcome.POSITIVE, Outcome.NEGATIVE]
        assert story.score_trajectory() == [50, 53, 49]
        assert story.initial_score == 50
        assert story.final_score == 49

    def test_event_callbacks(self, story):
        seen = []
        story.on_event(lambda person, event: seen.append((person.name, event.year)))
        story.generate(3)

        assert seen == [("Ann", 1), ("Ann", 2), ("Ann", 3)]

    def test_separate_random_source_for_events(self, scripted):
        person = Person("Ann", rng=random.Random(3))
        story = Story(person, rng=scripted(choices=[EventType.PROSPERITY] * 4))
        story.generate(4)

        assert all(e.event_type == EventType.PROSPERITY for e in story.events)

    def test_to_dict(self, story):
        story.generate(2)
        data = story.to_dict()

        assert data["person"]["name"] == "Ann"
        assert len(data["events"]) == 2
        assert data["final_score"] == story.final_score


class TestCommunitySimulation:
    """Tests for CommunitySimulation class."""

    @pytest.fixture
    def sim(self):
        return CommunitySimulation(SimulationConfig(years=10, seed=42))

    def test_create_person_uses_default_score(self, sim):
        person = sim.create_person("Ann")
        assert person.moral_score == 50
        assert person.rng is sim.rng

    def test_add_duplicate_rejected(self, sim):
        person = sim.create_person("Ann", id="same")
        with pytest.raises(ValueError):
            sim.add_person(person)

    def test_spawn_child_added(self, sim):
        parent = sim.create_person("Ann")
        child = sim.spawn_child(parent, name="Ben")

        assert sim.people == [parent, child]
        assert child.parent_name == "Ann"

    def test_run(self, sim):
        for name in ("Ann", "Ben", "Cy"):
            sim.create_person(name)
        state = sim.run()

        assert state.phase == SimulationPhase.COMPLETED
        assert state.total_events == 30
        assert state.stories_completed == 3
        assert all(len(story) == 10 for story in sim.stories)

    def test_second_run_continues_stories(self, sim):
        person = sim.create_person("Ann")
        sim.run()
        sim.run()

        story = sim.get_story(person.id)
        assert [e.year for e in story.events] == list(range(1, 21))
        assert sim.state.runs == 2
        assert sim.state.total_events == 20

    def test_callbacks(self, sim):
        sim.create_person("Ann")
        sim.create_person("Ben")
        events, stories = [], []
        sim.on_event(lambda person, event: events.append(event))
        sim.on_story(stories.append)
        sim.run()

        assert len(events) == 20
        assert [s.person.name for s in stories] == ["Ann", "Ben"]

    def test_seeded_runs_are_reproducible(self):
        def run(seed):
            sim = build_example_community(SimulationConfig(years=15, seed=seed))
            sim.run()
            return [story.summarize() for story in sim.stories]

        assert run(7) == run(7)

    def test_spectrum_sorted(self, sim):
        for score in (80, 20, 50):
            sim.create_person(f"P{score}", moral_score=score)
        scores = [stop.person.moral_score for stop in sim.spectrum()]
        assert scores == sorted(scores)
        assert sim.gradient_css().startswith("linear-gradient(90deg, ")

    def test_export_state(self, sim):
        sim.create_person("Ann")
        sim.run()
        state = sim.export_state()

        assert state["phase"] == "completed"
        assert state["person_count"] == 1
        assert state["total_events"] == 10
        assert state["seed"] == 42


class TestExampleCommunity:
    """Tests for the example community wiring."""

    @pytest.fixture
    def sim(self):
        return build_example_community(SimulationConfig(years=15, seed=1))

    def test_people(self, sim):
        aisha, karim, yusuf, lina = sim.people

        assert (aisha.name, aisha.belief_type, aisha.moral_score) == ("Aisha", BeliefType.BELIEVER, 90)
        assert (karim.name, karim.belief_type, karim.moral_score) == ("Karim", BeliefType.WRONGDOER, 15)
        assert (yusuf.name, yusuf.belief_type, yusuf.moral_score) == ("Yusuf", BeliefType.BELIEVER, 85)
        assert (lina.name, lina.belief_type, lina.moral_score) == ("Lina", BeliefType.WRONGDOER, 20)

    def test_lineage(self, sim):
        _, _, yusuf, lina = sim.people
        assert yusuf.parent_name == "Karim"
        assert lina.parent_name == "Aisha"
        assert yusuf.parent_id == "bad-parent-1"

    def test_not_run_on_build(self, sim):
        assert sim.stories == []
        assert sim.state.phase == SimulationPhase.SETUP

    def test_fifteen_year_stories(self, sim):
        sim.run()
        for story in sim.stories:
            assert [e.year for e in story.events] == list(range(1, 16))
