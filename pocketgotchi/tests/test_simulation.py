import random
import dataclasses

import pytest

from pocketgotchi import simulation
from pocketgotchi.constants import DECAY, TICK_MS, MAX_AWAY_TICKS
from pocketgotchi.simulation import TickEvent, step, catch_up, ticks_for


def test_bathroom_roll_fires_below_threshold(pet, rng_factory):
    rng = rng_factory([0.0])
    events = step(pet, rng)
    assert events == [TickEvent.NEEDS_BATHROOM]
    assert pet.needs_bathroom


def test_sickness_needs_poor_hygiene_or_health(pet, rng_factory):
    # healthy and clean: the sickness roll is never drawn
    rng = rng_factory([0.5, 0.0])
    step(pet, rng)
    assert not pet.is_sick
    assert rng.values == [0.0]

    pet.hygiene = 25.0
    rng = rng_factory([0.5, 0.0])
    events = step(pet, rng)
    assert events == [TickEvent.GOT_SICK]
    assert pet.is_sick


def test_no_bathroom_roll_when_already_needed(pet, rng_factory):
    pet.needs_bathroom = True
    rng = rng_factory([0.0])
    assert step(pet, rng) == []
    assert rng.values == [0.0]


def test_random_events_skipped_while_asleep(pet, rng_factory):
    pet.is_sleeping = True
    pet.energy = 50.0
    pet.hygiene = 10.0
    rng = rng_factory([0.0, 0.0])
    assert step(pet, rng) == []
    assert not pet.needs_bathroom and not pet.is_sick
    assert len(rng.values) == 2


def test_sleeping_pet_wakes_when_rested(pet, quiet_rng):
    pet.is_sleeping = True
    pet.energy = 94.0
    assert step(pet, quiet_rng) == [TickEvent.WOKE_UP]
    assert not pet.is_sleeping


def test_death_is_terminal(pet, quiet_rng):
    pet.health = 0.3
    pet.is_sick = True
    events = step(pet, quiet_rng)
    assert TickEvent.DIED in events
    assert not pet.is_alive
    assert pet.health == 0.0

    frozen = pet.to_dict()
    for _ in range(10):
        assert step(pet, quiet_rng) == []
    assert pet.to_dict() == frozen


def test_ticks_for_floors_and_caps():
    assert ticks_for(-5000) == 0
    assert ticks_for(TICK_MS - 1) == 0
    assert ticks_for(TICK_MS * 3 + 29999) == 3
    assert ticks_for(TICK_MS * 5000) == MAX_AWAY_TICKS


def test_catch_up_replays_at_most_a_day(pet, quiet_rng, monkeypatch):
    calls = []
    monkeypatch.setattr(simulation, "step", lambda p, rng: calls.append(1) or [])
    result = catch_up(pet, TICK_MS * 10000, quiet_rng)
    assert result.ticks == MAX_AWAY_TICKS
    assert len(calls) == MAX_AWAY_TICKS
    assert result.hours == 24


def test_catch_up_matches_live_ticks(pet):
    # low hygiene so sickness rolls are in play
    start = dataclasses.replace(pet, hygiene=32.0)
    live = dataclasses.replace(start)
    away = dataclasses.replace(start)

    live_rng = random.Random(99)
    for _ in range(120):
        step(live, live_rng)
    result = catch_up(away, 120 * TICK_MS, random.Random(99))

    assert result.ticks == 120
    assert away == live


def test_catch_up_stops_at_death(pet, quiet_rng):
    pet.health = 0.5
    pet.is_sick = True
    result = catch_up(pet, 100 * TICK_MS, quiet_rng)
    assert result.died
    assert result.ticks == 2
    assert not pet.is_alive
    # decay stopped with the pet: only two ticks of hunger
    assert pet.hunger == pytest.approx(69.4)


def test_catch_up_reevaluates_sleep_each_tick(pet, quiet_rng):
    pet.is_sleeping = True
    pet.energy = 92.0
    catch_up(pet, 3 * TICK_MS, quiet_rng)
    assert not pet.is_sleeping
    # two sleep ticks, then one awake tick
    assert pet.energy == pytest.approx(94.85)
    assert pet.hunger == pytest.approx(69.4)


def test_catch_up_on_dead_pet_is_noop(pet, quiet_rng):
    pet.is_alive = False
    pet.health = 0.0
    before = pet.to_dict()
    result = catch_up(pet, 500 * TICK_MS, quiet_rng)
    assert result.ticks == 0
    assert pet.to_dict() == before


def test_long_absence_decays_exactly_a_day(pet, monkeypatch):
    # slow enough decay that the pet outlives a full day alone
    monkeypatch.setitem(DECAY, "hunger", 0.02)
    monkeypatch.setitem(DECAY, "hygiene", 0.02)
    monkeypatch.setattr(simulation, "BATHROOM_CHANCE", 0.0)
    pet.hunger = 100.0
    pet.hygiene = 100.0
    away = dataclasses.replace(pet)
    live = dataclasses.replace(pet)

    live_rng = random.Random(7)
    for _ in range(MAX_AWAY_TICKS):
        step(live, live_rng)
    result = catch_up(away, 5000 * TICK_MS, random.Random(7))

    assert result.ticks == MAX_AWAY_TICKS
    assert not result.died
    assert away.is_alive
    assert away == live
    assert away.hunger == pytest.approx(100.0 - 0.02 * MAX_AWAY_TICKS)
    # one more live tick would have gone past the cap
    step(live, live_rng)
    assert live.hunger < away.hunger
