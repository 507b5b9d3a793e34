import logging
from enum import Enum, auto
from dataclasses import dataclass

from pocketgotchi.constants import (
    TICK_MS, MAX_AWAY_TICKS,
    BATHROOM_CHANCE, SICK_CHANCE, SICK_HYGIENE_BELOW, SICK_HEALTH_BELOW,
)
from pocketgotchi.models import PetPhase
from pocketgotchi.stats import apply_decay, apply_sleep

logger = logging.getLogger(__name__)


class TickEvent(Enum):
    WOKE_UP = auto()
    NEEDS_BATHROOM = auto()
    GOT_SICK = auto()
    DIED = auto()


@dataclass
class CatchUpResult:
    ticks: int = 0
    died: bool = False

    @property
    def hours(self) -> int:
        return (self.ticks * (TICK_MS // 1000)) // 3600


def random_events(pet, rng):
    """Bathroom and sickness rolls for one awake tick.

    A roll is only drawn when its guard passes, so a seeded rng yields the same
    sequence whether ticks run live or during catch-up.
    """
    events = []
    if not pet.needs_bathroom and rng.random() < BATHROOM_CHANCE:
        pet.needs_bathroom = True
        events.append(TickEvent.NEEDS_BATHROOM)
    if not pet.is_sick and (pet.hygiene < SICK_HYGIENE_BELOW or pet.health < SICK_HEALTH_BELOW):
        if rng.random() < SICK_CHANCE:
            pet.is_sick = True
            events.append(TickEvent.GOT_SICK)
    return events


def check_death(pet) -> bool:
    if pet.is_alive and pet.health <= 0:
        pet.health = 0.0
        pet.is_alive = False
        return True
    return False


def step(pet, rng):
    """Advance the creature by exactly one tick. Returns the events it produced."""
    phase = pet.phase
    if phase == PetPhase.DEAD:
        return []

    events = []
    if phase == PetPhase.ASLEEP:
        if apply_sleep(pet):
            pet.is_sleeping = False
            events.append(TickEvent.WOKE_UP)
    else:
        apply_decay(pet)
        events.extend(random_events(pet, rng))

    if check_death(pet):
        events.append(TickEvent.DIED)
    return events


def ticks_for(elapsed_ms) -> int:
    """Whole ticks in elapsed_ms, capped at 24 simulated hours."""
    if elapsed_ms <= 0:
        return 0
    return min(int(elapsed_ms // TICK_MS), MAX_AWAY_TICKS)


def catch_up(pet, elapsed_ms, rng) -> CatchUpResult:
    """Replay the ticks that would have fired during elapsed_ms.

    Uses the same step as live play. Stops at the first tick that kills the pet.
    Does not touch last_updated; the caller owns the clock.
    """
    if not pet.is_alive:
        return CatchUpResult()

    result = CatchUpResult()
    for _ in range(ticks_for(elapsed_ms)):
        events = step(pet, rng)
        result.ticks += 1
        if TickEvent.DIED in events:
            result.died = True
            break
    logger.debug("Catch-up replayed %d ticks (died=%s)", result.ticks, result.died)
    return result
