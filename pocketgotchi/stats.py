"""Per-tick stat formulas shared by live ticking and offline catch-up."""
from pocketgotchi.constants import (
    STAT_MIN, STAT_MAX, DECAY,
    STARVING_BELOW, STARVING_HEALTH_PENALTY,
    FILTHY_BELOW, FILTHY_HEALTH_PENALTY,
    EXHAUSTED_BELOW, EXHAUSTED_HAPPINESS_PENALTY,
    SICK_HEALTH_PENALTY, BATHROOM_HYGIENE_PENALTY,
    SLEEP_ENERGY_GAIN, SLEEP_HUNGER_DECAY, SLEEP_HYGIENE_DECAY,
    SLEEP_HAPPINESS_DECAY, SLEEP_SICK_HEALTH_PENALTY, WAKE_AT_ENERGY,
)


def clamp(value, lo=STAT_MIN, hi=STAT_MAX):
    return max(lo, min(hi, value))


def adjust(pet, stat, delta):
    """Add delta to one stat and clamp the result."""
    setattr(pet, stat, clamp(getattr(pet, stat) + delta))


def apply_decay(pet, n=1):
    """Awake decay for n ticks, followed by the secondary effects.

    Primary decay is applied and clamped first; the secondary effects then look
    at the post-decay values, each one clamped on its own.
    """
    for stat, rate in DECAY.items():
        adjust(pet, stat, -rate * n)

    if pet.hunger < STARVING_BELOW:
        adjust(pet, "health", -STARVING_HEALTH_PENALTY * n)
    if pet.hygiene < FILTHY_BELOW:
        adjust(pet, "health", -FILTHY_HEALTH_PENALTY * n)
    if pet.energy < EXHAUSTED_BELOW:
        adjust(pet, "happiness", -EXHAUSTED_HAPPINESS_PENALTY * n)
    if pet.is_sick:
        adjust(pet, "health", -SICK_HEALTH_PENALTY * n)
    if pet.needs_bathroom:
        adjust(pet, "hygiene", -BATHROOM_HYGIENE_PENALTY * n)


def apply_sleep(pet) -> bool:
    """One tick of sleep. Returns True once the pet is rested enough to wake."""
    adjust(pet, "energy", SLEEP_ENERGY_GAIN)
    # slower decay while sleeping
    adjust(pet, "hunger", -SLEEP_HUNGER_DECAY)
    adjust(pet, "hygiene", -SLEEP_HYGIENE_DECAY)
    adjust(pet, "happiness", -SLEEP_HAPPINESS_DECAY)
    if pet.is_sick:
        adjust(pet, "health", -SLEEP_SICK_HEALTH_PENALTY)
    return pet.energy >= WAKE_AT_ENERGY
