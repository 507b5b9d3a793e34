"""Player actions. Each returns the message to show, or raises PreconditionNotMet
without touching the pet."""
from pocketgotchi.constants import (
    FOODS, STAT_NAMES,
    STUDY_MIN_ENERGY, STUDY_INTELLIGENCE_GAIN, STUDY_ENERGY_COST, STUDY_HAPPINESS_COST,
    HEAL_HEALTHY_ABOVE, HEAL_HEALTH_GAIN, BATH_HYGIENE_GAIN,
)
from pocketgotchi.errors import PreconditionNotMet
from pocketgotchi.stats import adjust


def _require_active(pet, allow_sleeping=False):
    if pet is None or not pet.is_alive:
        raise PreconditionNotMet()
    if pet.is_sleeping and not allow_sleeping:
        raise PreconditionNotMet()


def feed(pet, index):
    _require_active(pet)
    if not 0 <= index < len(FOODS):
        raise PreconditionNotMet()
    food = FOODS[index]
    for stat in STAT_NAMES:
        delta = food.get(stat, 0)
        if delta:
            adjust(pet, stat, delta)
    return f"{pet.name} ate {food['emoji']} {food['name']}!"


def study(pet):
    _require_active(pet)
    if pet.energy < STUDY_MIN_ENERGY:
        raise PreconditionNotMet(f"{pet.name} is too tired to study!")
    adjust(pet, "intelligence", STUDY_INTELLIGENCE_GAIN)
    adjust(pet, "energy", -STUDY_ENERGY_COST)
    adjust(pet, "happiness", -STUDY_HAPPINESS_COST)
    return f"{pet.name} studied hard! +Intelligence"


def heal(pet):
    _require_active(pet)
    if not pet.is_sick and pet.health > HEAL_HEALTHY_ABOVE:
        raise PreconditionNotMet(f"{pet.name} is already healthy!")
    pet.is_sick = False
    adjust(pet, "health", HEAL_HEALTH_GAIN)
    return f"Medicine given! {pet.name} feels better."


def bathe(pet):
    _require_active(pet)
    adjust(pet, "hygiene", BATH_HYGIENE_GAIN)
    if pet.needs_bathroom:
        pet.needs_bathroom = False
        return f"{pet.name} used the bathroom and took a bath!"
    return f"{pet.name} is squeaky clean!"


def toggle_sleep(pet):
    """Works while asleep too; only a dead pet can't be put to bed."""
    _require_active(pet, allow_sleeping=True)
    pet.is_sleeping = not pet.is_sleeping
    if pet.is_sleeping:
        return f"{pet.name} is sleeping..."
    return f"{pet.name} woke up!"
