import math
import time
from enum import Enum, auto
from dataclasses import dataclass, field

from pocketgotchi.constants import (
    AVATAR_SYMBOLS, NEW_PET_STATS, STAT_NAMES,
    DISPLAY_LERP_FACTOR, DISPLAY_SNAP,
)
from pocketgotchi.errors import InvalidSaveError
from pocketgotchi.stats import clamp


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class PetPhase(Enum):
    """States of the simulation clock, derived from the creature's flags."""
    AWAKE = auto()
    ASLEEP = auto()
    DEAD = auto()


# Serialized field name -> attribute name. Keys match the browser edition's
# save files so a .tama exported there loads here and vice versa.
_FIELD_MAP = {
    "name": "name",
    "emoji": "avatar",
    "hunger": "hunger",
    "happiness": "happiness",
    "energy": "energy",
    "health": "health",
    "hygiene": "hygiene",
    "intelligence": "intelligence",
    "isSick": "is_sick",
    "needsBathroom": "needs_bathroom",
    "isSleeping": "is_sleeping",
    "isAlive": "is_alive",
    "createdAt": "created_at",
    "lastUpdated": "last_updated",
}


@dataclass
class CreatureState:
    """The one live creature. Stats are floats kept in [0, 100]."""
    name: str
    avatar: str
    created_at: int = 0
    last_updated: int = 0
    hunger: float = NEW_PET_STATS["hunger"]
    happiness: float = NEW_PET_STATS["happiness"]
    energy: float = NEW_PET_STATS["energy"]
    health: float = NEW_PET_STATS["health"]
    hygiene: float = NEW_PET_STATS["hygiene"]
    intelligence: float = NEW_PET_STATS["intelligence"]
    is_sick: bool = False
    needs_bathroom: bool = False
    is_sleeping: bool = False
    is_alive: bool = True

    @classmethod
    def new(cls, name, avatar, created_at=None):
        name = (name or "").strip()
        if not name:
            raise ValueError("pet name must not be empty")
        if avatar not in AVATAR_SYMBOLS:
            raise ValueError(f"unknown avatar {avatar!r}")
        t = now_ms() if created_at is None else int(created_at)
        return cls(name=name, avatar=avatar, created_at=t, last_updated=t)

    @property
    def phase(self) -> PetPhase:
        if not self.is_alive:
            return PetPhase.DEAD
        if self.is_sleeping:
            return PetPhase.ASLEEP
        return PetPhase.AWAKE

    def stats(self) -> dict:
        return {s: getattr(self, s) for s in STAT_NAMES}

    def touch(self, t: int):
        """Advance last_updated; it never moves backwards."""
        self.last_updated = max(self.last_updated, int(t))

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for key, attr in _FIELD_MAP.items()}

    @classmethod
    def from_dict(cls, data):
        """Build a creature from a decoded save payload.

        Requires a non-empty name and a known avatar. Missing stats fall back to
        new-creature values and everything is clamped, so a hand-edited file can't
        smuggle out-of-range values in.
        """
        if not isinstance(data, dict):
            raise InvalidSaveError("save payload is not an object")
        name = data.get("name")
        avatar = data.get("emoji")
        if not isinstance(name, str) or not name.strip():
            raise InvalidSaveError("save payload has no name")
        if avatar not in AVATAR_SYMBOLS:
            raise InvalidSaveError("save payload has no valid emoji")

        def get_num(key, default):
            v = data.get(key, default)
            if isinstance(v, bool):
                raise InvalidSaveError(f"field {key!r} is not a number")
            try:
                v = float(v)
            except (TypeError, ValueError, OverflowError):
                raise InvalidSaveError(f"field {key!r} is not a number") from None
            if not math.isfinite(v):
                raise InvalidSaveError(f"field {key!r} is not a finite number")
            return v

        t = now_ms()
        pet = cls(name=name.strip(), avatar=avatar)
        for s in STAT_NAMES:
            setattr(pet, s, clamp(get_num(s, NEW_PET_STATS[s])))
        pet.is_sick = bool(data.get("isSick", False))
        pet.needs_bathroom = bool(data.get("needsBathroom", False))
        pet.is_sleeping = bool(data.get("isSleeping", False))
        pet.is_alive = bool(data.get("isAlive", True))
        pet.created_at = int(get_num("createdAt", t))
        pet.last_updated = int(get_num("lastUpdated", t))
        if not pet.is_alive:
            pet.health = 0.0
        return pet


@dataclass
class DisplayState:
    """Smoothed copy of the stats for the bars on screen. Never authoritative."""
    values: dict = field(default_factory=dict)

    @classmethod
    def from_pet(cls, pet):
        if pet is None:
            return cls({s: 50.0 for s in STAT_NAMES})
        return cls(pet.stats())

    def lerp_toward(self, pet):
        if pet is None:
            return
        for s in STAT_NAMES:
            target = getattr(pet, s)
            cur = self.values.get(s, target)
            diff = target - cur
            if abs(diff) < DISPLAY_SNAP:
                self.values[s] = target
            else:
                self.values[s] = cur + diff * DISPLAY_LERP_FACTOR
