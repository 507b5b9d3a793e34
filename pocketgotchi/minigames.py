"""The two minigames as frame-driven step functions.

Neither session knows about pygame or the pet: the caller feeds elapsed
milliseconds into `step()` and player input into `catch()` / `move()`, and
applies `bonus` to the pet when the session reports it is over.
"""
from enum import Enum, auto
from dataclasses import dataclass

from pocketgotchi.constants import (
    FRAME_MS,
    CATCH_ROUNDS, CATCH_ZONE, CATCH_BASE_SPEED, CATCH_SPEED_PER_ROUND,
    CATCH_SPEED_JITTER, CATCH_RESULT_PAUSE_MS, CATCH_HAPPINESS_PER_CATCH,
    DODGE_LANES, DODGE_START_LANE, DODGE_START_SPEED, DODGE_SPEED_STEP,
    DODGE_SPAWN_FRAMES, DODGE_SPAWN_FRAMES_STEP, DODGE_SPAWN_FRAMES_MIN,
    DODGE_MAX_DT_MS, DODGE_SPAWN_Y, DODGE_HIT_BAND, DODGE_EXIT_Y,
    DODGE_HAPPINESS_PER_POINT, DODGE_HAPPINESS_CAP,
)
from pocketgotchi.stats import clamp


class CatchEvent(Enum):
    ROUND_STARTED = auto()
    CAUGHT = auto()
    MISSED = auto()
    FINISHED = auto()


class DodgeEvent(Enum):
    DODGED = auto()
    HIT = auto()


class CatchSession:
    """Frisbee catch: five rounds, press once while the disc is in the zone."""
    kind = "catch"

    def __init__(self, rng):
        self.rng = rng
        self.total = CATCH_ROUNDS
        self.round = 0
        self.score = 0
        self.position = 0.0
        self.speed = 0.0
        self.running = False
        self.can_catch = False
        self.finished = False
        self.last_result = None
        self._frame_elapsed = 0.0
        self._pause = 0.0
        self.next_round()

    @property
    def bonus(self):
        return self.score * CATCH_HAPPINESS_PER_CATCH

    def in_zone(self):
        lo, hi = CATCH_ZONE
        return lo <= self.position <= hi

    def next_round(self):
        if self.round >= self.total:
            self.running = False
            self.can_catch = False
            self.finished = True
            return CatchEvent.FINISHED
        self.round += 1
        self.position = 0.0
        self.speed = CATCH_BASE_SPEED + self.round * CATCH_SPEED_PER_ROUND + self.rng.random() * CATCH_SPEED_JITTER
        self.running = True
        self.can_catch = True
        self.last_result = None
        self._frame_elapsed = 0.0
        return CatchEvent.ROUND_STARTED

    def _resolve(self, success):
        self.running = False
        self.can_catch = False
        self.last_result = success
        if success:
            self.score += 1
        self._pause = CATCH_RESULT_PAUSE_MS
        return CatchEvent.CAUGHT if success else CatchEvent.MISSED

    def catch(self):
        """The player's one attempt for this round. None if no attempt is allowed."""
        if not self.running or not self.can_catch:
            return None
        return self._resolve(self.in_zone())

    def step(self, dt_ms):
        if self.finished:
            return None
        if self.running:
            # throttled to ~60 advances per second
            self._frame_elapsed += dt_ms
            if self._frame_elapsed > FRAME_MS:
                self._frame_elapsed = 0.0
                self.position += self.speed
                if self.position > CATCH_ZONE[1]:
                    return self._resolve(False)
            return None
        if self._pause > 0:
            self._pause -= dt_ms
            if self._pause <= 0:
                return self.next_round()
        return None


@dataclass(eq=False)
class Obstacle:
    lane: int
    y: float = DODGE_SPAWN_Y


class DodgeSession:
    """Three-lane dodge ball. Runs until the first hit."""
    kind = "dodge"

    def __init__(self, rng):
        self.rng = rng
        self.lane = DODGE_START_LANE
        self.score = 0
        self.obstacles = []
        self.speed = DODGE_START_SPEED
        self.spawn_timer = 0.0
        self.spawn_interval = DODGE_SPAWN_FRAMES
        self.running = True

    @property
    def finished(self):
        return not self.running

    @property
    def bonus(self):
        return min(self.score * DODGE_HAPPINESS_PER_POINT, DODGE_HAPPINESS_CAP)

    @property
    def spawn_interval_ms(self):
        return self.spawn_interval * (1000 / 60)

    def move(self, direction):
        if not self.running:
            return
        self.lane = int(clamp(self.lane + direction, 0, DODGE_LANES - 1))

    def spawn(self):
        lane = int(self.rng.random() * DODGE_LANES)
        self.obstacles.append(Obstacle(lane))
        # ramp difficulty
        self.speed += DODGE_SPEED_STEP
        self.spawn_interval = max(DODGE_SPAWN_FRAMES_MIN, self.spawn_interval - DODGE_SPAWN_FRAMES_STEP)

    def collides(self, obstacle):
        lo, hi = DODGE_HIT_BAND
        return obstacle.lane == self.lane and lo <= obstacle.y <= hi

    def step(self, dt_ms):
        if not self.running:
            return None
        dt_ms = min(dt_ms, DODGE_MAX_DT_MS)

        self.spawn_timer += dt_ms
        if self.spawn_timer > self.spawn_interval_ms:
            self.spawn_timer = 0.0
            self.spawn()

        event = None
        for obstacle in reversed(self.obstacles[:]):
            obstacle.y += self.speed * (dt_ms / FRAME_MS)
            if self.collides(obstacle):
                self.running = False
                return DodgeEvent.HIT
            if obstacle.y > DODGE_EXIT_Y:
                self.obstacles.remove(obstacle)
                self.score += 1
                event = DodgeEvent.DODGED
        return event
