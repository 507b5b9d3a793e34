import random
import logging

from pocketgotchi import actions
from pocketgotchi.constants import SAVE_KEY, AWAY_SUMMARY_TICKS, CATCH_ENERGY_COST, DODGE_ENERGY_COST
from pocketgotchi.errors import InvalidSaveError, PreconditionNotMet
from pocketgotchi.minigames import CatchSession, DodgeSession, CatchEvent, DodgeEvent
from pocketgotchi.models import CreatureState, now_ms
from pocketgotchi.notifications import MessageQueue
from pocketgotchi.persistence import MemoryStore, encode_pet, decode_pet, export_file, import_file
from pocketgotchi.simulation import TickEvent, CatchUpResult, step, catch_up, check_death
from pocketgotchi.stats import adjust

logger = logging.getLogger(__name__)


def format_age(created_at, now):
    mins = max(0, int(now - created_at)) // 60000
    if mins < 60:
        return f"{mins}m old"
    hrs = mins // 60
    if hrs < 24:
        return f"{hrs}h {mins % 60}m old"
    return f"{hrs // 24}d {hrs % 24}h old"


def thought(pet):
    """The most urgent need, as a short word for the thought bubble."""
    if pet is None:
        return None
    if pet.is_sleeping:
        return "zzz"
    if pet.hunger < 25:
        return "hungry"
    if pet.happiness < 25:
        return "sad"
    if pet.energy < 20:
        return "sleepy"
    if pet.needs_bathroom:
        return "bathroom"
    if pet.is_sick:
        return "medicine"
    if pet.hygiene < 25:
        return "dirty"
    return None


def status_flags(pet):
    flags = []
    if pet is None:
        return flags
    if pet.is_sick:
        flags.append("sick")
    if pet.needs_bathroom:
        flags.append("bathroom")
    if pet.is_sleeping:
        flags.append("sleeping")
    if pet.hunger < 20:
        flags.append("starving")
    return flags


class Game:
    """Owns the live creature, the active minigame and the message queue.

    Every mutation goes through here and is persisted before returning, so the
    store always reflects the latest state.
    """
    def __init__(self, store=None, rng=None, clock=None, save_key=SAVE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock or now_ms
        self.save_key = save_key
        self.pet = None
        self.minigame = None
        self.messages = MessageQueue()

    # --- lifecycle ---

    def load(self):
        """Restore the saved pet, if any, and catch it up to now.

        Anything that fails to decode counts as no save at all.
        """
        raw = self.store.load(self.save_key)
        if raw is None:
            return None
        try:
            pet = decode_pet(raw)
        except InvalidSaveError as e:
            logger.warning("Ignoring unreadable save '%s': %s", self.save_key, e)
            return None
        self.pet = pet
        self.catch_up()
        return self.pet

    def create_pet(self, name, avatar):
        self.close_minigame()
        self.pet = CreatureState.new(name, avatar, self.clock())
        logger.info("Created %s (%s)", self.pet.name, self.pet.avatar)
        self.save()
        self.messages.push(f"Welcome, {self.pet.name}!")
        return self.pet

    def reset(self):
        """Forget the current pet, alive or not."""
        self.close_minigame()
        self.pet = None
        self.store.delete(self.save_key)

    def save(self):
        if self.pet is None:
            return
        self.pet.touch(self.clock())
        self.store.save(self.save_key, encode_pet(self.pet))

    def can_act(self):
        return self.pet is not None and self.pet.is_alive and not self.pet.is_sleeping

    def death_text(self):
        if self.pet is None:
            return ""
        age = format_age(self.pet.created_at, self.clock())
        return f"{self.pet.name} lived for {age}. Rest in peace."

    def _on_death(self):
        logger.info("%s died", self.pet.name)
        self.messages.push(f"{self.pet.name} has passed away...")

    # --- time ---

    def tick(self):
        """One live 30 s tick."""
        if self.pet is None or not self.pet.is_alive:
            return []
        events = step(self.pet, self.rng)
        name = self.pet.name
        for event in events:
            if event == TickEvent.WOKE_UP:
                self.messages.push(f"{name} woke up refreshed!")
            elif event == TickEvent.NEEDS_BATHROOM:
                self.messages.push(f"{name} needs the bathroom!")
            elif event == TickEvent.GOT_SICK:
                self.messages.push(f"{name} got sick!")
            elif event == TickEvent.DIED:
                self._on_death()
        self.save()
        return events

    def catch_up(self):
        """Replay the ticks missed since last_updated. Silent apart from a summary."""
        if self.pet is None or not self.pet.is_alive:
            return CatchUpResult()
        now = self.clock()
        result = catch_up(self.pet, now - self.pet.last_updated, self.rng)
        self.pet.touch(now)
        if result.ticks:
            logger.info("Caught up %d ticks for %s", result.ticks, self.pet.name)
        if result.died:
            self._on_death()
        elif result.ticks > AWAY_SUMMARY_TICKS and result.hours > 0:
            self.messages.push(f"You were away for ~{result.hours}h. {self.pet.name} missed you!")
        self.save()
        return result

    # --- actions ---

    def _act(self, action, *args):
        try:
            message = action(self.pet, *args)
        except PreconditionNotMet as e:
            self.messages.push(e.message)
            return False
        self.messages.push(message)
        # food can cost health, so an action may be the killing blow
        if check_death(self.pet):
            self._on_death()
        self.save()
        return True

    def feed(self, index):
        return self._act(actions.feed, index)

    def study(self):
        return self._act(actions.study)

    def heal(self):
        return self._act(actions.heal)

    def bathe(self):
        return self._act(actions.bathe)

    def toggle_sleep(self):
        return self._act(actions.toggle_sleep)

    # --- save files ---

    def export_save(self, path):
        if self.pet is None:
            raise PreconditionNotMet("Nothing to save yet.")
        self.pet.touch(self.clock())
        export_file(self.pet, path)
        self.messages.push("File saved!")

    def import_save(self, path):
        """Replace the current pet with one from a file.

        Raises InvalidSaveError and leaves the current pet alone if the file is bad.
        """
        pet = import_file(path)
        self.close_minigame()
        self.pet = pet
        self.catch_up()
        self.save()
        self.messages.push("Save loaded!")
        return self.pet

    # --- minigames ---

    def _start(self, session_cls):
        if self.minigame is not None:
            raise PreconditionNotMet("A game is already running!")
        if not self.can_act():
            raise PreconditionNotMet()
        self.minigame = session_cls(self.rng)
        return self.minigame

    def start_catch(self):
        return self._start(CatchSession)

    def start_dodge(self):
        return self._start(DodgeSession)

    def close_minigame(self):
        """Drop the session. An unfinished session gives no reward."""
        self.minigame = None

    def step_minigame(self, dt_ms):
        session = self.minigame
        if session is None:
            return None
        event = session.step(dt_ms)
        if event in (CatchEvent.FINISHED, DodgeEvent.HIT):
            self._finish_minigame(session)
        return event

    def catch(self):
        session = self.minigame
        if not isinstance(session, CatchSession):
            return None
        return session.catch()

    def dodge_move(self, direction):
        session = self.minigame
        if isinstance(session, DodgeSession):
            session.move(direction)

    def _finish_minigame(self, session):
        if isinstance(session, CatchSession):
            text = f"Done! {session.score}/{session.total} caught. +{session.bonus} happiness!"
            energy_cost = CATCH_ENERGY_COST
        else:
            text = f"Game over! Score: {session.score}. +{session.bonus} happiness!"
            energy_cost = DODGE_ENERGY_COST
        logger.info("%s game finished: score=%d bonus=%d", session.kind, session.score, session.bonus)
        self.messages.push(text)
        if self.pet is None or not self.pet.is_alive:
            return
        adjust(self.pet, "happiness", session.bonus)
        adjust(self.pet, "energy", -energy_cost)
        if check_death(self.pet):
            self._on_death()
        self.save()
