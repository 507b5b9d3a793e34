#!/usr/bin/env python3
import sys
import logging
import pygame

from pocketgotchi.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS, DB_FILE, EXPORT_FILE, TIME_SCALE, LOG_LEVEL,
    TICK_MS, STAT_NAMES, AVATARS, FOODS, CATCH_ZONE, DODGE_LANES, DODGE_HIT_BAND,
    DISPLAY_LERP_MS, MESSAGE_INTERVAL_MS,
    COLOR_BG, COLOR_UI_BAR_BG, COLOR_TEXT, COLOR_SICK, COLOR_MESSAGE_BOX_BG,
    COLOR_BAR_OK, COLOR_BAR_MID, COLOR_BAR_LOW, COLOR_ZONE,
    BLACK, WHITE, RED, GRAY, DARK_GRAY, ORANGE, BLUE, YELLOW,
)
from pocketgotchi.errors import InvalidSaveError, PreconditionNotMet
from pocketgotchi.game import Game, format_age, thought, status_flags
from pocketgotchi.minigames import CatchSession, DodgeSession
from pocketgotchi.models import DisplayState
from pocketgotchi.persistence import DatabaseManager
from pocketgotchi.scheduler import Scheduler

logger = logging.getLogger(__name__)

AVATAR_LABELS = dict(AVATARS)
STAT_LABELS = {
    "hunger": "Hunger",
    "happiness": "Happy",
    "energy": "Energy",
    "health": "Health",
    "hygiene": "Hygiene",
    "intelligence": "Smarts",
}


class GameEngine:
    """pygame front end: draws the pet, routes keys to the Game, runs the timers."""
    def __init__(self, db_path=DB_FILE, game=None):
        pygame.init()
        try:
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SCALED | pygame.RESIZABLE)
        except pygame.error:
            # Some headless drivers do not support scaled/resizable; fall back
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Pocketgotchi")
        self.clock = pygame.time.Clock()
        self.fps = FPS
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 18)
        self.big_font = pygame.font.Font(None, 40)

        self.game = game if game is not None else Game(store=DatabaseManager(db_path))
        self.export_path = EXPORT_FILE
        self.scheduler = Scheduler()
        self.tick_job = self.scheduler.every(TICK_MS / TIME_SCALE, self.game.tick, name="tick")
        self.scheduler.every(DISPLAY_LERP_MS, self._lerp_display, name="display")
        self.message_job = self.scheduler.every(MESSAGE_INTERVAL_MS, self._next_message, name="messages")
        self.minigame_job = None

        # Creation screen state
        self.name_input = ""
        self.avatar_index = 0
        # None | "feed" | "confirm" | "death"
        self.overlay = None
        self.current_message = None

        self.game.load()
        self.display = DisplayState.from_pet(self.game.pet)
        if self.game.pet is None:
            self.screen_name = "create"
        else:
            self.screen_name = "game"
            if not self.game.pet.is_alive:
                self.overlay = "death"

    # --- timers ---

    def _lerp_display(self):
        self.display.lerp_toward(self.game.pet)

    def _next_message(self):
        self.current_message = self.game.messages.pop()

    def _minigame_frame(self, dt_ms):
        self.game.step_minigame(dt_ms)

    # --- navigation ---

    def show_create(self):
        self.close_minigame()
        self.screen_name = "create"
        self.overlay = None
        self.name_input = ""
        self.avatar_index = 0

    def show_game(self):
        self.screen_name = "game"
        self.overlay = None
        self.display = DisplayState.from_pet(self.game.pet)
        if self.game.pet is not None and not self.game.pet.is_alive:
            self.overlay = "death"

    def create_pet(self):
        name = self.name_input.strip()
        if not name:
            return
        self.game.create_pet(name, AVATARS[self.avatar_index][0])
        self.show_game()

    def import_save(self):
        try:
            self.game.import_save(self.export_path)
        except InvalidSaveError as e:
            logger.warning("Import failed: %s", e)
            self.game.messages.push("Invalid save file.")
            return
        self.show_game()

    def export_save(self):
        try:
            self.game.export_save(self.export_path)
        except OSError as e:
            logger.error("Export to %s failed: %s", self.export_path, e)
            self.game.messages.push("Could not write save file.")

    def start_minigame(self, kind):
        try:
            if kind == "catch":
                self.game.start_catch()
            else:
                self.game.start_dodge()
        except PreconditionNotMet as e:
            self.game.messages.push(e.message)
            return
        self.minigame_job = self.scheduler.every_frame(self._minigame_frame, name="minigame")

    def close_minigame(self):
        self.scheduler.cancel(self.minigame_job)
        self.minigame_job = None
        self.game.close_minigame()

    # --- input ---

    def handle_key(self, event):
        if self.screen_name == "create":
            self._key_create(event)
        elif self.game.minigame is not None:
            self._key_minigame(event)
        elif self.overlay == "feed":
            if pygame.K_1 <= event.key <= pygame.K_8:
                self.game.feed(event.key - pygame.K_1)
                self.overlay = None
            elif event.key == pygame.K_ESCAPE:
                self.overlay = None
        elif self.overlay == "confirm":
            if event.key == pygame.K_y:
                self.game.reset()
                self.show_create()
            elif event.key in (pygame.K_n, pygame.K_ESCAPE):
                self.overlay = None
        elif self.overlay == "death":
            if event.key == pygame.K_n:
                self.game.reset()
                self.show_create()
        else:
            self._key_game(event)

    def _key_create(self, event):
        if event.key == pygame.K_RETURN:
            self.create_pet()
        elif event.key == pygame.K_BACKSPACE:
            self.name_input = self.name_input[:-1]
        elif event.key == pygame.K_LEFT:
            self.avatar_index = (self.avatar_index - 1) % len(AVATARS)
        elif event.key == pygame.K_RIGHT:
            self.avatar_index = (self.avatar_index + 1) % len(AVATARS)
        elif event.key == pygame.K_F9:
            self.import_save()
        elif event.unicode and event.unicode.isprintable() and len(self.name_input) < 16:
            self.name_input += event.unicode

    def _key_game(self, event):
        key = event.key
        if key == pygame.K_f:
            if self.game.can_act():
                self.overlay = "feed"
        elif key == pygame.K_s:
            self.game.study()
        elif key == pygame.K_h:
            self.game.heal()
        elif key == pygame.K_b:
            self.game.bathe()
        elif key == pygame.K_z:
            self.game.toggle_sleep()
        elif key == pygame.K_c:
            self.start_minigame("catch")
        elif key == pygame.K_d:
            self.start_minigame("dodge")
        elif key == pygame.K_e:
            self.export_save()
        elif key == pygame.K_l:
            self.import_save()
        elif key == pygame.K_r:
            self.overlay = "confirm"

    def _key_minigame(self, event):
        session = self.game.minigame
        key = event.key
        if key == pygame.K_ESCAPE or (session.finished and key == pygame.K_RETURN):
            self.close_minigame()
        elif isinstance(session, CatchSession) and key in (pygame.K_SPACE, pygame.K_RETURN):
            self.game.catch()
        elif isinstance(session, DodgeSession):
            if key in (pygame.K_LEFT, pygame.K_a):
                self.game.dodge_move(-1)
            elif key in (pygame.K_RIGHT, pygame.K_d):
                self.game.dodge_move(1)

    # --- drawing ---

    def draw_bar(self, x, y, value, label):
        """Renders stat progress bars."""
        pygame.draw.rect(self.screen, COLOR_UI_BAR_BG, (x, y, 100, 12))
        width = max(0, min(100, int(value)))
        color = COLOR_BAR_LOW if value < 25 else COLOR_BAR_MID if value < 50 else COLOR_BAR_OK
        pygame.draw.rect(self.screen, color, (x, y, width, 12))
        lbl = self.small_font.render(label, True, COLOR_TEXT)
        self.screen.blit(lbl, (x, y - 14))

    def _text(self, text, pos, font=None, color=COLOR_TEXT, center=False):
        surf = (font or self.font).render(text, True, color)
        rect = surf.get_rect(center=pos) if center else surf.get_rect(topleft=pos)
        self.screen.blit(surf, rect)
        return rect

    def draw_create(self):
        cx = SCREEN_WIDTH // 2
        self._text("Hatch a new pet", (cx, 50), self.big_font, WHITE, center=True)
        self._text("Name: " + self.name_input + "_", (cx, 120), center=True)
        symbol, label = AVATARS[self.avatar_index]
        self._text(f"< {label} >", (cx, 170), self.big_font, YELLOW, center=True)
        self._text("Type a name, arrows pick a pet, Enter to hatch", (cx, 240), self.small_font, center=True)
        self._text("F9 loads " + self.export_path, (cx, 262), self.small_font, center=True)

    def draw_pet(self, pos):
        pet = self.game.pet
        body = COLOR_SICK if pet.is_sick else (171, 220, 255)
        if not pet.is_alive:
            body = DARK_GRAY
        pygame.draw.circle(self.screen, body, pos, 36)
        pygame.draw.circle(self.screen, BLACK, pos, 36, 2)
        self._text(AVATAR_LABELS.get(pet.avatar, "?"), (pos[0], pos[1]), self.small_font, BLACK, center=True)
        bubble = thought(pet)
        if bubble:
            surf = self.small_font.render(bubble, True, BLACK)
            rect = surf.get_rect(center=(pos[0] + 60, pos[1] - 40))
            pygame.draw.rect(self.screen, WHITE, rect.inflate(10, 6), border_radius=5)
            self.screen.blit(surf, rect)

    def draw_game(self):
        pet = self.game.pet
        if pet is None:
            return
        self._text(f"{pet.name} the {AVATAR_LABELS.get(pet.avatar, '?')}", (10, 8))
        age = self.small_font.render(format_age(pet.created_at, self.game.clock()), True, COLOR_TEXT)
        self.screen.blit(age, age.get_rect(topright=(SCREEN_WIDTH - 10, 12)))
        for i, stat in enumerate(STAT_NAMES):
            x = 20 + (i % 3) * 150
            y = 50 + (i // 3) * 34
            self.draw_bar(x, y, self.display.values.get(stat, 0.0), STAT_LABELS[stat])
        self.draw_pet((SCREEN_WIDTH // 2, 170))
        flags = status_flags(pet)
        if flags:
            self._text(" ".join(flags).upper(), (SCREEN_WIDTH // 2, 222), self.small_font, ORANGE, center=True)
        help_text = "Z wake" if pet.is_sleeping else "F feed S study H heal B bath Z sleep C catch D dodge"
        self._text(help_text, (SCREEN_WIDTH // 2, 242), self.small_font, center=True)
        self._text("E save L load R reset", (SCREEN_WIDTH // 2, 258), self.small_font, center=True)

    def draw_message(self):
        if not self.current_message:
            return
        box = pygame.Rect(10, SCREEN_HEIGHT - 40, SCREEN_WIDTH - 20, 30)
        pygame.draw.rect(self.screen, COLOR_MESSAGE_BOX_BG, box, border_radius=6)
        self._text(self.current_message, box.center, self.small_font, WHITE, center=True)

    def _panel(self):
        panel = pygame.Rect(40, 30, SCREEN_WIDTH - 80, SCREEN_HEIGHT - 80)
        pygame.draw.rect(self.screen, BLACK, panel, border_radius=8)
        pygame.draw.rect(self.screen, GRAY, panel, 2, border_radius=8)
        return panel

    def draw_overlay(self):
        if self.overlay is None:
            return
        panel = self._panel()
        if self.overlay == "feed":
            self._text("Feed (1-8, Esc to close)", (panel.centerx, panel.y + 18), center=True)
            for i, food in enumerate(FOODS):
                effects = "  ".join(f"{stat[:3]} {food[stat]:+d}" for stat in ("hunger", "health", "happiness", "energy") if food[stat])
                self._text(f"{i + 1}. {food['name']}  {effects}", (panel.x + 16, panel.y + 36 + i * 22), self.small_font)
        elif self.overlay == "confirm":
            self._text("Release your pet forever?", panel.center, center=True)
            self._text("Y yes / N no", (panel.centerx, panel.centery + 30), self.small_font, center=True)
        elif self.overlay == "death":
            self._text("R.I.P.", (panel.centerx, panel.centery - 30), self.big_font, RED, center=True)
            self._text(self.game.death_text(), panel.center, self.small_font, WHITE, center=True)
            self._text("N for a new pet", (panel.centerx, panel.centery + 30), self.small_font, center=True)

    def draw_catch(self, session, panel):
        track = pygame.Rect(panel.x + 20, panel.centery - 10, panel.width - 40, 20)
        pygame.draw.rect(self.screen, COLOR_UI_BAR_BG, track)
        lo, hi = CATCH_ZONE
        zone = pygame.Rect(track.x + int(track.width * lo / 100), track.y, int(track.width * (hi - lo) / 100), track.height)
        pygame.draw.rect(self.screen, COLOR_ZONE, zone)
        disc_x = track.x + int(track.width * min(session.position, 100.0) / 100)
        pygame.draw.circle(self.screen, ORANGE, (disc_x, track.centery), 9)
        self._text(f"{session.score} / {session.total}", (panel.centerx, panel.y + 20), center=True)
        if session.finished:
            text = f"Done! {session.score}/{session.total} caught. +{session.bonus} happiness!"
        elif session.last_result is not None:
            text = "Caught it!" if session.last_result else "Missed!"
        else:
            text = "Press SPACE when the frisbee is in the green zone!"
        self._text(text, (panel.centerx, panel.bottom - 30), self.small_font, WHITE, center=True)

    def draw_dodge(self, session, panel):
        lane_w = panel.width / DODGE_LANES
        for i in range(1, DODGE_LANES):
            x = int(panel.x + i * lane_w)
            pygame.draw.line(self.screen, DARK_GRAY, (x, panel.y), (x, panel.bottom))
        for obstacle in session.obstacles:
            if obstacle.y < 0:
                continue
            x = int(panel.x + (obstacle.lane + 0.5) * lane_w)
            y = int(panel.y + panel.height * obstacle.y / 100)
            pygame.draw.circle(self.screen, BLUE, (x, y), 10)
        px = int(panel.x + (session.lane + 0.5) * lane_w)
        py = int(panel.y + panel.height * sum(DODGE_HIT_BAND) / 200)
        pygame.draw.rect(self.screen, YELLOW, (px - 14, py - 10, 28, 20), border_radius=4)
        self._text(f"Score: {session.score}", (panel.centerx, panel.y + 16), self.small_font, WHITE, center=True)
        if session.finished:
            self._text(f"Game over! +{session.bonus} happiness!", panel.center, self.font, RED, center=True)

    def draw_minigame(self):
        session = self.game.minigame
        if session is None:
            return
        panel = self._panel()
        if isinstance(session, CatchSession):
            self.draw_catch(session, panel)
        else:
            self.draw_dodge(session, panel)

    # --- loop ---

    def step(self):
        """Process a single loop iteration (useful for headless tests). Returns False to stop."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                self.handle_key(event)

        pet = self.game.pet
        if self.screen_name == "game" and pet is not None and not pet.is_alive and self.overlay != "death":
            if self.game.minigame is not None:
                self.close_minigame()
            self.overlay = "death"
        if self.current_message is None and len(self.game.messages):
            self.message_job.elapsed = 0.0
            self._next_message()

        dt = self.clock.tick(self.fps)
        self.scheduler.advance(dt)

        self.screen.fill(COLOR_BG)
        if self.screen_name == "create":
            self.draw_create()
        else:
            self.draw_game()
            self.draw_overlay()
            self.draw_minigame()
        self.draw_message()
        pygame.display.flip()
        return True

    def run(self):
        running = True
        while running:
            running = self.step()
        self.game.save()
        pygame.quit()


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    GameEngine().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
