import os

# --- GLOBAL CONFIGURATION ---
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 320
FPS = int(os.getenv("POCKETGOTCHI_FPS", "60"))
DB_FILE = os.getenv("POCKETGOTCHI_DB", "pocketgotchi.db")
EXPORT_FILE = "pocketgotchi.tama"
SAVE_KEY = "webgotchi_v1"
# Time scaling for development/testing. 1 = real time, 10 = ticks arrive 10x faster.
TIME_SCALE = float(os.getenv("POCKETGOTCHI_TIME_SCALE", "1.0"))
LOG_LEVEL = os.getenv("POCKETGOTCHI_LOG_LEVEL", "INFO")

# --- SIMULATION ---
TICK_MS = 30000             # one simulation tick every 30 s
MAX_AWAY_TICKS = 2880       # catch-up cap: 24 h of ticks
AWAY_SUMMARY_TICKS = 60     # catch-ups longer than this get a summary message
STAT_MIN = 0.0
STAT_MAX = 100.0
STAT_NAMES = ("hunger", "happiness", "energy", "health", "hygiene", "intelligence")

# Per-tick decay while awake
DECAY = {
    "hunger": 0.3,
    "happiness": 0.2,
    "energy": 0.15,
    "hygiene": 0.15,
    "intelligence": 0.05,
}
STARVING_BELOW = 20.0
STARVING_HEALTH_PENALTY = 0.3
FILTHY_BELOW = 20.0
FILTHY_HEALTH_PENALTY = 0.2
EXHAUSTED_BELOW = 10.0
EXHAUSTED_HAPPINESS_PENALTY = 0.2
SICK_HEALTH_PENALTY = 0.4
BATHROOM_HYGIENE_PENALTY = 0.25

# Per-tick changes while asleep
SLEEP_ENERGY_GAIN = 1.5
SLEEP_HUNGER_DECAY = 0.15
SLEEP_HYGIENE_DECAY = 0.05
SLEEP_HAPPINESS_DECAY = 0.05
SLEEP_SICK_HEALTH_PENALTY = 0.2
WAKE_AT_ENERGY = 95.0

# Random events (per awake tick)
BATHROOM_CHANCE = 0.012
SICK_CHANCE = 0.015
SICK_HYGIENE_BELOW = 30.0
SICK_HEALTH_BELOW = 40.0

# --- NEW CREATURE ---
NEW_PET_STATS = {
    "hunger": 70.0,
    "happiness": 70.0,
    "energy": 70.0,
    "health": 80.0,
    "hygiene": 80.0,
    "intelligence": 10.0,
}

# Avatar symbols and the label shown where the font has no emoji glyphs
AVATARS = [
    ("\U0001F423", "Chick"),
    ("\U0001F431", "Cat"),
    ("\U0001F436", "Dog"),
    ("\U0001F430", "Bunny"),
    ("\U0001F438", "Frog"),
    ("\U0001F43C", "Panda"),
    ("\U0001F98A", "Fox"),
    ("\U0001F428", "Koala"),
    ("\U0001F437", "Pig"),
    ("\U0001F435", "Monkey"),
    ("\U0001F981", "Lion"),
    ("\U0001F432", "Dragon"),
    ("\U0001F422", "Turtle"),
    ("\U0001F989", "Owl"),
    ("\U0001F41D", "Bee"),
    ("\U0001F98B", "Butterfly"),
]
AVATAR_SYMBOLS = [symbol for symbol, _ in AVATARS]

# --- ACTIONS ---
FOODS = [
    {'name': 'Apple', 'emoji': '\U0001F34E', 'hunger': 15, 'health': 5, 'happiness': 0, 'energy': 0},
    {'name': 'Pizza', 'emoji': '\U0001F355', 'hunger': 25, 'health': -5, 'happiness': 10, 'energy': 0},
    {'name': 'Cake', 'emoji': '\U0001F370', 'hunger': 15, 'health': -3, 'happiness': 15, 'energy': 0},
    {'name': 'Salad', 'emoji': '\U0001F957', 'hunger': 10, 'health': 10, 'happiness': -5, 'energy': 0},
    {'name': 'Ice Cream', 'emoji': '\U0001F366', 'hunger': 10, 'health': -3, 'happiness': 20, 'energy': 0},
    {'name': 'Steak', 'emoji': '\U0001F969', 'hunger': 30, 'health': 5, 'happiness': 0, 'energy': 10},
    {'name': 'Candy', 'emoji': '\U0001F36C', 'hunger': 5, 'health': -8, 'happiness': 25, 'energy': 5},
    {'name': 'Rice', 'emoji': '\U0001F35A', 'hunger': 20, 'health': 3, 'happiness': 0, 'energy': 5},
]
STUDY_MIN_ENERGY = 15.0
STUDY_INTELLIGENCE_GAIN = 12.0
STUDY_ENERGY_COST = 15.0
STUDY_HAPPINESS_COST = 5.0
HEAL_HEALTHY_ABOVE = 70.0
HEAL_HEALTH_GAIN = 20.0
BATH_HYGIENE_GAIN = 30.0

# --- MINIGAMES ---
FRAME_MS = 16
CATCH_ROUNDS = 5
CATCH_ZONE = (78.0, 100.0)
CATCH_BASE_SPEED = 0.9
CATCH_SPEED_PER_ROUND = 0.12
CATCH_SPEED_JITTER = 0.6
CATCH_RESULT_PAUSE_MS = 900
CATCH_HAPPINESS_PER_CATCH = 6
CATCH_ENERGY_COST = 8.0

DODGE_LANES = 3
DODGE_START_LANE = 1
DODGE_START_SPEED = 1.2
DODGE_SPEED_STEP = 0.006
DODGE_SPAWN_FRAMES = 60.0        # 60 frames @60fps = 1000 ms
DODGE_SPAWN_FRAMES_STEP = 0.15   # ~2.5 ms per spawn
DODGE_SPAWN_FRAMES_MIN = 25.0    # ~417 ms
DODGE_MAX_DT_MS = 50
DODGE_SPAWN_Y = -5.0
DODGE_HIT_BAND = (82.0, 98.0)
DODGE_EXIT_Y = 105.0
DODGE_HAPPINESS_PER_POINT = 2
DODGE_HAPPINESS_CAP = 40
DODGE_ENERGY_COST = 10.0

# --- FRONT END ---
DISPLAY_LERP_MS = 80
DISPLAY_LERP_FACTOR = 0.08
DISPLAY_SNAP = 0.3
MESSAGE_INTERVAL_MS = 2700

# --- RETRO UI PALETTE ---
COLOR_BG = (40, 44, 52)
COLOR_UI_BAR_BG = (62, 68, 81)
COLOR_TEXT = (171, 178, 191)
COLOR_SICK = (198, 120, 221)
COLOR_MESSAGE_BOX_BG = (50, 50, 50)
COLOR_BAR_OK = (152, 195, 121)
COLOR_BAR_MID = (229, 192, 123)
COLOR_BAR_LOW = (224, 108, 117)
COLOR_ZONE = (80, 160, 90)

# --- COMMON COLORS ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GRAY = (200, 200, 200)
DARK_GRAY = (100, 100, 100)
ORANGE = (255, 165, 0)
BLUE = (100, 149, 237)
YELLOW = (255, 215, 0)
