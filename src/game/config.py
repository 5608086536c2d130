# --- Display ---
WIDTH = 1500
HEIGHT = 670
FPS = 60

# --- World / Physics (per frame, not per second) ---
GRAVITY = 0.4               # gravity magnitude (px/frame^2), sign = gravity direction
FLIP_VELOCITY = -10.0       # impulse applied on flip when gravity was pointing down
ROTATION_EASE = 0.2         # fraction of the remaining spin applied each frame
ROTATION_SNAP = 0.01        # below this difference the rotation snaps to target

# --- Player ---
PLAYER_X = 100              # player's fixed x (world scrolls left)
PLAYER_W = 30
PLAYER_H = 40

# --- Level generation ---
PLATFORM_HEIGHT = 20
COIN_RADIUS = 10
COIN_SPACING = 80           # one coin per this many px of gap
COIN_SAFE_MARGIN = COIN_RADIUS * 4
SPAWN_LOOKAHEAD = 200       # spawn when the frontier is closer than WIDTH + this
START_PLATFORM_OVERHANG = 50
SEED_DEFAULT = 12345

# --- Difficulty (scroll speed, px/frame) ---
SCROLL_SPEED = {
    "easy": 3.5,
    "medium": 5.0,
    "hard": 6.5,
}

# --- Colors (RGB) ---
COLOR_BG = (13, 12, 29)
COLOR_FG = (255, 255, 255)
COLOR_MUTED = (160, 160, 160)
COLOR_PLAYER = (249, 65, 68)
COLOR_PLAT = (67, 170, 139)
COLOR_COIN = (249, 199, 79)
COLOR_OBSTACLE = (248, 150, 30)
COLOR_MOVER_V = (217, 108, 0)
COLOR_MOVER_H = (144, 190, 109)
COLOR_DANGER = (249, 65, 68)
COLOR_MENU = (87, 117, 144)

# --- Agent environment ---
OBS_PROBE_OFFSETS = (120, 240, 360)
MAX_VY = 20.0               # |vy| used to normalize observations
COIN_REWARD = 5.0
LEVEL_COMPLETE_BONUS = 100.0
