# --- Display ---
WIDTH = 480
HEIGHT = 720
FPS = 60
SIM_DT = 1.0 / 60.0          # fixed tick duration (s)
MAX_FRAME_S = 0.25           # clamp stalls before feeding the accumulator

# --- Player ---
PLAYER_W = 24
PLAYER_H = 36
SPAWN_X = WIDTH / 2 - PLAYER_W / 2
SPAWN_Y = HEIGHT - 120

# --- Physics (per tick) ---
GRAVITY = 0.4
ACCEL_X = 0.6
FRICTION_X = 0.85
MAX_VX = 6.0
JUMP_SPEED = 11.5

# --- Platforms ---
PLATFORM_H = 12
PLATFORM_MIN_W = 60
PLATFORM_MAX_W = 110
PLATFORM_EDGE_MARGIN = 10    # keep new platforms this far from the walls
GAP_MIN = 60
GAP_MAX = 110
OSCILLATING_CHANCE = 0.18
OSCILLATING_SPEED = 1.2

START_PLATFORM_W = 100
START_PLATFORM_Y = HEIGHT - 20
START_GAP = 90
INITIAL_PLATFORMS = 8

LOOKAHEAD = 600              # platforms must exist this far above the camera
CULL_MARGIN = 200            # below the viewport bottom
LANDING_TOLERANCE = 8        # extra depth of the landing band

# --- Camera / flow ---
CAMERA_RAISE_THRESHOLD = HEIGHT * 0.45
GAMEOVER_MARGIN = 40
SEED_DEFAULT = 12345

# --- Input ---
TILT_DEADZONE = 6.0          # degrees
TILT_MAX = 90.0
TILT_BTN = (WIDTH - 128, 8, 120, 28)            # x, y, w, h
OVERLAY_BTN_LEFT = (12, HEIGHT - 84, 72, 72)
OVERLAY_BTN_RIGHT = (WIDTH - 84, HEIGHT - 84, 72, 72)

# --- Colors (RGB) ---
COLOR_BG = (255, 255, 255)
COLOR_GRID = (242, 242, 242)
COLOR_FG = (17, 17, 17)
COLOR_PLAT = (51, 51, 51)
COLOR_PLAT_MOVING = (0, 170, 119)
