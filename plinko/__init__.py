# ── Central defaults (tune here, not scattered across files) ──

# Canvas
CANVAS_MARGIN = 40
DEFAULT_CANVAS_SIZE = 760

# Pegs
PEG_RADIUS = 4
PEG_ROWS = 16
PEG_FIRST_ROW = 2
PEG_SPACING = 36
ROW_SPACING = 35

# Sinks
NUM_SINKS = 15
SINK_WIDTH = 30
SINK_ROW = 0.85
SINK_COLOR_START = '#b7183c'
SINK_COLOR_END = '#cda43a'
SINK_CORNER_RADIUS = 7
SINK_SHADOW_OFFSET = (0, 3)
SINK_SHADOW_SATURATION = 100

# Balls
BALL_RADIUS = 7
BALL_SPAWN_Y = 50
BALL_SPAWN_JITTER = 23

# Physics
GRAVITY = 0.7
HORIZONTAL_FRICTION = 0.5
VERTICAL_FRICTION = 0.8

# Rendering
FPS = 60
BG_COLOR = (14, 16, 35)
PEG_COLOR = (255, 255, 255)
BALL_COLOR = (255, 255, 0)
BUTTON_COLOR = (40, 44, 80)
BUTTON_TEXT_COLOR = (230, 230, 240)

# Batch runs
N_BALLS = 200
MAX_STEPS = 2000
SEED = 42

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
