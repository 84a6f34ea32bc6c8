# --- Maze dimensions (logical cells) ---
DEFAULT_ROWS = 10
DEFAULT_COLS = 10
# Below this the start and end cells would coincide
MIN_LOGICAL_CELLS = 2
# Upper bound enforced by the CLI; the engine itself has none
MAX_DIMENSION = 500

# --- Algorithms ---
DEFAULT_GENERATOR = "kruskal"
DEFAULT_SOLVER = "astar"

# --- Obstacles ---
# add_random_obstacles gives up after count * this many attempts
OBSTACLE_ATTEMPT_FACTOR = 10

# --- Logging ---
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'
