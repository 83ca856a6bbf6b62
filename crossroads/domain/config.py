# Simulation Configuration

# Playfield
WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 800
ROAD_WIDTH = 60
LANE_WIDTH = 30

# Vehicles
VEHICLE_SIZE = 30
SAFETY_GAP = 15          # Clearance kept behind the vehicle ahead
VEHICLE_SPEED = 2.0      # Units per tick
SPAWN_COOLDOWN = 0.5     # Seconds between spawns in one lane
SPAWN_INSET = 30.0       # Distance of the spawn point from the playfield edge
OFFSCREEN_MARGIN = 50.0  # Vehicles further than this past an edge are retired

# Traffic Rules
ENTRANCE_BAND = 30.0     # Depth of the hold zone inside the intersection edge

# Signal Timings
RED_TIME = 6.0
SHORT_GREEN_TIME = 8.0
LONG_GREEN_TIME = 12.0
CONGESTION_THRESHOLD = 0.7

# Driver
TICK_DT = 0.03           # Seconds per tick
INPUT_MIN_INTERVAL = 0.2 # Seconds between accepted presses of one key
