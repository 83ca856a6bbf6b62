from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel

Color = Tuple[int, int, int]

class Direction(str, Enum):
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

class Route(str, Enum):
    STRAIGHT = "STRAIGHT"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

class LightState(str, Enum):
    RED = "RED"
    GREEN = "GREEN"

class SignalMode(str, Enum):
    ADAPTIVE = "ADAPTIVE"
    FIXED = "FIXED"
    DISABLED = "DISABLED"

class TurnTrigger(str, Enum):
    CENTER = "CENTER"
    OFFSET = "OFFSET"

ROUTE_COLORS = {
    Route.STRAIGHT: (0, 255, 0),   # green
    Route.LEFT: (255, 255, 0),     # yellow
    Route.RIGHT: (255, 165, 0),    # orange
}

def route_color(route: Route) -> Color:
    return ROUTE_COLORS[route]

class Vehicle(BaseModel):
    id: str  # e.g., "NORTH-3"
    x: float
    y: float
    direction: Direction
    route: Route
    color: Color
    has_turned: bool = False

class TrafficLight(BaseModel):
    state: LightState = LightState.RED
    phase_started_at: float = 0.0
    red_duration: float
    green_duration: float  # Fixed on every transition into GREEN

# API/Response Models

class LaneState(BaseModel):
    direction: Direction
    capacity: int
    queueLength: int
    lightState: LightState
    vehicles: List[Vehicle]

class GridState(BaseModel):
    tick: int
    time: float
    lanes: List[LaneState]

class LaneOverview(BaseModel):
    direction: Direction
    congestion: float
    flow: str # "optimal", "moderate", "congested"

class GridOverview(BaseModel):
    lanes: List[LaneOverview]

class SpawnRequest(BaseModel):
    direction: Direction

class KeyPress(BaseModel):
    repeat: bool = False

class KeyPressResult(BaseModel):
    key: str
    accepted: bool
    action: Optional[str] = None
