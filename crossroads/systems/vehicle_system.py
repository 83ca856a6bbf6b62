import math
from typing import Tuple

from crossroads.domain.models import Vehicle, Direction, Route, TurnTrigger
from crossroads.domain.settings import SimulationSettings

# Counter-clockwise for left turns, clockwise for right turns
LEFT_TURNS = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}

RIGHT_TURNS = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}

# Unit step per heading in screen coordinates (y grows downwards)
HEADINGS = {
    Direction.NORTH: (0.0, -1.0),
    Direction.SOUTH: (0.0, 1.0),
    Direction.EAST: (1.0, 0.0),
    Direction.WEST: (-1.0, 0.0),
}

def turn_direction(direction: Direction, route: Route) -> Direction:
    if route == Route.LEFT:
        return LEFT_TURNS[direction]
    if route == Route.RIGHT:
        return RIGHT_TURNS[direction]
    return direction

def distance(a: Vehicle, b: Vehicle) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)

class VehicleSystem:
    """Per-vehicle geometry: motion, hold zones, turns and retirement.

    Positions along a heading are compared through ``_progress``, which maps
    a point to a scalar that grows as a vehicle travels that way. This keeps
    every trigger line direction-agnostic.
    """

    def __init__(self, settings: SimulationSettings):
        self.settings = settings

    def _progress(self, x: float, y: float, direction: Direction) -> float:
        dx, dy = HEADINGS[direction]
        return x * dx + y * dy

    def _center_progress(self, direction: Direction) -> float:
        return self._progress(self.settings.center_x, self.settings.center_y, direction)

    def lane_position(self, direction: Direction) -> float:
        """Lateral coordinate of the right-hand lane for ``direction``."""
        offset = self.settings.lane_width / 2.0
        if direction == Direction.NORTH:
            return self.settings.center_x + offset
        if direction == Direction.SOUTH:
            return self.settings.center_x - offset
        if direction == Direction.EAST:
            return self.settings.center_y + offset
        return self.settings.center_y - offset

    def spawn_position(self, direction: Direction) -> Tuple[float, float]:
        inset = self.settings.spawn_inset
        lateral = self.lane_position(direction)
        if direction == Direction.NORTH:
            return lateral, self.settings.window_height - inset
        if direction == Direction.SOUTH:
            return lateral, inset
        if direction == Direction.EAST:
            return inset, lateral
        return self.settings.window_width - inset, lateral

    def too_close(self, follower: Vehicle, leader: Vehicle) -> bool:
        return distance(follower, leader) < self.settings.safety_gap + self.settings.vehicle_size

    def clear_of_spawn_point(self, vehicle: Vehicle, direction: Direction) -> bool:
        x, y = self.spawn_position(direction)
        return math.hypot(vehicle.x - x, vehicle.y - y) >= self.settings.safety_gap + self.settings.vehicle_size

    def in_entrance_band(self, vehicle: Vehicle) -> bool:
        edge = self._center_progress(vehicle.direction) - self.settings.road_width / 2.0
        progress = self._progress(vehicle.x, vehicle.y, vehicle.direction)
        return edge <= progress <= edge + self.settings.entrance_band

    def step(self, vehicle: Vehicle):
        dx, dy = HEADINGS[vehicle.direction]
        vehicle.x += dx * self.settings.vehicle_speed
        vehicle.y += dy * self.settings.vehicle_speed

    def _trigger_offset(self, route: Route) -> float:
        if self.settings.turn_trigger == TurnTrigger.OFFSET:
            # Right turns cut in early, left turns swing past the center
            size = float(self.settings.vehicle_size)
            return -size if route == Route.RIGHT else size
        return 0.0

    def should_turn(self, vehicle: Vehicle) -> bool:
        if vehicle.route == Route.STRAIGHT or vehicle.has_turned:
            return False
        trigger = self._center_progress(vehicle.direction) + self._trigger_offset(vehicle.route)
        return self._progress(vehicle.x, vehicle.y, vehicle.direction) >= trigger

    def apply_turn(self, vehicle: Vehicle) -> bool:
        if not self.should_turn(vehicle):
            return False

        vehicle.direction = turn_direction(vehicle.direction, vehicle.route)
        if self.settings.snap_to_lane:
            lateral = self.lane_position(vehicle.direction)
            if vehicle.direction in (Direction.NORTH, Direction.SOUTH):
                vehicle.x = lateral
            else:
                vehicle.y = lateral
        vehicle.has_turned = True
        return True

    def is_offscreen(self, vehicle: Vehicle) -> bool:
        margin = self.settings.offscreen_margin
        return (
            vehicle.x < -margin or
            vehicle.x > self.settings.window_width + margin or
            vehicle.y < -margin or
            vehicle.y > self.settings.window_height + margin
        )
