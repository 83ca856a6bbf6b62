import logging
import random
from typing import List, Optional, Tuple

from crossroads.controllers.implementations import congestion_ratio
from crossroads.domain.models import Vehicle, Direction, Route, LightState, route_color
from crossroads.domain.settings import SimulationSettings
from crossroads.systems.signal_system import SignalSystem
from crossroads.systems.vehicle_system import VehicleSystem

logger = logging.getLogger(__name__)

ROUTES = (Route.STRAIGHT, Route.LEFT, Route.RIGHT)

class Lane:
    """Queue of vehicles travelling from one edge of the playfield.

    Index 0 is the vehicle closest to leaving. Vehicles are only appended at
    the back and removed by index, so the queue stays in spawn order.
    """

    def __init__(
        self,
        direction: Direction,
        settings: SimulationSettings,
        signal_system: SignalSystem,
        vehicle_system: VehicleSystem,
        rng: Optional[random.Random] = None
    ):
        self.direction = direction
        self.settings = settings
        self.signal_system = signal_system
        self.vehicle_system = vehicle_system
        self.rng = rng or random.Random()

        self.capacity = self._compute_capacity()
        self.traffic_light = signal_system.create_light()
        self.last_spawn_at: Optional[float] = None
        self._vehicles: List[Vehicle] = []
        self._sequence = 0

    def _compute_capacity(self) -> int:
        if self.direction in (Direction.NORTH, Direction.SOUTH):
            extent = self.settings.window_height
        else:
            extent = self.settings.window_width
        lane_length = (extent - self.settings.road_width) // 2
        return max(1, int(lane_length // (self.settings.vehicle_size + self.settings.safety_gap)))

    @property
    def vehicles(self) -> Tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    @property
    def queue_length(self) -> int:
        return len(self._vehicles)

    @property
    def congestion_ratio(self) -> float:
        return congestion_ratio(len(self._vehicles), self.capacity)

    @property
    def light_state(self) -> LightState:
        return self.traffic_light.state

    def can_spawn(self, now: float) -> bool:
        cooled_down = (
            self.last_spawn_at is None or
            now - self.last_spawn_at >= self.settings.spawn_cooldown
        )
        if not cooled_down or len(self._vehicles) >= self.capacity:
            return False
        # The back vehicle must have cleared the spawn point
        return not self._vehicles or self.vehicle_system.clear_of_spawn_point(self._vehicles[-1], self.direction)

    def spawn_vehicle(self, now: float, route: Optional[Route] = None) -> Optional[Vehicle]:
        """Append a vehicle at the spawn point, or do nothing if the lane refuses.

        ``route`` defaults to a uniform draw over straight, left and right.
        """
        if not self.can_spawn(now):
            logger.debug("%s lane refused spawn (queue=%d/%d)", self.direction.value, len(self._vehicles), self.capacity)
            return None

        if route is None:
            route = self.rng.choice(ROUTES)
        x, y = self.vehicle_system.spawn_position(self.direction)
        self._sequence += 1
        vehicle = Vehicle(
            id=f"{self.direction.value}-{self._sequence}",
            x=x,
            y=y,
            direction=self.direction,
            route=route,
            color=route_color(route),
            has_turned=False
        )
        self._vehicles.append(vehicle)
        self.last_spawn_at = now
        logger.debug("Spawned %s (%s)", vehicle.id, route.value)
        return vehicle

    def _held_by_light(self, vehicle: Vehicle) -> bool:
        return (
            self.traffic_light.state == LightState.RED and
            not vehicle.has_turned and
            self.vehicle_system.in_entrance_band(vehicle)
        )

    def _plan_movements(self) -> Tuple[bool, ...]:
        # Decided from the pre-tick positions only, before anything moves
        movements = []
        for i, vehicle in enumerate(self._vehicles):
            can_move = True
            if i > 0 and self.vehicle_system.too_close(vehicle, self._vehicles[i - 1]):
                can_move = False
            if self._held_by_light(vehicle):
                can_move = False
            movements.append(can_move)
        return tuple(movements)

    def update(self, now: float) -> List[Vehicle]:
        """Advance the lane one tick and return the vehicles that left it."""
        self.signal_system.update(self.traffic_light, len(self._vehicles), self.capacity, now)

        movements = self._plan_movements()

        to_remove = []
        for i, vehicle in enumerate(self._vehicles):
            if movements[i]:
                self.vehicle_system.step(vehicle)
                # A vehicle that just rolled into its band on red waits there before turning
                if not self._held_by_light(vehicle):
                    self.vehicle_system.apply_turn(vehicle)
            if self.vehicle_system.is_offscreen(vehicle):
                to_remove.append(i)

        retired = []
        for i in reversed(to_remove):
            retired.append(self._vehicles.pop(i))
        if retired:
            logger.debug("%s lane retired %d vehicle(s)", self.direction.value, len(retired))
        retired.reverse()
        return retired
