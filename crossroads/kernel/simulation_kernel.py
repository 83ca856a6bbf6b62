import logging
import random
from collections import deque
from typing import Deque, List, Optional

from crossroads.controllers.implementations import build_controller
from crossroads.domain.models import (
    Direction, Route, Vehicle, GridState, LaneState, LaneOverview, GridOverview
)
from crossroads.domain.settings import SimulationSettings
from crossroads.domain.state import SimulationState
from crossroads.kernel.commands import Command
from crossroads.kernel.lane import Lane
from crossroads.systems.signal_system import SignalSystem
from crossroads.systems.vehicle_system import VehicleSystem

logger = logging.getLogger(__name__)

DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)

class SimulationKernel:
    def __init__(self, settings: Optional[SimulationSettings] = None):
        self.settings = settings or SimulationSettings()
        self.state = SimulationState()
        self.dt = self.settings.tick_dt
        self.command_queue: Deque[Command] = deque()
        self.rng = random.Random()
        self.initialized = False

        self.signal_system = SignalSystem(self.settings, build_controller(self.settings))
        self.vehicle_system = VehicleSystem(self.settings)

    def initialize(self, seed: int = 42):
        self.state.tick_id = 0
        self.state.time = 0.0
        self.rng.seed(seed)
        self.command_queue.clear()
        self._initialize_lanes()
        self.initialized = True
        logger.info(
            "Kernel initialized (seed=%s, signals=%s, capacity=%s)",
            seed,
            self.settings.signal_mode.value,
            {d.value: lane.capacity for d, lane in self.state.lanes.items()}
        )

    def _initialize_lanes(self):
        self.state.lanes = {
            direction: Lane(direction, self.settings, self.signal_system, self.vehicle_system, self.rng)
            for direction in DIRECTIONS
        }

    def _ensure_initialized(self):
        if not self.initialized:
            self.initialize()

    def get_lane(self, direction: Direction) -> Lane:
        self._ensure_initialized()
        return self.state.lanes[direction]

    @property
    def lanes(self) -> List[Lane]:
        self._ensure_initialized()
        return list(self.state.lanes.values())

    def spawn_vehicle(self, direction: Direction, route: Optional[Route] = None) -> Optional[Vehicle]:
        # Refusals (cooldown, full lane, blocked spawn point) are absorbed by the lane
        return self.get_lane(direction).spawn_vehicle(self.state.time, route)

    def spawn_random_vehicle(self) -> Optional[Vehicle]:
        return self.spawn_vehicle(self.rng.choice(DIRECTIONS))

    def queue_command(self, command: Command):
        self.command_queue.append(command)

    def update(self) -> List[Vehicle]:
        """Advance every lane and the clock by one tick.

        Returns the vehicles retired this tick.
        """
        self._ensure_initialized()
        retired = []
        for lane in self.state.lanes.values():
            retired.extend(lane.update(self.state.time))

        self.state.tick_id += 1
        self.state.time = self.state.tick_id * self.dt
        return retired

    def run_tick(self) -> List[Vehicle]:
        self._ensure_initialized()

        # 1. Consume Commands
        while self.command_queue:
            cmd = self.command_queue.popleft()
            cmd.execute(self)

        # 2. Lanes and time advance
        return self.update()

    def _lane_state(self, lane: Lane) -> LaneState:
        return LaneState(
            direction=lane.direction,
            capacity=lane.capacity,
            queueLength=lane.queue_length,
            lightState=lane.light_state,
            vehicles=[v.model_copy() for v in lane.vehicles]
        )

    def get_lane_state(self, direction: Direction) -> LaneState:
        return self._lane_state(self.get_lane(direction))

    def get_state(self) -> GridState:
        return GridState(
            tick=self.state.tick_id,
            time=self.state.time,
            lanes=[self._lane_state(lane) for lane in self.lanes]
        )

    def get_overview(self) -> GridOverview:
        overview = []
        for lane in self.lanes:
            congestion = lane.congestion_ratio
            status = "optimal"
            if congestion >= 0.75: status = "congested"
            elif congestion >= 0.5: status = "moderate"
            overview.append(LaneOverview(direction=lane.direction, congestion=round(congestion, 2), flow=status))
        return GridOverview(lanes=overview)
