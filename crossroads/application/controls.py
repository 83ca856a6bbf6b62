import time
from typing import Callable, Dict, Optional

from crossroads.domain import config
from crossroads.domain.models import Direction
from crossroads.kernel.commands import Command, SpawnVehicleCommand, SpawnRandomVehicleCommand

# Arrow keys spawn into the lane travelling that way, "r" picks a lane at random
KEY_BINDINGS: Dict[str, Optional[Direction]] = {
    "up": Direction.NORTH,
    "down": Direction.SOUTH,
    "right": Direction.EAST,
    "left": Direction.WEST,
    "r": None,
}

def command_for_key(key: str) -> Command:
    """Raises KeyError for keys without a binding."""
    direction = KEY_BINDINGS[key.lower()]
    if direction is None:
        return SpawnRandomVehicleCommand()
    return SpawnVehicleCommand(direction)

class InputThrottle:
    """Drops auto-repeat events and presses of one key that come too fast."""

    def __init__(self, min_interval: float = config.INPUT_MIN_INTERVAL, clock: Callable[[], float] = time.monotonic):
        self.min_interval = min_interval
        self.clock = clock
        self._last_accepted: Dict[str, float] = {}

    def allow(self, key: str, repeat: bool = False) -> bool:
        if repeat:
            return False
        now = self.clock()
        last = self._last_accepted.get(key)
        if last is not None and now - last < self.min_interval:
            return False
        self._last_accepted[key] = now
        return True

    def reset(self):
        self._last_accepted.clear()
