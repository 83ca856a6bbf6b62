from crossroads.controllers.base import Controller
from crossroads.domain.models import SignalMode
from crossroads.domain.settings import SimulationSettings

def congestion_ratio(queue_length: int, capacity: int) -> float:
    if capacity <= 0:
        return 0.0
    return queue_length / capacity

class AdaptiveController(Controller):
    """Two-tier policy: congested lanes get the long green window."""

    def __init__(self, settings: SimulationSettings):
        self.threshold = settings.congestion_threshold
        self.short_green = settings.short_green_time
        self.long_green = settings.long_green_time

    def green_duration(self, queue_length: int, capacity: int) -> float:
        if congestion_ratio(queue_length, capacity) > self.threshold:
            return self.long_green
        return self.short_green

class FixedController(Controller):
    def __init__(self, settings: SimulationSettings):
        self.short_green = settings.short_green_time

    def green_duration(self, queue_length: int, capacity: int) -> float:
        return self.short_green

class UnsignalledController(Controller):
    # Lights stay green forever; vehicles only respect spacing.
    gates_traffic = False

    def green_duration(self, queue_length: int, capacity: int) -> float:
        return float("inf")

def build_controller(settings: SimulationSettings) -> Controller:
    if settings.signal_mode == SignalMode.FIXED:
        return FixedController(settings)
    if settings.signal_mode == SignalMode.DISABLED:
        return UnsignalledController()
    return AdaptiveController(settings)
