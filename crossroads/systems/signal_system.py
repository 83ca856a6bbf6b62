import logging

from crossroads.controllers.base import Controller
from crossroads.domain.models import TrafficLight, LightState
from crossroads.domain.settings import SimulationSettings

logger = logging.getLogger(__name__)

class SignalSystem:
    def __init__(self, settings: SimulationSettings, controller: Controller):
        self.settings = settings
        self.controller = controller

    def create_light(self, now: float = 0.0) -> TrafficLight:
        state = LightState.RED if self.controller.gates_traffic else LightState.GREEN
        return TrafficLight(
            state=state,
            phase_started_at=now,
            red_duration=self.settings.red_time,
            green_duration=self.settings.short_green_time
        )

    def update(self, light: TrafficLight, queue_length: int, capacity: int, now: float):
        if not self.controller.gates_traffic:
            return

        elapsed = now - light.phase_started_at
        if light.state == LightState.GREEN:
            if elapsed >= light.green_duration:
                self._switch(light, LightState.RED, now)
        elif elapsed >= light.red_duration:
            # Green window is sized once, from the congestion at this instant
            light.green_duration = self.controller.green_duration(queue_length, capacity)
            self._switch(light, LightState.GREEN, now)

    def _switch(self, light: TrafficLight, state: LightState, now: float):
        light.state = state
        light.phase_started_at = now
        logger.debug("Light -> %s at t=%.2f (green=%.1fs)", state.value, now, light.green_duration)
