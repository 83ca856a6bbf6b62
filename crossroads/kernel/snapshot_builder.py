from typing import Any, Dict
from crossroads.domain.state import SimulationState

class SnapshotBuilder:
    """Flattens the kernel state into what a renderer draws each frame."""

    def build(self, state: SimulationState) -> Dict[str, Any]:
        return {
            "tick": state.tick_id,
            "time": state.time,
            "vehicles": [
                {
                    "id": v.id,
                    "x": v.x,
                    "y": v.y,
                    "direction": v.direction.value,
                    "color": list(v.color)
                }
                for lane in state.lanes.values()
                for v in lane.vehicles
            ],
            "lights": {
                direction.value: lane.light_state.value
                for direction, lane in state.lanes.items()
            }
        }
