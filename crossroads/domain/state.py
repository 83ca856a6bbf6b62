from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from crossroads.domain.models import Direction

class SimulationState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tick_id: int = 0
    time: float = 0.0
    lanes: Dict[Direction, Any] = {}  # Direction -> kernel.lane.Lane
