from pydantic import BaseModel, Field

from crossroads.domain import config
from crossroads.domain.models import SignalMode, TurnTrigger

class SimulationSettings(BaseModel):
    """Tunable geometry, timing and policy knobs for one kernel.

    Defaults mirror ``crossroads.domain.config``; override per run (tests,
    experiments) instead of patching module constants.
    """

    window_width: int = Field(config.WINDOW_WIDTH, gt=0)
    window_height: int = Field(config.WINDOW_HEIGHT, gt=0)
    road_width: int = Field(config.ROAD_WIDTH, gt=0)
    lane_width: int = Field(config.LANE_WIDTH, gt=0)

    vehicle_size: int = Field(config.VEHICLE_SIZE, gt=0)
    safety_gap: int = Field(config.SAFETY_GAP, ge=0)
    vehicle_speed: float = Field(config.VEHICLE_SPEED, gt=0)
    spawn_cooldown: float = Field(config.SPAWN_COOLDOWN, ge=0)
    spawn_inset: float = Field(config.SPAWN_INSET, ge=0)
    offscreen_margin: float = Field(config.OFFSCREEN_MARGIN, ge=0)
    entrance_band: float = Field(config.ENTRANCE_BAND, ge=0)

    red_time: float = Field(config.RED_TIME, gt=0)
    short_green_time: float = Field(config.SHORT_GREEN_TIME, gt=0)
    long_green_time: float = Field(config.LONG_GREEN_TIME, gt=0)
    congestion_threshold: float = Field(config.CONGESTION_THRESHOLD, ge=0)

    tick_dt: float = Field(config.TICK_DT, gt=0)

    signal_mode: SignalMode = SignalMode.ADAPTIVE
    turn_trigger: TurnTrigger = TurnTrigger.CENTER
    snap_to_lane: bool = True

    @property
    def center_x(self) -> float:
        return self.window_width / 2.0

    @property
    def center_y(self) -> float:
        return self.window_height / 2.0
