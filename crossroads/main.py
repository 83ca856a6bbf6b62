import asyncio
import logging
import time
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from crossroads.application.controls import KEY_BINDINGS, InputThrottle, command_for_key
from crossroads.kernel.simulation_kernel import SimulationKernel
from crossroads.kernel.snapshot_builder import SnapshotBuilder
from crossroads.kernel.commands import SpawnVehicleCommand, SpawnRandomVehicleCommand
from crossroads.domain.models import (
    Direction, GridState, LaneState, GridOverview, SpawnRequest, KeyPress, KeyPressResult
)

logger = logging.getLogger(__name__)

# Initialize Kernel
kernel = SimulationKernel()
throttle = InputThrottle()
snapshot_builder = SnapshotBuilder()

# Background task for simulation loop
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Start the simulation loop
    kernel.initialize() # Deterministic seed
    loop_task = asyncio.create_task(run_simulation())
    logger.info("Simulation loop started (dt=%.3fs)", kernel.dt)
    yield
    # Shutdown
    loop_task.cancel()
    logger.info("Simulation loop stopped at tick %d", kernel.state.tick_id)

app = FastAPI(lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

async def run_simulation():
    """Runs the simulation update loop at one tick per kernel.dt"""
    while True:
        start_time = time.time()

        kernel.run_tick()

        # Sleep to maintain frame rate
        elapsed = time.time() - start_time
        sleep_time = max(0.0, kernel.dt - elapsed)
        await asyncio.sleep(sleep_time)

@app.get("/api/state", response_model=GridState)
async def get_state():
    """Returns every lane with its queue and light"""
    return kernel.get_state()

@app.get("/api/lanes/{direction}", response_model=LaneState)
async def get_lane(direction: str):
    """Returns a single lane"""
    try:
        lane_direction = Direction(direction.upper())
    except ValueError:
        raise HTTPException(status_code=404, detail="Lane not found")
    return kernel.get_lane_state(lane_direction)

@app.get("/api/overview", response_model=GridOverview)
async def get_overview():
    """Returns congestion per lane"""
    return kernel.get_overview()

@app.get("/api/snapshot")
async def get_snapshot():
    """Returns the compact per-frame render snapshot"""
    return snapshot_builder.build(kernel.state)

@app.post("/api/vehicles/spawn")
async def spawn_vehicle(request: SpawnRequest):
    """Queues a spawn in one lane; a full or cooling-down lane ignores it"""
    kernel.queue_command(SpawnVehicleCommand(request.direction))
    return {"status": "queued", "direction": request.direction}

@app.post("/api/vehicles/spawn-random")
async def spawn_random_vehicle():
    kernel.queue_command(SpawnRandomVehicleCommand())
    return {"status": "queued", "direction": None}

@app.post("/api/keys/{key}", response_model=KeyPressResult)
async def press_key(key: str, press: KeyPress):
    """Maps a key press from the input collaborator to a spawn"""
    key = key.lower()
    if key not in KEY_BINDINGS:
        raise HTTPException(status_code=404, detail=f"No binding for key '{key}'")
    if not throttle.allow(key, repeat=press.repeat):
        return KeyPressResult(key=key, accepted=False)
    command = command_for_key(key)
    kernel.queue_command(command)
    return KeyPressResult(key=key, accepted=True, action=type(command).__name__)

@app.get("/")
def read_root():
    return {"status": "Crossroads Intersection Simulation Running"}

def serve(host: str = "0.0.0.0", port: int = 8000):
    """Entry point for the crossroads-serve script"""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=host, port=port)

if __name__ == "__main__":
    serve()
