import argparse
import json
import logging
import time
from typing import Any, Dict, List, Optional

from crossroads.domain.settings import SimulationSettings
from crossroads.kernel.simulation_kernel import SimulationKernel

logger = logging.getLogger(__name__)

def run_headless_experiment(
    duration_ticks: int,
    output_path: Optional[str] = None,
    seed: int = 42,
    spawn_rate: float = 0.1,
    settings: Optional[SimulationSettings] = None
) -> List[Dict[str, Any]]:
    """Drive a kernel without a renderer, spawning at random each tick.

    ``spawn_rate`` is the chance per tick of a random spawn request. Requests
    the target lane refuses are dropped, as with interactive spawns.
    """
    kernel = SimulationKernel(settings)
    kernel.initialize(seed=seed)

    results = []
    completed = 0

    start_time = time.time()
    for i in range(duration_ticks):
        if kernel.rng.random() < spawn_rate:
            kernel.spawn_random_vehicle()
        completed += len(kernel.run_tick())
        results.append({
            "tick": i,
            "completed": completed,
            "lanes": {
                lane.direction.value: {
                    "queue": lane.queue_length,
                    "light": lane.light_state.value
                }
                for lane in kernel.lanes
            }
        })

    end_time = time.time()
    logger.info("Experiment finished in %.4fs (%d vehicles cleared)", end_time - start_time, completed)

    if output_path:
        with open(output_path, 'w') as f:
            json.dump(results, f, indent=2)
    return results

def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the intersection simulation headless")
    parser.add_argument("ticks", type=int)
    parser.add_argument("output")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--spawn-rate", type=float, default=0.1)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    run_headless_experiment(args.ticks, args.output, seed=args.seed, spawn_rate=args.spawn_rate)

if __name__ == "__main__":
    main()
