from abc import ABC, abstractmethod
from typing import Any
from crossroads.domain.models import Direction

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class SpawnVehicleCommand(Command):
    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, kernel: Any):
        return kernel.spawn_vehicle(self.direction)

class SpawnRandomVehicleCommand(Command):
    def execute(self, kernel: Any):
        return kernel.spawn_random_vehicle()
