from abc import ABC, abstractmethod

class Controller(ABC):
    """Chooses how long a lane's light stays green."""

    gates_traffic = True

    @abstractmethod
    def green_duration(self, queue_length: int, capacity: int) -> float:
        pass
