from abc import ABC, abstractmethod


class ReplayGenerator(ABC):
    @abstractmethod
    def produce(self, table) -> str:
        """Cut a clip for `table` and return the URL it can be played from."""
        ...
