from abc import ABC, abstractmethod


class ReloadTriggerPort(ABC):
    @abstractmethod
    def reload(self) -> None:
        """Discard every cached aggregate so dependents rebuild from a fresh fetch."""
        raise NotImplementedError
