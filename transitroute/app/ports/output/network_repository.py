from __future__ import annotations

from abc import ABC, abstractmethod

from transitroute.domain.models import NetworkDataset


class INetworkRepository(ABC):
    """Port for loading timetable data into an in-memory network."""

    @abstractmethod
    def load_dataset(self) -> NetworkDataset:
        raise NotImplementedError
