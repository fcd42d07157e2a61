from .csv_network_repository import CsvNetworkRepository

__all__ = [
    "CsvNetworkRepository",
]
