class RoutingError(Exception):
    """Base exception for stop-to-stop query failures."""


class NoPathFound(RoutingError):
    """No sequence of rides and walks reaches the destination in time."""


class UnknownStop(NoPathFound):
    """A stop name given in a query matches no stop of the network."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown stop: {name!r}")
