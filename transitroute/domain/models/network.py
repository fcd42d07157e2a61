from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A named boarding point; ``name`` is what queries refer to."""

    id: str
    name: str
    location: GeoPoint


class TravelMode(str, Enum):
    WALK = "walk"
    BUS = "bus"
    TRAM = "tram"
    METRO = "metro"
    TRAIN = "train"

    @classmethod
    def parse(cls, raw: str) -> TravelMode:
        """Parse a mode name (``BUS``, ``tram``...) or a GTFS ``route_type``."""

        value = raw.strip()
        if value.isdigit():
            by_route_type = {0: cls.TRAM, 1: cls.METRO, 2: cls.TRAIN, 3: cls.BUS}
            try:
                return by_route_type[int(value)]
            except KeyError:
                raise ValueError(f"Unsupported route_type: {raw!r}") from None

        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown travel mode: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Line:
    """Named transit service with a single travel mode (GTFS routes.txt)."""

    id: str
    mode: TravelMode
    short_name: str | None = None
    long_name: str | None = None


@dataclass(frozen=True, slots=True)
class VisitEntry:
    sequence: int
    stop_id: str
    departure_time: str  # "HH:MM:SS", kept verbatim from the source


@dataclass(frozen=True, slots=True)
class ScheduledVisit:
    """Ordered stop-by-stop timetable of one trip."""

    trip_id: str
    entries: tuple[VisitEntry, ...]
    _departure_min_by_stop: Mapping[str, float] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        from transitroute.domain.algorithms.service_time import parse_time_of_day

        ordered = tuple(sorted(self.entries, key=lambda e: e.sequence))
        sequences = [e.sequence for e in ordered]
        if len(set(sequences)) != len(sequences):
            raise ValueError(f"Duplicate stop_sequence in trip {self.trip_id!r}")

        departures: dict[str, float] = {}
        for entry in ordered:
            try:
                departures[entry.stop_id] = parse_time_of_day(entry.departure_time)
            except ValueError:
                # Malformed times stay in the itinerary; no departure is recorded.
                continue

        object.__setattr__(self, "entries", ordered)
        object.__setattr__(
            self, "_departure_min_by_stop", MappingProxyType(departures)
        )

    def __iter__(self) -> Iterator[VisitEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def departure_min(self, stop_id: str) -> float | None:
        return self._departure_min_by_stop.get(stop_id)

    def departure_time(self, stop_id: str) -> str | None:
        """Raw scheduled time at ``stop_id`` (last visit wins on loops)."""

        found: str | None = None
        for entry in self.entries:
            if entry.stop_id == stop_id:
                found = entry.departure_time
        return found


@dataclass(frozen=True, slots=True)
class NetworkDataset:
    """Immutable view of the loaded network.

    Built once by the ingestion adapter, then shared by reference between the
    graph builder, the search engine and the presentation layer.
    """

    stops_by_id: Mapping[str, Stop]
    lines_by_id: Mapping[str, Line]
    line_id_by_trip: Mapping[str, str]
    visits_by_trip: Mapping[str, ScheduledVisit]

    def __post_init__(self) -> None:
        for name in (
            "stops_by_id",
            "lines_by_id",
            "line_id_by_trip",
            "visits_by_trip",
        ):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @classmethod
    def empty(cls) -> NetworkDataset:
        return cls(stops_by_id={}, lines_by_id={}, line_id_by_trip={}, visits_by_trip={})

    def line_for_trip(self, trip_id: str | None) -> Line | None:
        if trip_id is None:
            return None
        line_id = self.line_id_by_trip.get(trip_id)
        if line_id is None:
            return None
        return self.lines_by_id.get(line_id)

    def mode_for_trip(self, trip_id: str | None) -> TravelMode | None:
        line = self.line_for_trip(trip_id)
        return line.mode if line is not None else None

    def find_stop_id(self, name: str) -> str | None:
        """Case-insensitive exact match on the stop name; first match wins."""

        wanted = name.strip().casefold()
        for stop in self.stops_by_id.values():
            if stop.name.casefold() == wanted:
                return stop.id
        return None

    def merged(self, other: NetworkDataset) -> NetworkDataset:
        """Combine two sources; ``other`` wins when ids clash."""

        return NetworkDataset(
            stops_by_id={**self.stops_by_id, **other.stops_by_id},
            lines_by_id={**self.lines_by_id, **other.lines_by_id},
            line_id_by_trip={**self.line_id_by_trip, **other.line_id_by_trip},
            visits_by_trip={**self.visits_by_trip, **other.visits_by_trip},
        )
