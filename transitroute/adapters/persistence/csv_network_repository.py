from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Mapping, TypeVar

from transitroute.app.ports.output import INetworkRepository
from transitroute.domain.exceptions import DataSourceFailure, MalformedRecord
from transitroute.domain.models import (
    GeoPoint,
    Line,
    NetworkDataset,
    ScheduledVisit,
    Stop,
    TravelMode,
    VisitEntry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "routes": ("route_id", "route_type"),
    "stops": ("stop_id", "stop_name", "stop_lat", "stop_lon"),
    "trips": ("trip_id", "route_id"),
    "stop_times": ("trip_id", "departure_time", "stop_id", "stop_sequence"),
}


def _field(row: Mapping[str, str | None], name: str) -> str:
    return (row.get(name) or "").strip()


def _required(row: Mapping[str, str | None], name: str) -> str:
    value = _field(row, name)
    if not value:
        raise MalformedRecord(f"missing {name}")
    return value


def _parse_line(row: Mapping[str, str | None]) -> Line:
    route_id = _required(row, "route_id")
    try:
        mode = TravelMode.parse(_required(row, "route_type"))
    except ValueError as exc:
        raise MalformedRecord(str(exc)) from exc
    if mode is TravelMode.WALK:
        raise MalformedRecord("WALK is not a line mode")
    return Line(
        id=route_id,
        mode=mode,
        short_name=_field(row, "route_short_name") or None,
        long_name=_field(row, "route_long_name") or None,
    )


def _parse_stop(row: Mapping[str, str | None]) -> Stop:
    stop_id = _required(row, "stop_id")
    name = _field(row, "stop_name") or stop_id
    try:
        location = GeoPoint.parse(_required(row, "stop_lat"), _required(row, "stop_lon"))
    except ValueError as exc:
        raise MalformedRecord(f"bad coordinates for stop {stop_id}: {exc}") from exc
    return Stop(id=stop_id, name=name, location=location)


def _parse_trip(row: Mapping[str, str | None]) -> tuple[str, str]:
    return _required(row, "trip_id"), _required(row, "route_id")


def _parse_visit(row: Mapping[str, str | None]) -> tuple[str, VisitEntry]:
    trip_id = _required(row, "trip_id")
    raw_seq = _required(row, "stop_sequence")
    try:
        sequence = int(raw_seq)
    except ValueError:
        raise MalformedRecord(f"bad stop_sequence {raw_seq!r}") from None
    return trip_id, VisitEntry(
        sequence=sequence,
        stop_id=_required(row, "stop_id"),
        departure_time=_required(row, "departure_time"),
    )


@dataclass(slots=True)
class CsvNetworkRepository(INetworkRepository):
    """Loads one or more timetable sources from directories of CSV files.

    Each source holds routes, stops, trips and stop_times files with a
    ``.csv`` or ``.txt`` extension and GTFS column names.

    Env vars:
      - NETWORK_DATA_PATHS: source directories separated by os.pathsep
        (used when no paths are given)

    Notes:
      - malformed rows are logged and skipped;
      - a source that cannot be read is logged, recorded in ``failures`` and
        skipped; loading fails only when every source fails.
    """

    base_paths: tuple[str | Path, ...] = ()
    failures: list[DataSourceFailure] = field(default_factory=list)

    def _sources(self) -> tuple[Path, ...]:
        if self.base_paths:
            return tuple(Path(p) for p in self.base_paths)
        raw = os.getenv("NETWORK_DATA_PATHS") or "data/network"
        return tuple(Path(p.strip()) for p in raw.split(os.pathsep) if p.strip())

    def load_dataset(self) -> NetworkDataset:
        self.failures.clear()
        sources = self._sources()

        dataset = NetworkDataset.empty()
        loaded = 0
        for source in sources:
            try:
                part = self.load_source(source)
            except DataSourceFailure as exc:
                logger.error("Skipping data source %s", source, exc_info=exc)
                self.failures.append(exc)
                continue
            dataset = dataset.merged(part)
            loaded += 1

        if sources and loaded == 0:
            raise self.failures[-1]
        return dataset

    def load_source(self, base: Path) -> NetworkDataset:
        """Load a single source directory; raises ``DataSourceFailure``."""

        if not base.is_dir():
            raise DataSourceFailure("not a directory", source=base)

        lines_by_id: dict[str, Line] = {}
        for line in self._read(base, "routes", _parse_line):
            lines_by_id[line.id] = line

        stops_by_id: dict[str, Stop] = {}
        for stop in self._read(base, "stops", _parse_stop):
            stops_by_id[stop.id] = stop

        line_id_by_trip: dict[str, str] = {}
        for trip_id, route_id in self._read(base, "trips", _parse_trip):
            line_id_by_trip[trip_id] = route_id

        entries_by_trip: dict[str, dict[int, VisitEntry]] = {}
        for trip_id, entry in self._read(base, "stop_times", _parse_visit):
            by_seq = entries_by_trip.setdefault(trip_id, {})
            if entry.sequence in by_seq:
                logger.warning(
                    "%s: duplicate stop_sequence %d in trip %s, row skipped",
                    base.name,
                    entry.sequence,
                    trip_id,
                )
                continue
            by_seq[entry.sequence] = entry

        visits_by_trip = {
            trip_id: ScheduledVisit(trip_id=trip_id, entries=tuple(by_seq.values()))
            for trip_id, by_seq in entries_by_trip.items()
        }

        return NetworkDataset(
            stops_by_id=stops_by_id,
            lines_by_id=lines_by_id,
            line_id_by_trip=line_id_by_trip,
            visits_by_trip=visits_by_trip,
        )

    def _locate(self, base: Path, name: str) -> Path:
        for suffix in (".csv", ".txt"):
            path = base / f"{name}{suffix}"
            if path.exists():
                return path
        raise DataSourceFailure(f"missing {name}.csv / {name}.txt", source=base)

    def _read(
        self, base: Path, name: str, parse: Callable[[Mapping[str, str | None]], T]
    ) -> Iterator[T]:
        path = self._locate(base, name)
        skipped = 0
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as fp:
                reader = csv.DictReader(fp)
                header = reader.fieldnames or []
                missing = [c for c in _REQUIRED_COLUMNS[name] if c not in header]
                if missing:
                    raise DataSourceFailure(
                        f"{path.name} lacks columns {', '.join(missing)}", source=base
                    )

                for row in reader:
                    try:
                        yield parse(row)
                    except MalformedRecord as exc:
                        skipped += 1
                        logger.warning("%s:%d: %s", path.name, reader.line_num, exc)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise DataSourceFailure(f"cannot read {path.name}: {exc}", source=base) from exc

        if skipped:
            logger.warning("%s: %d malformed rows skipped", path, skipped)
