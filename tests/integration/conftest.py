from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Sequence

import pytest


def write_table(
    path: Path, header: Sequence[str], rows: Iterable[Sequence[str]]
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fp:
        writer = csv.writer(fp)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def write_source(
    base: Path,
    *,
    routes: Iterable[Sequence[str]],
    stops: Iterable[Sequence[str]],
    trips: Iterable[Sequence[str]],
    stop_times: Iterable[Sequence[str]],
    suffix: str = ".csv",
) -> Path:
    write_table(
        base / f"routes{suffix}",
        ("route_id", "route_short_name", "route_long_name", "route_type"),
        routes,
    )
    write_table(
        base / f"stops{suffix}", ("stop_id", "stop_name", "stop_lat", "stop_lon"), stops
    )
    write_table(base / f"trips{suffix}", ("trip_id", "route_id"), trips)
    write_table(
        base / f"stop_times{suffix}",
        ("trip_id", "departure_time", "stop_id", "stop_sequence"),
        stop_times,
    )
    return base


@pytest.fixture
def metro_source(tmp_path: Path) -> Path:
    return write_source(
        tmp_path / "stib",
        routes=[
            ("STIB-1", "1", "Gare de l'Ouest - Stockel", "METRO"),
            ("STIB-71", "71", "De Brouckère - Delta", "BUS"),
        ],
        stops=[
            ("S1", "Gare de l'Ouest", "50.8489", "4.3210"),
            ("S2", "Arts-Loi", "50.8455", "4.3695"),
            ("S3", "Stockel", "50.8390", "4.4420"),
            ("S4", "Delta", "50.8180", "4.4030"),
        ],
        trips=[("T1", "STIB-1"), ("T2", "STIB-71")],
        stop_times=[
            ("T1", "08:00:00", "S1", "1"),
            ("T1", "08:12:00", "S2", "2"),
            ("T1", "08:25:00", "S3", "3"),
            ("T2", "08:20:00", "S2", "1"),
            ("T2", "08:40:00", "S4", "2"),
        ],
    )


@pytest.fixture
def rail_source(tmp_path: Path) -> Path:
    # Bruxelles-Central is ~613 m from Arts-Loi: within walking range.
    return write_source(
        tmp_path / "sncb",
        routes=[("SNCB-IC", "IC", "Bruxelles - Liège", "2")],
        stops=[
            ("N1", "Bruxelles-Central", "50.8460", "4.3640"),
            ("N2", "Liège-Guillemins", "50.6240", "5.5670"),
        ],
        trips=[("IC1", "SNCB-IC")],
        stop_times=[
            ("IC1", "08:30:00", "N1", "1"),
            ("IC1", "09:30:00", "N2", "2"),
        ],
        suffix=".txt",
    )


@pytest.fixture
def make_source():
    return write_source
