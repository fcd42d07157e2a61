from __future__ import annotations

from pathlib import Path

import pytest

from transitroute.cli import main


def _data_args(*sources: Path) -> list[str]:
    args: list[str] = []
    for source in sources:
        args += ["--data", str(source)]
    return args


@pytest.mark.integration
def test_prints_legs_and_total_time(
    metro_source: Path, rail_source: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        _data_args(metro_source, rail_source)
        + ["Gare de l'Ouest", "Liège-Guillemins", "07:50:00"]
    )

    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out[0] == "Take METRO 1 from Gare de l'Ouest (08:00:00) to Arts-Loi (08:12:00)"
    assert out[1].startswith("Walk from Arts-Loi (08:12:00) to Bruxelles-Central (08:19:")
    assert out[2] == (
        "Take TRAIN IC from Bruxelles-Central (08:30:00) to Liège-Guillemins (09:30:00)"
    )
    assert out[3] == "Total travel time: 100 min"


@pytest.mark.integration
def test_route_options_follow_the_time(
    metro_source: Path, rail_source: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        _data_args(metro_source, rail_source)
        + ["Gare de l'Ouest", "Liège-Guillemins", "07:50:00", "-BUS", "-NTRAIN"]
    )

    assert code == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Total travel time: 100 min"


@pytest.mark.integration
def test_no_route_exits_with_one(
    metro_source: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(_data_args(metro_source) + ["Delta", "Gare de l'Ouest", "08:00:00"])

    assert code == 1
    assert capsys.readouterr().out.startswith("No route found:")


@pytest.mark.integration
def test_already_there(metro_source: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(_data_args(metro_source) + ["Stockel", "STOCKEL", "08:00:00"]) == 0
    assert capsys.readouterr().out.strip() == "Already at Stockel."


@pytest.mark.integration
@pytest.mark.parametrize("bad_time", ["8:00", "08:61:00", "soon"])
def test_bad_time_exits_with_two(metro_source: Path, bad_time: str) -> None:
    assert main(_data_args(metro_source) + ["Stockel", "Delta", bad_time]) == 2


@pytest.mark.integration
def test_unreadable_data_exits_with_two(tmp_path: Path) -> None:
    assert main(_data_args(tmp_path / "missing") + ["Stockel", "Delta", "08:00:00"]) == 2
