"""Integration tests for the shelter recommendation command line."""
from __future__ import annotations

import json

import pytest

pytest.importorskip("pandas")

from scripts.recommend_shelters import main, parse_args, run


def test_cli_recommends_from_bundled_catalog(capsys) -> None:
    exit_code = main(["--lat", "37.5172", "--lng", "127.0473"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [entry["rank"] for entry in payload] == [1, 2, 3]
    assert payload[0]["shelter"]["id"] == "yeoksam-community-center"


def test_cli_lists_nearby_shelters_from_custom_catalog(tmp_path) -> None:
    catalog = tmp_path / "catalog.csv"
    catalog.write_text(
        "name,address,latitude,longitude,type,max_capacity\n"
        "Hall,Road,37.5172,127.0473,public,10\n",
        encoding="utf-8",
    )

    payload = run(
        parse_args(["--lat", "37.5172", "--lng", "127.0473", "--nearby", "--catalog", str(catalog)])
    )

    assert len(payload) == 1
    assert payload[0]["distance"] == 0.0
    assert payload[0]["occupancy_level"] == "low"


def test_cli_reports_invalid_coordinates() -> None:
    assert main(["--lat", "nan", "--lng", "127.0"]) == 1


def test_cli_nearby_list_is_sorted_and_searchable() -> None:
    by_distance = run(parse_args(["--lat", "37.4946", "--lng", "127.0631", "--nearby"]))
    distances = [entry["distance"] for entry in by_distance]
    assert by_distance[0]["id"] == "daechi-culture-center"
    assert distances == sorted(distances)

    by_rating = run(
        parse_args(["--lat", "37.4946", "--lng", "127.0631", "--nearby", "--sort", "rating"])
    )
    assert [entry["rating"] for entry in by_rating] == [4.7, 4.5, 4.3, 4.2, 4.1]

    searched = run(
        parse_args(["--lat", "37.4946", "--lng", "127.0631", "--nearby", "--search", "mall"])
    )
    assert [entry["id"] for entry in searched] == ["coex-mall"]


def test_cli_rejects_unknown_sort_key() -> None:
    with pytest.raises(SystemExit):
        parse_args(["--nearby", "--sort", "popularity"])
