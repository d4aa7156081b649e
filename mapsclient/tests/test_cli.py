import json

import pytest
from typer.testing import CliRunner

from mapsclient.cli import app
from mapsclient.config import API_KEY_VARIABLES, FALLBACK_KEY_VARIABLE


runner = CliRunner()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for variable, _ in API_KEY_VARIABLES.values():
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.delenv(FALLBACK_KEY_VARIABLE, raising=False)
    monkeypatch.setattr("mapsclient.cli.setup_logging", lambda level: None)


@pytest.fixture
def with_keys(clean_env, monkeypatch):
    monkeypatch.setenv(FALLBACK_KEY_VARIABLE, "test-key")


def test_geocode_table(fake_requests, with_keys, white_house):
    fake_requests(white_house)
    result = runner.invoke(app, ["geocode", "white house"])
    assert result.exit_code == 0
    assert "United States" in result.output
    assert "38.8976763,-77.0365298" in result.output


def test_geocode_json_output(fake_requests, with_keys, white_house):
    fake_requests(white_house)
    result = runner.invoke(app, ["--output", "json", "geocode", "white house"])
    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert rows[0]["State"] == "District of Columbia"


def test_geocode_zero_results_notice(fake_requests, with_keys, zero_results):
    fake_requests(zero_results)
    result = runner.invoke(app, ["geocode", "nowhere"])
    assert result.exit_code == 0
    assert "No results found for 'nowhere'" in result.output


def test_geocode_coordinates_pipe_into_timezone(fake_requests, with_keys, white_house):
    fake_requests(white_house)
    geocoded = runner.invoke(app, ["geocode", "--coordinates-only", "white house"])
    assert geocoded.stdout.strip() == "38.8976763,-77.0365298"

    dummy = fake_requests(
        {
            "status": "OK",
            "dstOffset": 3600,
            "rawOffset": -18000,
            "timeZoneId": "America/New_York",
            "timeZoneName": "Eastern Daylight Time",
        }
    )
    result = runner.invoke(app, ["--output", "csv", "timezone"], input=geocoded.stdout)
    assert result.exit_code == 0
    assert dummy.calls[0].params["location"] == "38.8976763,-77.0365298"
    assert result.stdout.splitlines()[0] == "Coordinates,TimeZone,TimeZoneId,LocalTime"


def test_geocode_coordinates_only_json_output(fake_requests, with_keys, white_house):
    fake_requests(white_house)
    result = runner.invoke(app, ["--output", "json", "geocode", "--coordinates-only", "white house"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "38.8976763,-77.0365298"


def test_geolocate_rejects_zero_max_access_points(with_keys):
    result = runner.invoke(app, ["geolocate", "--max-access-points", "0"])
    assert result.exit_code != 0


def test_missing_key_exits_with_instructions(fake_requests, clean_env, white_house):
    dummy = fake_requests(white_house)
    result = runner.invoke(app, ["geocode", "white house"])
    assert result.exit_code == 1
    assert "GoogleGeocode_API_Key" in result.output
    assert "get-api-key" in result.output
    assert dummy.calls == []


def test_nearby_without_keywords(fake_requests, with_keys):
    dummy = fake_requests({"status": "ZERO_RESULTS", "results": []})
    result = runner.invoke(app, ["nearby", "38.8976763,-77.0365298", "--type", "cafe"])
    assert result.exit_code == 0
    assert "keyword" not in dummy.calls[0].params


def test_distance_transit(fake_requests, with_keys):
    fake_requests(
        {
            "status": "OK",
            "origin_addresses": ["A"],
            "destination_addresses": ["B"],
            "rows": [
                {
                    "elements": [
                        {
                            "status": "OK",
                            "duration": {"text": "1 hour", "value": 3600},
                            "distance": {"text": "10 km", "value": 10000},
                            "fare": {"currency": "EUR", "value": 2.9, "text": "€2.90"},
                        }
                    ]
                }
            ],
        }
    )
    result = runner.invoke(app, ["--output", "json", "distance", "A", "B", "--mode", "transit"])
    assert json.loads(result.stdout)[0]["Currency"] == "EUR"


def test_bad_output_format(with_keys):
    result = runner.invoke(app, ["--output", "xml", "geocode", "x"])
    assert result.exit_code != 0
