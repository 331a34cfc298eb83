import json

from typer.testing import CliRunner

from fruit_company.cli import app
from helpers import APP_ID, KEY_ID, TEAM_ID

runner = CliRunner()

TOKEN_URL = "https://maps-api.apple.com/v1/token"
PLACES = {
    "results": [
        {
            "name": "Apple Park",
            "country": "United States",
            "countryCode": "US",
            "coordinate": {"latitude": 37.3349, "longitude": -122.009},
            "formattedAddressLines": ["1 Apple Park Way", "Cupertino, CA 95014"],
            "structuredAddress": {"locality": "Cupertino"},
        }
    ]
}


def _credential_args(key_file) -> list[str]:
    return ["--app", APP_ID, "--team", TEAM_ID, "--keyid", KEY_ID, "--keyfile", str(key_file)]


def test_geocode_cli_json(requests_mock, key_file):
    requests_mock.get(TOKEN_URL, json={"accessToken": "access", "expiresInSeconds": 1800})
    matcher = requests_mock.get("https://maps-api.apple.com/v1/geocode", json=PLACES)

    result = runner.invoke(
        app,
        ["geocode", "--query", "Apple Park", "--country", "US", "--json", *_credential_args(key_file)],
    )

    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert rows[0]["name"] == "Apple Park"
    assert rows[0]["latitude"] == 37.3349
    assert matcher.last_request.headers["Authorization"] == "Bearer access"


def test_reverse_geocode_cli_renders_table(requests_mock, key_file):
    requests_mock.get(TOKEN_URL, json={"accessToken": "access", "expiresInSeconds": 1800})
    requests_mock.get("https://maps-api.apple.com/v1/reverseGeocode", json=PLACES)

    result = runner.invoke(
        app,
        [
            "reverse-geocode",
            "--latitude",
            "37.3349",
            "--longitude",
            "-122.009",
            *_credential_args(key_file),
        ],
    )

    assert result.exit_code == 0
    assert "Places" in result.stdout
    assert "Apple Park" in result.stdout


def test_reverse_geocode_rejects_bad_coordinate(key_file):
    result = runner.invoke(
        app,
        [
            "reverse-geocode",
            "--latitude",
            "north",
            "--longitude",
            "-122.009",
            *_credential_args(key_file),
        ],
    )

    assert result.exit_code != 0
    assert "not a valid coordinate" in result.stderr


def test_cli_reports_service_errors(requests_mock, key_file):
    requests_mock.get(TOKEN_URL, json={"accessToken": "access", "expiresInSeconds": 1800})
    requests_mock.get(
        "https://maps-api.apple.com/v1/geocode",
        status_code=500,
        json={"message": "boom", "details": ["x"]},
    )

    result = runner.invoke(app, ["geocode", "--query", "x", *_credential_args(key_file)])

    assert result.exit_code == 1
    assert "Request failed (status 500): boom (x)" in result.stderr


def test_cli_reports_token_rejection(requests_mock, key_file):
    requests_mock.get(
        TOKEN_URL,
        status_code=401,
        json={"message": "Not Authorized", "details": []},
    )

    result = runner.invoke(app, ["geocode", "--query", "x", *_credential_args(key_file)])

    assert result.exit_code == 1
    assert "Request failed (status 401): Not Authorized" in result.stderr


def test_cli_missing_key_file_is_bad_parameter(tmp_path):
    result = runner.invoke(
        app,
        ["geocode", "--query", "x", *_credential_args(tmp_path / "missing.p8")],
    )

    assert result.exit_code == 2
    assert "not found" in result.stderr


def test_cli_reads_credentials_from_env(requests_mock, key_file):
    requests_mock.get(TOKEN_URL, json={"accessToken": "access", "expiresInSeconds": 1800})
    requests_mock.get("https://maps-api.apple.com/v1/geocode", json={"results": []})

    result = runner.invoke(
        app,
        ["geocode", "--query", "nowhere"],
        env={
            "FRUIT_APP_ID": APP_ID,
            "FRUIT_TEAM_ID": TEAM_ID,
            "FRUIT_KEY_ID": KEY_ID,
            "FRUIT_KEY_FILE": str(key_file),
        },
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_song_search_cli_table(requests_mock, key_file):
    requests_mock.get(
        "https://api.music.apple.com/v1/catalog/us/search",
        json={
            "results": {
                "songs": {
                    "data": [
                        {
                            "id": "1440857781",
                            "type": "songs",
                            "attributes": {
                                "name": "Shake It Off",
                                "artistName": "Taylor Swift",
                                "albumName": "1989",
                                "durationInMillis": 219200,
                            },
                        }
                    ]
                }
            }
        },
    )

    result = runner.invoke(app, ["song-search", "--query", "shake", *_credential_args(key_file)])

    assert result.exit_code == 0
    assert "Shake It Off" in result.stdout
    assert "3:39" in result.stdout


def test_weather_cli_prints_json(requests_mock, key_file):
    matcher = requests_mock.get(
        "https://weatherkit.apple.com/api/v1/weather/en/37.3349/-122.009",
        json={"currentWeather": {"asOf": "2024-06-01T12:00:00Z", "temperature": 20.0}},
    )

    result = runner.invoke(
        app,
        [
            "weather",
            "--latitude",
            "37.3349",
            "--longitude",
            "-122.009",
            "--days",
            "2",
            *_credential_args(key_file),
        ],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["currentWeather"]["asOf"] == "2024-06-01T12:00:00+00:00"
    assert "dataSets=currentWeather" in matcher.last_request.url


def test_weather_cli_verbose_logs_events(requests_mock, key_file):
    requests_mock.get(
        "https://weatherkit.apple.com/api/v1/weather/en/1.0/2.0",
        json={},
    )

    result = runner.invoke(
        app,
        [
            "weather",
            "--latitude",
            "1.0",
            "--longitude",
            "2.0",
            "--verbose",
            *_credential_args(key_file),
        ],
    )

    assert result.exit_code == 0
    assert "refreshing WeatherToken(is_valid=False" in result.stderr
    assert "sending GET https://weatherkit.apple.com/api/v1/weather/en/1.0/2.0" in result.stderr


def test_music_token_cli_prints_jwt(key_file):
    result = runner.invoke(app, ["music-token", *_credential_args(key_file)])

    assert result.exit_code == 0
    assert result.stdout.strip().count(".") == 2
