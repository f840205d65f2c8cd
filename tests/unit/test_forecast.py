"""Unit tests for the forecast fetcher: mock HTTP; success, missing data, errors."""
import pytest
from unittest.mock import MagicMock, patch
import requests

from mcp_servers.servers.weather.forecast import ForecastFetcher, extract_temperature


def _session_returning(payload=None, status_error=None, json_error=None):
    resp = MagicMock()
    if status_error:
        resp.raise_for_status.side_effect = status_error
    if json_error:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    session = MagicMock()
    session.get.return_value = resp
    return session


def test_extract_temperature():
    assert extract_temperature({"current": {"temperature_2m": 21.3}}) == 21.3
    assert extract_temperature({"current": {"temperature_2m": 5}}) == 5.0
    assert extract_temperature({"current": {"time": "2025-01-01T00:00"}}) is None
    assert extract_temperature({"current": None}) is None
    assert extract_temperature({"current": {"temperature_2m": "warm"}}) is None
    assert extract_temperature({"current": {"temperature_2m": True}}) is None
    assert extract_temperature([1, 2, 3]) is None
    assert extract_temperature(None) is None


def test_extract_temperature_rejects_out_of_range_numbers():
    assert extract_temperature({"current": {"temperature_2m": 10**400}}) is None
    assert extract_temperature({"current": {"temperature_2m": float("nan")}}) is None
    assert extract_temperature({"current": {"temperature_2m": float("inf")}}) is None
    assert extract_temperature({"current": {"temperature_2m": float("-inf")}}) is None


def test_fetch_huge_integer_is_absent():
    session = _session_returning({"current": {"temperature_2m": 10**400}})
    reading = ForecastFetcher(session=session).fetch(52.52, 13.41)
    assert reading.temperature_celsius is None
    assert reading.temperature_text == "unknown"


@patch("mcp_servers.servers.weather.forecast.requests.get")
def test_fetch_without_session_uses_one_request_per_call(mock_get):
    mock_get.return_value.json.return_value = {"current": {"temperature_2m": 21.3}}
    fetcher = ForecastFetcher(api_url="https://example.test/forecast")

    assert fetcher.fetch(52.52, 13.41).temperature_celsius == 21.3
    assert fetcher.fetch(48.85, 2.35).temperature_celsius == 21.3

    assert mock_get.call_count == 2
    assert mock_get.call_args_list[1].kwargs["params"]["latitude"] == 48.85


def test_fetch_success_sends_coordinates():
    session = _session_returning(
        {"latitude": 52.52, "current": {"time": "2025-06-01T12:00", "interval": 900, "temperature_2m": 21.3}}
    )
    fetcher = ForecastFetcher(api_url="https://example.test/forecast", timeout=3, session=session)

    reading = fetcher.fetch(52.52, 13.41)

    assert reading.temperature_celsius == 21.3
    assert reading.temperature_text == "21.3"
    args, kwargs = session.get.call_args
    assert args[0] == "https://example.test/forecast"
    assert kwargs["params"] == {"latitude": 52.52, "longitude": 13.41, "current": "temperature_2m"}
    assert kwargs["timeout"] == 3


def test_fetch_missing_field_is_absent():
    fetcher = ForecastFetcher(session=_session_returning({"current": {}}))
    reading = fetcher.fetch(52.52, 13.41)
    assert not reading.available
    assert reading.temperature_text == "unknown"


def test_fetch_http_error_is_absent():
    session = _session_returning(status_error=requests.HTTPError("500 Server Error"))
    reading = ForecastFetcher(session=session).fetch(0.0, 0.0)
    assert reading.temperature_celsius is None


def test_fetch_transport_error_is_absent():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("connection refused")
    reading = ForecastFetcher(session=session).fetch(0.0, 0.0)
    assert reading.temperature_celsius is None


def test_fetch_timeout_is_absent():
    session = MagicMock()
    session.get.side_effect = requests.Timeout("timed out")
    assert ForecastFetcher(session=session).fetch(1.0, 2.0).temperature_celsius is None


def test_fetch_malformed_json_is_absent():
    session = _session_returning(json_error=ValueError("Expecting value"))
    assert ForecastFetcher(session=session).fetch(1.0, 2.0).temperature_celsius is None


@pytest.mark.asyncio
async def test_fetch_async_runs_fetch():
    session = _session_returning({"current": {"temperature_2m": -3.5}})
    reading = await ForecastFetcher(session=session).fetch_async(64.1, -21.9)
    assert reading.temperature_celsius == -3.5
