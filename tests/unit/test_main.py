"""Unit tests for the CLI parser and the client's two-phase wiring."""
from unittest.mock import AsyncMock

import pytest

from weather_client.config import EventKind, WEATHER_SERVER_NAME
from weather_client.main import WeatherClient, build_parser


def test_parse_temperature_command():
    args = build_parser().parse_args(["temperature", "--lat", "52.52", "--lon", "13.41"])
    assert args.command == "temperature"
    assert (args.lat, args.lon) == (52.52, 13.41)
    assert args.no_sampling is False


def test_parse_chat_command_with_options():
    args = build_parser().parse_args(["--model", "llama3.1", "--no-sampling", "chat", "Is it cold?"])
    assert args.command == "chat"
    assert args.question == "Is it cold?"
    assert args.model == "llama3.1"
    assert args.no_sampling is True


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_nothing_is_registered_before_bind():
    client = WeatherClient(model="qwen3:8b")
    assert not client.registry.has(WEATHER_SERVER_NAME, EventKind.PROGRESS)
    assert not client.registry.has(WEATHER_SERVER_NAME, EventKind.SAMPLING)


def test_bind_registers_handlers_for_weather_server():
    client = WeatherClient(model="qwen3:8b")
    client.bind()
    for kind in (EventKind.PROGRESS, EventKind.LOGGING, EventKind.SAMPLING):
        assert client.registry.has(WEATHER_SERVER_NAME, kind)


def test_bind_without_sampling():
    client = WeatherClient(model="qwen3:8b")
    client.bind(sampling=False)
    assert not client.registry.has(WEATHER_SERVER_NAME, EventKind.SAMPLING)


@pytest.mark.asyncio
async def test_get_temperature_calls_tool_with_progress():
    client = WeatherClient(model="qwen3:8b")
    client.manager.call_tool = AsyncMock(return_value="Weather Poem: ...")

    assert await client.get_temperature(52.52, 13.41) == "Weather Poem: ..."

    args, kwargs = client.manager.call_tool.await_args
    assert args == ("get_temperature", {"latitude": 52.52, "longitude": 13.41})
    assert callable(kwargs["progress_callback"])
