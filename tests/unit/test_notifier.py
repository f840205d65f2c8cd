"""Unit tests for SessionNotifier: wire calls, token-less progress, swallowed failures."""
import pytest
from unittest.mock import AsyncMock

from mcp_servers.servers.weather.models import LogSeverity
from mcp_servers.servers.weather.notifier import LOGGER_NAME, SessionNotifier


@pytest.mark.asyncio
async def test_progress_is_sent_with_token():
    session = AsyncMock()
    notifier = SessionNotifier(session, related_request_id=7)

    await notifier.emit_progress("tok-1", 0.5, 1.0, "Start sampling")

    session.send_progress_notification.assert_awaited_once_with(
        progress_token="tok-1",
        progress=0.5,
        total=1.0,
        message="Start sampling",
        related_request_id=7,
    )


@pytest.mark.asyncio
async def test_progress_without_token_is_not_sent():
    session = AsyncMock()
    await SessionNotifier(session).emit_progress(None, 0.0, 1.0, "Retrieving weather forecast")
    session.send_progress_notification.assert_not_awaited()


@pytest.mark.asyncio
async def test_log_levels_map_to_mcp_levels():
    session = AsyncMock()
    notifier = SessionNotifier(session, related_request_id=3)

    await notifier.emit_log(LogSeverity.DEBUG, "a")
    await notifier.emit_log(LogSeverity.INFO, "b")
    await notifier.emit_log(LogSeverity.WARNING, "c")
    await notifier.emit_log(LogSeverity.ERROR, "d")

    levels = [c.kwargs["level"] for c in session.send_log_message.await_args_list]
    assert levels == ["debug", "info", "warning", "error"]
    first = session.send_log_message.await_args_list[0].kwargs
    assert first["data"] == "a"
    assert first["logger"] == LOGGER_NAME
    assert first["related_request_id"] == 3


@pytest.mark.asyncio
async def test_send_failures_do_not_propagate():
    session = AsyncMock()
    session.send_progress_notification.side_effect = RuntimeError("stream closed")
    session.send_log_message.side_effect = RuntimeError("stream closed")
    notifier = SessionNotifier(session)

    await notifier.emit_progress(1, 1.0, 1.0, "Task completed")
    await notifier.emit_log(LogSeverity.INFO, "still fine")
