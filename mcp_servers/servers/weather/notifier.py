"""
Progress and log notifications back to the calling client.

Both kinds are fire-and-forget: a failed send is printed to stderr and
otherwise ignored, it never fails the tool call.
"""

import sys
from typing import Any, Optional

from mcp_servers.servers.weather.models import (
    LogEvent,
    LogSeverity,
    ProgressEvent,
    ProgressToken,
)

LOGGER_NAME = "weather"


class SessionNotifier:
    """
    Sends ProgressEvent / LogEvent objects over an MCP ServerSession.

    `related_request_id` ties the notifications to the tool request so
    transports that multiplex requests (streamable HTTP) route them to the
    right stream.
    """

    def __init__(self, session: Any, related_request_id: Optional[Any] = None):
        self._session = session
        self._related_request_id = related_request_id

    async def emit_progress(
        self,
        token: Optional[ProgressToken],
        completed: float,
        total: float,
        label: str,
    ) -> None:
        event = ProgressEvent(token=token, completed=completed, total=total, label=label)
        print(
            f"[Weather] Progress [{event.token}] {event.completed}/{event.total}: {event.label}",
            file=sys.stderr,
        )
        if event.token is None:
            # Progress notifications require a token the client asked for.
            return
        try:
            await self._session.send_progress_notification(
                progress_token=event.token,
                progress=event.completed,
                total=event.total,
                message=event.label,
                related_request_id=self._related_request_id,
            )
        except Exception as e:
            print(f"[Weather] Failed to send progress notification: {e}", file=sys.stderr)

    async def emit_log(self, severity: LogSeverity, message: str) -> None:
        event = LogEvent(severity=severity, message=message)
        try:
            await self._session.send_log_message(
                level=event.severity.value,
                data=event.message,
                logger=LOGGER_NAME,
                related_request_id=self._related_request_id,
            )
        except Exception as e:
            print(f"[Weather] Failed to send log notification: {e}", file=sys.stderr)
