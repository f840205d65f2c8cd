"""
Sampling requester.

Asks the connected client to run a completion for us (MCP
`sampling/createMessage`). Failure is always recoverable: this module turns
every problem into a SamplingOutcome.failure and reports it as a WARNING
notification; it never raises into the tool.
"""

import sys
from typing import Any, Optional

from mcp import types

from mcp_servers.servers.weather.models import LogSeverity, SamplingOutcome, SamplingRequest
from mcp_servers.servers.weather.notifier import SessionNotifier
from mcp_servers.servers.weather.settings import NO_SAMPLING_TEXT, SAMPLING_MAX_TOKENS


def client_supports_sampling(session: Any) -> bool:
    """Check the capabilities the client announced at initialize time."""
    return session.check_client_capability(
        types.ClientCapabilities(sampling=types.SamplingCapability())
    )


def build_create_message_kwargs(request: SamplingRequest, max_tokens: int) -> dict:
    """Translate a SamplingRequest into ServerSession.create_message() kwargs."""
    kwargs = {
        "messages": [
            types.SamplingMessage(
                role="user",
                content=types.TextContent(type="text", text=request.user_message),
            )
        ],
        "max_tokens": max_tokens,
        "system_prompt": request.system_prompt,
    }
    if request.model_hints:
        kwargs["model_preferences"] = types.ModelPreferences(
            hints=[types.ModelHint(name=hint) for hint in request.model_hints]
        )
    return kwargs


class SamplingRequester:
    def __init__(
        self,
        session: Any,
        notifier: SessionNotifier,
        related_request_id: Optional[Any] = None,
        max_tokens: int = SAMPLING_MAX_TOKENS,
    ):
        self._session = session
        self._notifier = notifier
        self._related_request_id = related_request_id
        self._max_tokens = max_tokens

    async def request_sample(
        self,
        system_prompt: str,
        user_message: str,
        model_hints: list[str],
        capability_available: bool,
    ) -> SamplingOutcome:
        if not capability_available:
            return SamplingOutcome.failure(NO_SAMPLING_TEXT)

        request = SamplingRequest(
            system_prompt=system_prompt,
            user_message=user_message,
            model_hints=model_hints,
        )
        try:
            result = await self._session.create_message(
                **build_create_message_kwargs(request, self._max_tokens),
                related_request_id=self._related_request_id,
            )
        except Exception as e:
            print(
                f"[Sampling] Sampling failed; falling back to default text: {e!r}",
                file=sys.stderr,
            )
            await self._notifier.emit_log(
                LogSeverity.WARNING,
                f"Sampling failed, falling back to default text: {e}",
            )
            return SamplingOutcome.failure(str(e))

        content = getattr(result, "content", None)
        if not isinstance(content, types.TextContent):
            reason = f"sampling response has no text content ({type(content).__name__})"
            print(f"[Sampling] {reason}; falling back to default text.", file=sys.stderr)
            await self._notifier.emit_log(
                LogSeverity.WARNING,
                f"Sampling failed, falling back to default text: {reason}",
            )
            return SamplingOutcome.failure(reason)

        print("[Sampling] Received sampling response successfully.", file=sys.stderr)
        return SamplingOutcome.success(content.text)
