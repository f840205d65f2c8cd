"""
Client-side callback handlers.

The weather server talks back to us three ways while a tool runs:

  progress  notifications/progress   -> printed
  logging   notifications/message    -> printed
  sampling  sampling/createMessage   -> answered by the chat backend

HOW WIRING WORKS:
─────────────────
Handlers are registered in a CallbackRegistry keyed on
(peer name, event kind) at startup. When the manager connects to a server
it asks make_session_callbacks() for the ClientSession keyword arguments;
those thin adapters look the handler up in the registry each time an event
arrives, so a handler registered (or re-bound) after connect is still used.

The chat backend is attached to ClientCallbackHandlers in a separate bind()
step, after both objects exist.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from mcp import types

from ..config import EventKind
from ..core.thread_pool import run_in_thread

Handler = Callable[..., Awaitable[Any]]


def nn(value: Optional[str]) -> str:
    """None -> empty string."""
    return value if value is not None else ""


class CallbackRegistry:
    """Maps (peer name, event kind) to the handler that serves it."""

    def __init__(self):
        self._handlers: Dict[Tuple[str, str], Handler] = {}

    def register(self, peer_name: str, kind: str, handler: Handler):
        key = (peer_name, kind)
        if key in self._handlers:
            raise ValueError(f"A {kind} handler is already registered for '{peer_name}'")
        self._handlers[key] = handler

    def lookup(self, peer_name: str, kind: str) -> Handler | None:
        return self._handlers.get((peer_name, kind))

    def has(self, peer_name: str, kind: str) -> bool:
        return (peer_name, kind) in self._handlers


def _first_message_text(params: Any) -> str:
    """Text of the first sampling message; empty string if there is none."""
    messages = getattr(params, "messages", None) or []
    if not messages:
        return ""
    content = getattr(messages[0], "content", None)
    # Newer protocol revisions allow a list of content blocks per message
    if isinstance(content, list):
        content = next((c for c in content if getattr(c, "type", None) == "text"), None)
    if getattr(content, "type", None) != "text":
        return ""
    return nn(getattr(content, "text", None))


class ClientCallbackHandlers:
    """
    Stateless handlers for one or more upstream servers.

    Backend errors in on_sampling are not caught: they propagate to the MCP
    session, which answers the server with a JSON-RPC error. The server side
    turns that into its own fallback text.
    """

    def __init__(self):
        self._backend: Any = None

    def bind(self, backend: Any):
        """Attach the text-generation backend (anything with generate())."""
        self._backend = backend

    async def on_progress(self, params: types.ProgressNotificationParams) -> None:
        print(
            f"MCP PROGRESS: [{params.progressToken}] progress: {params.progress} "
            f"total: {params.total} message: {getattr(params, 'message', None)}"
        )

    async def on_logging(self, params: types.LoggingMessageNotificationParams) -> None:
        source = f" ({params.logger})" if params.logger else ""
        print(f"MCP LOGGING: [{params.level}]{source} {params.data}")

    async def on_sampling(self, params: types.CreateMessageRequestParams) -> types.CreateMessageResult:
        print(f"MCP SAMPLING: {params}")

        if self._backend is None:
            raise RuntimeError("No chat backend bound; call bind() before serving sampling requests")

        system_prompt = nn(getattr(params, "systemPrompt", None))
        user_text = _first_message_text(params)

        reply = await run_in_thread(self._backend.generate, system_prompt, user_text)

        return types.CreateMessageResult(
            role="assistant",
            content=types.TextContent(type="text", text=nn(reply)),
            model=getattr(self._backend, "model", "unknown"),
        )


def register_client_handlers(
    registry: CallbackRegistry,
    handlers: ClientCallbackHandlers,
    peer_name: str,
    sampling: bool = True,
):
    """Register all of `handlers` for one peer. Without sampling the client
    does not advertise the sampling capability to that peer."""
    registry.register(peer_name, EventKind.PROGRESS, handlers.on_progress)
    registry.register(peer_name, EventKind.LOGGING, handlers.on_logging)
    if sampling:
        registry.register(peer_name, EventKind.SAMPLING, handlers.on_sampling)


def make_session_callbacks(registry: CallbackRegistry, peer_name: str) -> Dict[str, Any]:
    """
    Build the ClientSession callback kwargs for `peer_name`.

    The sampling capability is advertised at initialize time, so
    sampling_callback is only passed when a sampling handler is registered
    now. The other two are always installed and are no-ops for a peer
    without handlers.
    """

    async def logging_callback(params: types.LoggingMessageNotificationParams) -> None:
        handler = registry.lookup(peer_name, EventKind.LOGGING)
        if handler:
            await handler(params)

    async def message_handler(message: Any) -> None:
        if isinstance(message, Exception):
            print(f"[MCP] Error from '{peer_name}': {message}")
            return
        if not isinstance(message, types.ServerNotification):
            return
        if isinstance(message.root, types.ProgressNotification):
            handler = registry.lookup(peer_name, EventKind.PROGRESS)
            if handler:
                await handler(message.root.params)

    kwargs: Dict[str, Any] = {
        "logging_callback": logging_callback,
        "message_handler": message_handler,
    }

    if registry.has(peer_name, EventKind.SAMPLING):

        async def sampling_callback(context: Any, params: types.CreateMessageRequestParams):
            handler = registry.lookup(peer_name, EventKind.SAMPLING)
            return await handler(params)

        kwargs["sampling_callback"] = sampling_callback

    return kwargs
