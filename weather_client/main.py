"""
Weather client command line.

Commands:
    python -m weather_client.main temperature --lat 52.52 --lon 13.41
    python -m weather_client.main chat "How warm is it in Berlin right now?"

Options:
    --model NAME     Ollama model used for sampling and chat
    --no-sampling    Do not offer sampling to the server (it falls back)
"""

import argparse
import asyncio
import sys
from typing import Optional

from .config import (
    OLLAMA_MODEL,
    WEATHER_SERVER_ARGS,
    WEATHER_SERVER_COMMAND,
    WEATHER_SERVER_NAME,
)
from .llm.ollama_provider import OllamaChatBackend
from .mcp_integration.callbacks import (
    CallbackRegistry,
    ClientCallbackHandlers,
    register_client_handlers,
)
from .mcp_integration.manager import McpToolManager
from .mcp_integration.tool_loop import run_tool_loop


class WeatherClient:
    """
    Owns the client's components.

    Construction happens in two phases: __init__ builds every component on
    its own, bind() wires the backend into the handlers and registers the
    handlers for the weather server. Only then is it safe to connect().
    """

    def __init__(self, model: str = OLLAMA_MODEL, server_name: str = WEATHER_SERVER_NAME):
        self.server_name = server_name
        self.registry = CallbackRegistry()
        self.handlers = ClientCallbackHandlers()
        self.backend = OllamaChatBackend(model=model)
        self.manager = McpToolManager(self.registry)

    def bind(self, sampling: bool = True):
        self.handlers.bind(self.backend)
        register_client_handlers(self.registry, self.handlers, self.server_name, sampling=sampling)

    async def connect(self) -> bool:
        return await self.manager.connect_server(
            self.server_name, WEATHER_SERVER_COMMAND, WEATHER_SERVER_ARGS
        )

    async def get_temperature(self, latitude: float, longitude: float) -> str:
        async def show_progress(progress: float, total: Optional[float], message: Optional[str]):
            pct = int(100 * progress / total) if total else int(progress)
            print(f"[{'#' * (pct // 10):<10}] {pct:3d}% {message or ''}")

        return await self.manager.call_tool(
            "get_temperature",
            {"latitude": latitude, "longitude": longitude},
            progress_callback=show_progress,
        )

    async def chat(self, question: str) -> str:
        return await run_tool_loop(question, self.manager, self.backend)

    async def cleanup(self):
        await self.manager.cleanup()


async def run(args: argparse.Namespace) -> int:
    client = WeatherClient(model=args.model)
    client.bind(sampling=not args.no_sampling)

    if not await client.connect():
        print(f"Could not connect to '{client.server_name}'", file=sys.stderr)
        return 1

    try:
        if args.command == "temperature":
            print(await client.get_temperature(args.lat, args.lon))
        else:
            print(await client.chat(args.question))
    finally:
        await client.cleanup()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-client",
        description="Talk to the weather MCP server",
    )
    parser.add_argument("--model", default=OLLAMA_MODEL, help="Ollama model name")
    parser.add_argument(
        "--no-sampling",
        action="store_true",
        help="Do not advertise the sampling capability",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    temp_parser = subparsers.add_parser("temperature", help="Call get_temperature directly")
    temp_parser.add_argument("--lat", type=float, required=True, help="Latitude")
    temp_parser.add_argument("--lon", type=float, required=True, help="Longitude")

    chat_parser = subparsers.add_parser("chat", help="Ask the model, with the server's tools")
    chat_parser.add_argument("question", help="Question for the model")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
