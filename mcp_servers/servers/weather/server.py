"""
Weather MCP Server
==================
Exposes a single tool, `get_temperature`, that looks up the current
temperature for a coordinate pair and, if the client supports sampling,
asks the client's model for a poem about it.

While it runs the tool reports back to the caller:
  - log notifications (debug on start, info when data is missing,
    warning when sampling fails)
  - progress notifications 0% -> 50% (only when sampling) -> 100%

RUN DIRECTLY:
    python -m mcp_servers.servers.weather.server

The transport comes from WEATHER_MCP_TRANSPORT (stdio by default).
"""

import sys
from typing import Annotated, Any, Optional

from mcp.server.fastmcp import Context, FastMCP
from pydantic import Field

from mcp_servers.servers.weather.forecast import ForecastFetcher
from mcp_servers.servers.weather.models import ProgressToken, ToolInvocation
from mcp_servers.servers.weather.notifier import SessionNotifier
from mcp_servers.servers.weather.sampling import SamplingRequester, client_supports_sampling
from mcp_servers.servers.weather.settings import MCP_TRANSPORT, SERVER_NAME
from mcp_servers.servers.weather.temperature_tool import TemperatureTool
from mcp_servers.servers.weather.weather_descriptions import (
    GET_TEMPERATURE_DESCRIPTION,
    LATITUDE_DESCRIPTION,
    LONGITUDE_DESCRIPTION,
)

mcp = FastMCP(SERVER_NAME)

# Shared across invocations; neither holds per-call state.
forecast_fetcher = ForecastFetcher()
temperature_tool = TemperatureTool(forecast_fetcher)


def progress_token_of(ctx: Context) -> Optional[ProgressToken]:
    """The progress token the client put in the request's _meta, if any."""
    meta: Any = ctx.request_context.meta
    if meta is None:
        return None
    return meta.progressToken


@mcp.tool(description=GET_TEMPERATURE_DESCRIPTION)
async def get_temperature(
    latitude: Annotated[float, Field(description=LATITUDE_DESCRIPTION)],
    longitude: Annotated[float, Field(description=LONGITUDE_DESCRIPTION)],
    ctx: Context,
) -> str:
    invocation = ToolInvocation(
        latitude=latitude,
        longitude=longitude,
        progress_token=progress_token_of(ctx),
    )
    session = ctx.session
    notifier = SessionNotifier(session, related_request_id=ctx.request_id)
    requester = SamplingRequester(session, notifier, related_request_id=ctx.request_id)

    result = await temperature_tool.run(
        invocation,
        notifier,
        requester,
        sampling_available=client_supports_sampling(session),
    )
    return result.text


def main():
    print(f"[Weather] Starting '{SERVER_NAME}' on {MCP_TRANSPORT}", file=sys.stderr)
    mcp.run(transport=MCP_TRANSPORT)


if __name__ == "__main__":
    main()
