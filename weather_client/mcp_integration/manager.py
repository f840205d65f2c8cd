"""
MCP Tool Manager.

Manages MCP server connections and tool routing for the weather client.
"""

import asyncio
import os
from typing import List, Dict, Any, Callable, Awaitable, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from ..config import PROJECT_ROOT, MCP_TOOL_TIMEOUT
from .callbacks import CallbackRegistry, make_session_callbacks

ProgressCallback = Callable[[float, Optional[float], Optional[str]], Awaitable[None]]


def tool_result_text(result: Any) -> str:
    """Join the text blocks of a CallToolResult."""
    output_parts = []
    for block in result.content:
        if hasattr(block, "text"):
            output_parts.append(block.text)
        else:
            output_parts.append(str(block))
    return "\n".join(output_parts) if output_parts else "Tool returned no output."


class McpToolManager:
    """
    Manages MCP server connections and tool routing.

    It:
    1. Launches MCP servers as child processes (stdio transport)
    2. Installs the progress / logging / sampling callbacks registered for
       that server name in the CallbackRegistry
    3. Discovers tools and converts their schemas to Ollama format
    4. Routes tool calls to the server that owns them
    """

    def __init__(self, registry: CallbackRegistry, tool_timeout: float = MCP_TOOL_TIMEOUT):
        self.registry = registry
        self.tool_timeout = tool_timeout
        self._tool_registry: Dict[str, Any] = {}  # tool_name -> {session, server_name}
        self._connections: Dict[
            str, Any
        ] = {}  # server_name -> {session, stdio_ctx, session_ctx}
        self._ollama_tools: List[Dict] = []

    async def connect_server(
        self, server_name: str, command: str, args: list, env: dict = None
    ) -> bool:
        """Connect to an MCP server by launching it as a subprocess.

        Returns False (and leaves the manager usable) if the server could not
        be started.
        """
        try:
            # The child resolves "mcp_servers.servers..." from the project root
            if env is None:
                env = {**os.environ}
            project_root_str = str(PROJECT_ROOT)
            existing_pypath = env.get("PYTHONPATH", "")
            if existing_pypath:
                if project_root_str not in existing_pypath.split(os.pathsep):
                    env["PYTHONPATH"] = project_root_str + os.pathsep + existing_pypath
            else:
                env["PYTHONPATH"] = project_root_str

            server_params = StdioServerParameters(command=command, args=args, env=env)

            stdio_ctx = stdio_client(server_params)
            read, write = await stdio_ctx.__aenter__()

            session_ctx = ClientSession(
                read, write, **make_session_callbacks(self.registry, server_name)
            )
            session = await session_ctx.__aenter__()
            await session.initialize()
        except Exception as e:
            print(f"[MCP] ERROR connecting to '{server_name}': {e}")
            return False

        self._connections[server_name] = {
            "session": session,
            "stdio_ctx": stdio_ctx,
            "session_ctx": session_ctx,
        }
        await self.register_tools(server_name, session)
        return True

    async def register_tools(self, server_name: str, session: ClientSession):
        """Discover a connected session's tools and make them routable."""
        tools_result = await session.list_tools()
        for tool in tools_result.tools:
            self._tool_registry[tool.name] = {
                "session": session,
                "server_name": server_name,
            }
            self._ollama_tools.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description or "",
                        "parameters": tool.inputSchema
                        if tool.inputSchema
                        else {"type": "object", "properties": {}},
                    },
                }
            )
            print(f"[MCP] Registered tool: {tool.name} (from {server_name})")

        print(f"[MCP] Connected to '{server_name}' — {len(tools_result.tools)} tool(s)")

    async def call_tool(
        self,
        tool_name: str,
        arguments: dict,
        progress_callback: ProgressCallback | None = None,
    ) -> str:
        """Route a tool call to the correct MCP server.

        Passing a progress_callback makes the session attach a progress
        token to the request, so the server reports progress for it.
        """
        if tool_name not in self._tool_registry:
            return f"Error: Unknown tool '{tool_name}'"

        entry = self._tool_registry[tool_name]
        session = entry["session"]

        try:
            result = await asyncio.wait_for(
                session.call_tool(
                    tool_name, arguments=arguments, progress_callback=progress_callback
                ),
                timeout=self.tool_timeout,
            )
        except asyncio.TimeoutError:
            server = entry.get("server_name", "unknown")
            return f"Error: Tool '{tool_name}' (server '{server}') timed out after {self.tool_timeout:.0f}s"

        text = tool_result_text(result)
        if result.isError:
            return f"Error: {text}"
        return text

    def get_ollama_tools(self) -> List[Dict] | None:
        """Return tool definitions in Ollama format, or None if no tools."""
        return self._ollama_tools if self._ollama_tools else None

    def get_tool_server_name(self, tool_name: str) -> str:
        """Get the server name that owns a tool."""
        entry = self._tool_registry.get(tool_name)
        return entry["server_name"] if entry else "unknown"

    async def cleanup(self):
        """Disconnect from all MCP servers."""
        for name, conn in list(self._connections.items()):
            try:
                await conn["session_ctx"].__aexit__(None, None, None)
                await conn["stdio_ctx"].__aexit__(None, None, None)
                print(f"[MCP] Disconnected from '{name}'")
            except Exception as e:
                print(f"[MCP] Error disconnecting from '{name}': {e}")
        self._connections.clear()
        self._tool_registry.clear()
        self._ollama_tools.clear()
