"""
Ollama tool-calling loop.

Chat mode: the model sees the MCP tools, decides to call one (e.g.
get_temperature for "How warm is it in Berlin?"), we route the call to the
server, feed the result back, and repeat until the model answers in text or
the round limit is hit.
"""

from typing import List, Dict, Any

from ..config import MAX_MCP_TOOL_ROUNDS
from ..core.thread_pool import run_in_thread
from ..llm.ollama_provider import OllamaChatBackend
from .manager import McpToolManager

# Keep huge tool outputs from blowing the model's context window
MAX_TOOL_RESULT_CHARS = 100000


async def run_tool_loop(
    question: str,
    manager: McpToolManager,
    backend: OllamaChatBackend,
    max_rounds: int = MAX_MCP_TOOL_ROUNDS,
) -> str:
    """Ask `question` with the manager's tools available; return the answer."""
    messages: List[Dict[str, Any]] = [{"role": "user", "content": question}]
    tools = manager.get_ollama_tools()

    response = await run_in_thread(backend.chat, messages, tools)

    rounds = 0
    while response.message.tool_calls and rounds < max_rounds:
        rounds += 1

        # Add the assistant's message (requesting tools) once per turn
        assistant_msg = response.message.model_dump()
        assistant_msg.pop("thinking", None)
        messages.append(assistant_msg)

        for tool_call in response.message.tool_calls:
            fn_name = tool_call.function.name
            fn_args = tool_call.function.arguments
            server_name = manager.get_tool_server_name(fn_name)

            print(f"[MCP] Tool call: {fn_name}({fn_args}) from server '{server_name}'")

            try:
                result = await manager.call_tool(fn_name, dict(fn_args))
            except Exception as e:
                result = f"Error executing tool: {e}"

            result_str = str(result)
            if len(result_str) > MAX_TOOL_RESULT_CHARS:
                print(f"[MCP] Truncating large tool output ({len(result_str)} chars)")
                result_str = result_str[:MAX_TOOL_RESULT_CHARS] + "... [Output truncated due to length]"

            messages.append({"role": "tool", "content": result_str})

        response = await run_in_thread(backend.chat, messages, tools)

    if response.message.tool_calls:
        print(f"[MCP] Stopped after {max_rounds} tool round(s)")

    return response.message.content or ""
