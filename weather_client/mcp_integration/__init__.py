"""
MCP (Model Context Protocol) integration module.
"""
from .callbacks import (
    CallbackRegistry,
    ClientCallbackHandlers,
    make_session_callbacks,
    register_client_handlers,
)
from .manager import McpToolManager
from .tool_loop import run_tool_loop

__all__ = [
    'CallbackRegistry',
    'ClientCallbackHandlers',
    'McpToolManager',
    'make_session_callbacks',
    'register_client_handlers',
    'run_tool_loop',
]
