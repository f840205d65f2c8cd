"""
Client configuration module.

Centralizes all configuration values and constants.
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load environment variables from .env file
load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

# Weather server (peer name is what the callback registrations are keyed on)
WEATHER_SERVER_NAME = os.environ.get("WEATHER_SERVER_NAME", "my-weather-server")
WEATHER_SERVER_COMMAND = sys.executable
WEATHER_SERVER_ARGS = ["-m", "mcp_servers.servers.weather.server"]

# Model configuration
OLLAMA_MODEL = os.environ.get("OLLAMA_MODEL", "qwen3:8b")
MAX_MCP_TOOL_ROUNDS = int(os.environ.get("MAX_MCP_TOOL_ROUNDS", "10"))

# Safety ceiling for a single tool call, in seconds
MCP_TOOL_TIMEOUT = float(os.environ.get("MCP_TOOL_TIMEOUT", "180"))


# Notification / request kinds a peer can send us
class EventKind:
    PROGRESS = "progress"
    LOGGING = "logging"
    SAMPLING = "sampling"
