"""
Weather server configuration.

All values come from the environment (a `.env` file at the project root is
loaded first) so the server can be tuned without code changes.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[3]

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

SERVER_NAME = "Weather Forecast"

# Open-Meteo forecast endpoint
WEATHER_API_URL = os.environ.get(
    "WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast"
)
WEATHER_HTTP_TIMEOUT = float(os.environ.get("WEATHER_HTTP_TIMEOUT", "10"))

# Sampling prompt content
SAMPLING_SYSTEM_PROMPT = os.environ.get(
    "WEATHER_SAMPLING_SYSTEM_PROMPT", "You are a poet!"
)
SAMPLING_STYLE = os.environ.get("WEATHER_SAMPLING_STYLE", "Shakespearean")
SAMPLING_MODEL_HINTS = [
    hint.strip()
    for hint in os.environ.get("WEATHER_SAMPLING_MODEL_HINTS", "zhipuai").split(",")
    if hint.strip()
]
SAMPLING_MAX_TOKENS = int(os.environ.get("WEATHER_SAMPLING_MAX_TOKENS", "500"))

NO_SAMPLING_TEXT = "MCP client doesn't provide sampling capability."

# stdio | sse | streamable-http
MCP_TRANSPORT = os.environ.get("WEATHER_MCP_TRANSPORT", "stdio")
