"""
get_temperature orchestration.

One invocation walks these steps, in order, and always ends with a result:

  START     DEBUG log + 0% progress
  FETCHING  forecast lookup (INFO log when the provider had no data)
  FETCHED   sampling capability check
  SAMPLING  50% progress, ask the client for a poem   (only if supported)
  DONE      100% progress, format the result string

No step is allowed to fail the call: a missing forecast becomes "unknown",
a missing or failed poem becomes the fallback text.
"""

import sys
from typing import List, Optional

from mcp_servers.servers.weather.forecast import ForecastFetcher
from mcp_servers.servers.weather.models import LogSeverity, ToolInvocation, ToolResult
from mcp_servers.servers.weather.settings import (
    NO_SAMPLING_TEXT,
    SAMPLING_MODEL_HINTS,
    SAMPLING_STYLE,
    SAMPLING_SYSTEM_PROMPT,
)

POEM_PROMPT_TEMPLATE = """For a weather forecast (temperature is in Celsius): {temperature}.
At location with latitude: {latitude} and longitude: {longitude}.
Please write an epic poem about this forecast using a {style} style.
"""

RESULT_TEMPLATE = """Weather Poem: {poem}
about the weather: {temperature}°C at location with latitude: {latitude} and longitude: {longitude}
"""


class TemperatureTool:
    """
    Composes the forecast fetcher, notifier and sampling requester into one
    request/response cycle. Holds configuration only, so a single instance
    serves concurrent invocations.
    """

    def __init__(
        self,
        fetcher: ForecastFetcher,
        system_prompt: str = SAMPLING_SYSTEM_PROMPT,
        style: str = SAMPLING_STYLE,
        model_hints: Optional[List[str]] = None,
        fallback_text: str = NO_SAMPLING_TEXT,
    ):
        self.fetcher = fetcher
        self.system_prompt = system_prompt
        self.style = style
        self.model_hints = list(SAMPLING_MODEL_HINTS if model_hints is None else model_hints)
        self.fallback_text = fallback_text

    def build_prompt(self, temperature_text: str, latitude: float, longitude: float) -> str:
        return POEM_PROMPT_TEMPLATE.format(
            temperature=temperature_text,
            latitude=latitude,
            longitude=longitude,
            style=self.style,
        )

    async def run(
        self,
        invocation: ToolInvocation,
        notifier,
        requester,
        sampling_available: bool,
    ) -> ToolResult:
        lat, lon = invocation.latitude, invocation.longitude
        token = invocation.progress_token
        print(f"[Weather] getTemperature called: lat={lat}, lon={lon}", file=sys.stderr)

        # ── START ──────────────────────────────────────────────────────
        await notifier.emit_log(
            LogSeverity.DEBUG,
            f"Call getTemperature Tool with latitude: {lat} and longitude: {lon}",
        )
        await notifier.emit_progress(token, 0.0, 1.0, "Retrieving weather forecast")

        # ── FETCHING ───────────────────────────────────────────────────
        reading = await self.fetcher.fetch_async(lat, lon)
        if not reading.available:
            print(
                f"[Weather] WARNING: No temperature data from API for lat={lat}, lon={lon}",
                file=sys.stderr,
            )
            await notifier.emit_log(
                LogSeverity.INFO,
                f"No temperature data returned from weather API for latitude: {lat}, longitude: {lon}",
            )
        temperature_text = reading.temperature_text
        print(f"[Weather] Derived temperature: {temperature_text}", file=sys.stderr)

        # ── FETCHED → SAMPLING | SKIP_SAMPLING ─────────────────────────
        poem = self.fallback_text
        if sampling_available:
            print("[Weather] Client supports sampling; starting sampling.", file=sys.stderr)
            await notifier.emit_progress(token, 0.5, 1.0, "Start sampling")
            outcome = await requester.request_sample(
                self.system_prompt,
                self.build_prompt(temperature_text, lat, lon),
                self.model_hints,
                capability_available=True,
            )
            if outcome.ok:
                poem = outcome.text

        # ── DONE ───────────────────────────────────────────────────────
        await notifier.emit_progress(token, 1.0, 1.0, "Task completed")
        print(f"[Weather] getTemperature completed for lat={lat}, lon={lon}", file=sys.stderr)

        return ToolResult(
            text=RESULT_TEMPLATE.format(
                poem=poem,
                temperature=temperature_text,
                latitude=lat,
                longitude=lon,
            )
        )
