"""
Forecast fetcher for the Open-Meteo API.

HOW IT WORKS:
1. One GET to the forecast endpoint with `latitude`, `longitude` and
   `current=temperature_2m` as query parameters.
2. The JSON body is expected to look like
   {"current": {"time": "...", "interval": 900, "temperature_2m": 21.3}, ...}
   Everything except `current.temperature_2m` is ignored.
3. Anything else (timeouts, non-2xx, bad JSON, missing fields, a value that
   is not a number) yields an empty ForecastReading. The caller decides what
   to tell the user; nothing here raises.

There are no retries and no caching: one best-effort attempt per call.
"""

import asyncio
import concurrent.futures
import functools
import math
import sys
from typing import Any, Optional

import requests

from mcp_servers.servers.weather.models import ForecastReading
from mcp_servers.servers.weather.settings import WEATHER_API_URL, WEATHER_HTTP_TIMEOUT

# requests is blocking, so lookups run here instead of on the event loop.
_forecast_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=4, thread_name_prefix="forecast-worker"
)


def extract_temperature(payload: Any) -> Optional[float]:
    """Pull `current.temperature_2m` out of a decoded response body."""
    if not isinstance(payload, dict):
        return None
    current = payload.get("current")
    if not isinstance(current, dict):
        return None
    value = current.get("temperature_2m")
    # bool is an int subclass, but True is not a temperature
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        temperature = float(value)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(temperature):
        return None
    return temperature


class ForecastFetcher:
    """
    Fetches the current temperature for a coordinate pair.

    A single instance is shared by every invocation and holds only its
    settings. Each lookup is its own `requests.get`, so concurrent calls from
    the thread pool share no connection state. `session` swaps in another
    object with a `get()` (tests pass a mock).
    """

    def __init__(
        self,
        api_url: str = WEATHER_API_URL,
        timeout: float = WEATHER_HTTP_TIMEOUT,
        session: Any = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._session = session

    def fetch(self, latitude: float, longitude: float) -> ForecastReading:
        """Blocking lookup. Returns an empty reading on any failure."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": "temperature_2m",
        }
        try:
            http = self._session or requests
            resp = http.get(self.api_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            print(f"[Weather] Forecast request failed: {e}", file=sys.stderr)
            return ForecastReading()
        except ValueError as e:
            print(f"[Weather] Forecast response is not JSON: {e}", file=sys.stderr)
            return ForecastReading()

        print(f"[Weather] Weather API response: {str(payload)[:200]}", file=sys.stderr)
        return ForecastReading(temperature_celsius=extract_temperature(payload))

    async def fetch_async(self, latitude: float, longitude: float) -> ForecastReading:
        """Run fetch() in the forecast thread pool."""
        loop = asyncio.get_running_loop()
        call = functools.partial(self.fetch, latitude, longitude)
        return await loop.run_in_executor(_forecast_executor, call)
